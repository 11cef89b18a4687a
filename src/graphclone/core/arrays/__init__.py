"""Multi-dimensional arrays with lower bounds."""

from graphclone.core.arrays.models import Array, init_storage

__all__ = [
    "Array",
    "init_storage",
]
