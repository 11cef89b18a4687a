"""Traversal engines and the public operations built on them."""

from graphclone.traversal.cloner import GraphCloner
from graphclone.traversal.comparer import GraphComparer
from graphclone.traversal.context import IdentityMap, PairSet
from graphclone.traversal.operations import (
    deep_clone,
    deep_equal,
    default_classifier,
    revert_from,
)
from graphclone.traversal.revert import RevertEngine

__all__ = [
    # Operations
    "deep_clone",
    "deep_equal",
    "revert_from",
    "default_classifier",
    # Engines
    "GraphCloner",
    "GraphComparer",
    "RevertEngine",
    # Contexts
    "IdentityMap",
    "PairSet",
]
