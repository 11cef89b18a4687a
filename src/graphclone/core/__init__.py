"""Core functionalities: stateless primitives shared by every traversal.

Architecture Note:
    core/ contains pure, stateless building blocks: type classification,
    field enumeration and access, constructor-free allocation, and the
    bounded Array type. The per-call traversal engines that drive them live
    in traversal/.
"""

from graphclone.core.allocation import allocate, native_method
from graphclone.core.arrays import Array
from graphclone.core.classify import NodeKind, TypeClassifier, is_immutable
from graphclone.core.errors import (
    AllocationError,
    ConfigurationError,
    GraphCloneError,
    RevertError,
)
from graphclone.core.fields import (
    FieldRef,
    declared_slots,
    delete_field,
    get_field,
    iter_fields,
    set_field,
)
from graphclone.core.types import MISSING, Copy

__all__ = [
    # Types
    "Copy",
    "MISSING",
    # Errors
    "GraphCloneError",
    "AllocationError",
    "RevertError",
    "ConfigurationError",
    # Classification
    "NodeKind",
    "TypeClassifier",
    "is_immutable",
    # Fields
    "FieldRef",
    "declared_slots",
    "iter_fields",
    "get_field",
    "set_field",
    "delete_field",
    # Allocation
    "allocate",
    "native_method",
    # Arrays
    "Array",
]
