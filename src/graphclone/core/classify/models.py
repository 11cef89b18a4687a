"""Node kinds recognized by the traversal engines."""

from __future__ import annotations

from enum import Enum, auto


class NodeKind(Enum):
    """How a runtime value is treated during clone, compare and revert."""

    IMMUTABLE = auto()  # Shared as-is, compared with ==
    VALUE = auto()  # tuple, frozenset, bound method; rebuilt from its parts
    ARRAY = auto()  # list, bytearray, deque, Array
    MAPPING = auto()  # dict and subclasses
    SET = auto()  # set and subclasses
    WEAKREF = auto()  # weakref.ref; rebound to the copy of its referent
    REFERENCE = auto()  # Any other object, walked field by field
