"""graphclone: deep clone, deep equality and in-place revert for any object graph.

Usage:
    from graphclone import deep_clone, deep_equal, revert_from

    @dataclass
    class Person:
        name: str
        friends: list["Person"] = field(default_factory=list)

    alice = Person("Alice")
    alice.friends.append(alice)

    copy = deep_clone(alice)
    assert copy.friends[0] is copy
    assert deep_equal(alice, copy)

    alice.name = "Bob"
    revert_from(alice, copy)
    assert alice.name == "Alice"
"""

import logging

__version__ = "0.1.0"

# Core primitives
from graphclone.core import (
    MISSING,
    AllocationError,
    Array,
    ConfigurationError,
    Copy,
    GraphCloneError,
    NodeKind,
    RevertError,
    TypeClassifier,
    is_immutable,
)

# Configuration
from graphclone.config import GraphSettings, get_settings

# Tracking
from graphclone.tracking import Tracked, TrackingStats

# Traversal
from graphclone.traversal import (
    GraphCloner,
    GraphComparer,
    RevertEngine,
    deep_clone,
    deep_equal,
    default_classifier,
    revert_from,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Operations
    "deep_clone",
    "deep_equal",
    "revert_from",
    # Core
    "Copy",
    "MISSING",
    "Array",
    "NodeKind",
    "TypeClassifier",
    "is_immutable",
    "default_classifier",
    # Engines
    "GraphCloner",
    "GraphComparer",
    "RevertEngine",
    # Tracking
    "Tracked",
    "TrackingStats",
    # Config
    "GraphSettings",
    "get_settings",
    # Errors
    "GraphCloneError",
    "AllocationError",
    "RevertError",
    "ConfigurationError",
]
