"""Exception hierarchy for graph traversal operations."""

from __future__ import annotations


class GraphCloneError(Exception):
    """Base class for all graphclone errors."""

    pass


class AllocationError(GraphCloneError, TypeError):
    """Raised when an instance cannot be allocated without running its constructor.

    A partially built clone is never returned in place of a failed allocation.

    Attributes:
        cls: The type that could not be allocated.
    """

    def __init__(self, cls: type, reason: str = "") -> None:
        self.cls = cls
        message = f"Cannot allocate {cls.__module__}.{cls.__qualname__} without a constructor"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RevertError(GraphCloneError, TypeError):
    """Raised when a target cannot be reverted from the given snapshot."""

    pass


class ConfigurationError(GraphCloneError, ValueError):
    """Raised for invalid graphclone settings."""

    pass
