"""Core type definitions for graphclone."""

from __future__ import annotations

from typing import Final

type Copy[T] = T
"""Type alias indicating a value is an independent deep copy.

When you see `Copy[T]` in a return type, the returned value shares no mutable
state with its source. Mutating it never affects the original graph.
"""


class _Missing:
    """Marker for a declared slot that holds no value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()
