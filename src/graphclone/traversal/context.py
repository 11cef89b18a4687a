"""Per-call traversal contexts.

Each public operation creates its own context and drops it on return, so
calls over independent graphs never share state. Both contexts key on
``id()`` and keep a reference to every keyed object, so an id cannot be
recycled by another object while the call is running.
"""

from __future__ import annotations

from typing import Any

from graphclone.core.types import MISSING


class IdentityMap:
    """Maps source objects to their clones by identity.

    Two distinct but equal sources always get distinct clones; the same
    source reached twice resolves to the same clone.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}  # id(source) -> (source, clone)

    def get(self, source: Any) -> Any:
        """Return the clone registered for ``source``, or MISSING."""
        entry = self._entries.get(id(source))
        if entry is None:
            return MISSING
        return entry[1]

    def register(self, source: Any, clone: Any) -> None:
        self._entries[id(source)] = (source, clone)

    def __contains__(self, source: Any) -> bool:
        return id(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class PairSet:
    """Set of (a, b) object pairs already compared, by identity.

    Additions are journaled so a tentative comparison can be undone:

        mark = pairs.mark()
        if not comparer.equal(a, b):
            pairs.rollback(mark)
    """

    __slots__ = ("_pairs", "_journal")

    def __init__(self) -> None:
        self._pairs: dict[tuple[int, int], tuple[Any, Any]] = {}
        self._journal: list[tuple[int, int]] = []

    def add(self, a: Any, b: Any) -> bool:
        """Record a pair.

        Returns:
            True if the pair is new, False if it was already recorded.
        """
        key = (id(a), id(b))
        if key in self._pairs:
            return False
        self._pairs[key] = (a, b)
        self._journal.append(key)
        return True

    def mark(self) -> int:
        """Return a position that `rollback` can return to."""
        return len(self._journal)

    def rollback(self, mark: int) -> None:
        """Forget every pair added since ``mark``."""
        while len(self._journal) > mark:
            del self._pairs[self._journal.pop()]

    def __contains__(self, pair: tuple[Any, Any]) -> bool:
        a, b = pair
        return (id(a), id(b)) in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)
