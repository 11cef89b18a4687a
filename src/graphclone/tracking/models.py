"""Change tracking for a live entity against a baseline snapshot.

Usage:
    tracked = Tracked(order)
    order.lines.append(extra_line)
    tracked.is_modified()   # True
    tracked.reject()        # order is restored in place
    tracked.accept()        # current state becomes the new baseline
"""

from __future__ import annotations

from dataclasses import dataclass

from graphclone.config import GraphSettings
from graphclone.core.types import Copy
from graphclone.traversal.operations import deep_clone, deep_equal, revert_from


@dataclass(slots=True)
class TrackingStats:
    """Counters for accepted and rejected changes."""

    accepted: int = 0
    rejected: int = 0


class Tracked[T]:
    """Wraps a live entity and the snapshot it can be reverted to.

    The entity is never replaced: `reject` restores its state in place, so
    other holders of the reference observe the restored values.

    Args:
        entity: Live object to track.
        settings: Settings passed to every clone, compare and revert.
    """

    __slots__ = ("_entity", "_baseline", "_settings", "stats")

    def __init__(self, entity: T, settings: GraphSettings | None = None) -> None:
        self._entity = entity
        self._settings = settings
        self._baseline: T = deep_clone(entity, settings=settings)
        self.stats = TrackingStats()

    @property
    def entity(self) -> T:
        return self._entity

    def baseline(self) -> Copy[T]:
        """Return a fresh deep copy of the baseline state."""
        return deep_clone(self._baseline, settings=self._settings)

    def is_modified(self) -> bool:
        """Check whether the entity differs from its baseline."""
        return not deep_equal(self._entity, self._baseline, settings=self._settings)

    def accept(self) -> None:
        """Make the entity's current state the new baseline."""
        self._baseline = deep_clone(self._entity, settings=self._settings)
        self.stats.accepted += 1

    def reject(self) -> None:
        """Restore the entity to its baseline state in place."""
        revert_from(self._entity, self._baseline, settings=self._settings)
        self.stats.rejected += 1

    def __repr__(self) -> str:
        state = "modified" if self.is_modified() else "clean"
        return f"Tracked({type(self._entity).__name__}, {state})"
