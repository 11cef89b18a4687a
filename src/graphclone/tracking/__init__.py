"""Snapshot-based change tracking for live entities.

Usage:
    from graphclone.tracking import Tracked

    tracked = Tracked(entity)
    ...
    if tracked.is_modified():
        tracked.reject()
"""

from graphclone.tracking.models import Tracked, TrackingStats

__all__ = [
    "Tracked",
    "TrackingStats",
]
