"""Public entry points: deep_clone, deep_equal, revert_from.

Each call builds its own traversal context, so concurrent calls over
independent graphs are safe without locking. Graphs must not be mutated by
another thread while a call is traversing them.

Deep, non-cyclic chains recurse once per level; a RecursionError on a
pathologically deep graph propagates to the caller.
"""

from __future__ import annotations

import logging

from graphclone.config import GraphSettings, get_settings
from graphclone.core.classify import TypeClassifier
from graphclone.core.types import Copy
from graphclone.traversal.cloner import GraphCloner
from graphclone.traversal.comparer import GraphComparer
from graphclone.traversal.revert import RevertEngine

logger = logging.getLogger(__name__)


def _resolve(settings: GraphSettings | None) -> tuple[TypeClassifier, bool]:
    if settings is None:
        settings = get_settings()
    return TypeClassifier.from_settings(settings), settings.log_traversal


def default_classifier() -> TypeClassifier:
    """Return the classifier for the current environment settings.

    Raises:
        ConfigurationError: If a configured immutable type cannot be resolved.
    """
    return TypeClassifier.from_settings(get_settings())


def deep_clone[T](source: T, *, settings: GraphSettings | None = None) -> Copy[T]:
    """Return an independent deep copy of ``source``.

    Immutable values are returned as-is. Cycles and shared references in the
    source are reproduced in the copy. Constructors are not called.

    Args:
        source: Any value, including None.
        settings: Overrides the environment settings.

    Returns:
        The deep copy (None for None).

    Raises:
        AllocationError: If a reachable object cannot be allocated without
            running its constructor.
    """
    classifier, trace = _resolve(settings)
    cloner = GraphCloner(classifier, trace=trace)
    clone = cloner.clone(source)
    logger.debug("deep_clone(%s): %d nodes copied", type(source).__name__, cloner.copied)
    return clone


def deep_equal[T](a: T, b: T, *, settings: GraphSettings | None = None) -> bool:
    """Check two values for deep structural equality.

    Runtime types are compared at every node, so values seen through a
    common base class are unequal when their concrete types differ.

    Args:
        a: First value.
        b: Second value.
        settings: Overrides the environment settings.

    Returns:
        True if both graphs are structurally equal.
    """
    classifier, trace = _resolve(settings)
    comparer = GraphComparer(classifier, trace=trace)
    result = comparer.equal(a, b)
    logger.debug(
        "deep_equal(%s): %s after %d pairs", type(a).__name__, result, len(comparer.visited)
    )
    return result


def revert_from[T](target: T, snapshot: T, *, settings: GraphSettings | None = None) -> None:
    """Restore ``target`` in place from a snapshot of the same type.

    Args:
        target: Live object whose identity is kept.
        snapshot: Earlier state, e.g. from `deep_clone`. Never modified.
        settings: Overrides the environment settings.

    Raises:
        RevertError: If the runtime types differ or the target is immutable.
        AllocationError: If snapshot state cannot be copied.
    """
    classifier, trace = _resolve(settings)
    cloner = RevertEngine(classifier, trace=trace).revert(target, snapshot)
    if cloner is not None:
        logger.debug("revert_from(%s): %d nodes copied", type(target).__name__, cloner.copied)
