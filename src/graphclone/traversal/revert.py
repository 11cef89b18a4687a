"""In-place reversion of an object to a snapshot of its earlier state.

The target keeps its identity: only its storage is overwritten with deep
copies of the snapshot's storage. Code that already holds a reference to
the target sees the restored state.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Any

from graphclone.core.allocation import native_method
from graphclone.core.arrays import Array
from graphclone.core.classify import NodeKind, TypeClassifier
from graphclone.core.errors import RevertError
from graphclone.core.fields import get_field, instance_dict, iter_fields, set_field
from graphclone.core.types import MISSING
from graphclone.traversal.cloner import GraphCloner

logger = logging.getLogger(__name__)


class RevertEngine:
    """Overwrites a target's state with a deep copy of a snapshot's state.

    Args:
        classifier: Decides which values are shared when copying snapshot state.
        trace: Emit a DEBUG record for every copied node.
    """

    def __init__(self, classifier: TypeClassifier, trace: bool = False) -> None:
        self._classifier = classifier
        self._trace = trace

    def revert(self, target: Any, snapshot: Any) -> GraphCloner | None:
        """Restore ``target`` from ``snapshot`` in place.

        Every field of the snapshot is deep-copied into the target, including
        private and read-only fields. Fields set on the target but absent on
        the snapshot are removed. Container contents are replaced.

        Args:
            target: Live object to restore.
            snapshot: Object of the same runtime type holding the state to restore.

        Returns:
            The cloner used (one identity map for the whole call), or None if
            nothing was done.

        Raises:
            RevertError: If the runtime types differ or the target cannot be
                changed in place.
        """
        if target is snapshot or target is None or snapshot is None:
            return None
        if type(target) is not type(snapshot):
            raise RevertError(
                f"Cannot revert {type(target).__qualname__} "
                f"from a {type(snapshot).__qualname__} snapshot"
            )
        kind = self._classifier.classify(target)
        if kind in (NodeKind.IMMUTABLE, NodeKind.VALUE, NodeKind.WEAKREF):
            raise RevertError(f"{type(target).__qualname__} cannot be changed in place")

        cloner = GraphCloner(self._classifier, trace=self._trace)
        stop: type | None = None
        if isinstance(target, Array):
            self._revert_array(target, snapshot, cloner)
            stop = Array
        elif kind is NodeKind.ARRAY:
            self._revert_sequence(target, snapshot, cloner)
        elif kind is NodeKind.MAPPING:
            self._revert_mapping(target, snapshot, cloner)
        elif kind is NodeKind.SET:
            self._revert_set(target, snapshot, cloner)
        self._revert_fields(target, snapshot, cloner, stop)
        return cloner

    def _revert_fields(
        self, target: Any, snapshot: Any, cloner: GraphCloner, stop: type | None
    ) -> None:
        restored: set[str] = set()
        for field in iter_fields(snapshot, stop):
            value = get_field(snapshot, field)
            set_field(target, field, value if value is MISSING else cloner.clone(value))
            if field.in_dict:
                restored.add(field.name)

        namespace = instance_dict(target)
        if namespace is not None:
            for name in [name for name in namespace if name not in restored]:
                logger.debug("Dropping %s.%s absent from snapshot", type(target).__name__, name)
                del namespace[name]

    def _revert_array(self, target: Array, snapshot: Array, cloner: GraphCloner) -> None:
        if target.lengths != snapshot.lengths or target.lower_bounds != snapshot.lower_bounds:
            raise RevertError(
                f"Array shape {target.lengths}@{target.lower_bounds} does not match "
                f"snapshot shape {snapshot.lengths}@{snapshot.lower_bounds}"
            )
        for index in snapshot.indices():
            target[index] = cloner.clone(snapshot[index])

    def _revert_sequence(self, target: Any, snapshot: Any, cloner: GraphCloner) -> None:
        cls = type(target)
        items = [cloner.clone(item) for item in native_method(cls, "__iter__")(snapshot)]
        if isinstance(target, deque):
            if target.maxlen != snapshot.maxlen:
                raise RevertError(
                    f"deque maxlen {target.maxlen} does not match "
                    f"snapshot maxlen {snapshot.maxlen}"
                )
            native_method(cls, "clear")(target)
            native_method(cls, "extend")(target, items)
        else:
            native_method(cls, "__setitem__")(target, slice(None), items)

    def _revert_mapping(self, target: Any, snapshot: Any, cloner: GraphCloner) -> None:
        cls = type(target)
        items = [
            (cloner.clone(key), cloner.clone(value))
            for key, value in native_method(cls, "items")(snapshot)
        ]
        native_method(cls, "clear")(target)
        setitem = native_method(cls, "__setitem__")
        for key, value in items:
            setitem(target, key, value)
        if isinstance(target, defaultdict):
            target.default_factory = cloner.clone(snapshot.default_factory)

    def _revert_set(self, target: Any, snapshot: Any, cloner: GraphCloner) -> None:
        cls = type(target)
        items = [cloner.clone(item) for item in native_method(cls, "__iter__")(snapshot)]
        native_method(cls, "clear")(target)
        add = native_method(cls, "add")
        for item in items:
            add(target, item)
