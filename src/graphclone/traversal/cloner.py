"""Deep cloning of arbitrary object graphs.

The cloner never calls ``__init__``, ``__copy__`` or ``__deepcopy__``.
Instances are allocated empty and their storage is filled field by field,
so any class works without opting in.

Usage:
    cloner = GraphCloner(TypeClassifier())
    copy = cloner.clone(entity)
"""

from __future__ import annotations

import logging
import weakref
from collections import defaultdict, deque
from collections.abc import Callable
from types import MethodType
from typing import Any, TypeVar, cast

from graphclone.core.allocation import allocate, native_method
from graphclone.core.arrays import Array, init_storage
from graphclone.core.classify import NodeKind, TypeClassifier
from graphclone.core.fields import get_field, iter_fields, set_field
from graphclone.core.types import MISSING, Copy
from graphclone.traversal.context import IdentityMap

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GraphCloner:
    """Produces deep copies that preserve cycles and shared references.

    One cloner holds one identity map: every object reachable from the
    values passed to `clone` is copied at most once. Create a new cloner
    per independent operation.

    Args:
        classifier: Decides which values are shared and how the rest are walked.
        visited: Identity map to use (default: a fresh one).
        trace: Emit a DEBUG record for every copied node.
    """

    def __init__(
        self,
        classifier: TypeClassifier,
        visited: IdentityMap | None = None,
        trace: bool = False,
    ) -> None:
        self._classifier = classifier
        self._visited = visited if visited is not None else IdentityMap()
        self._trace = trace
        self._copied = 0
        self._handlers: dict[NodeKind, Callable[[Any], Any]] = {
            NodeKind.ARRAY: self._clone_array,
            NodeKind.VALUE: self._clone_value,
            NodeKind.MAPPING: self._clone_mapping,
            NodeKind.SET: self._clone_set,
            NodeKind.WEAKREF: self._clone_weakref,
            NodeKind.REFERENCE: self._clone_reference,
        }

    @property
    def visited(self) -> IdentityMap:
        return self._visited

    @property
    def copied(self) -> int:
        """Number of nodes copied so far (shared immutables excluded)."""
        return self._copied

    def clone(self, value: T) -> Copy[T]:
        """Deep-copy a value.

        Args:
            value: Any object, including None.

        Returns:
            None for None, the value itself for immutable values, otherwise
            an independent copy.

        Raises:
            AllocationError: If a reachable object cannot be allocated
                without running its constructor.
        """
        if value is None:
            return value
        kind = self._classifier.classify(value)
        if kind is NodeKind.IMMUTABLE:
            return value
        existing = self._visited.get(value)
        if existing is not MISSING:
            return cast(T, existing)
        if self._trace:
            logger.debug("Copying %s node %s", kind.name, type(value).__qualname__)
        self._copied += 1
        return cast(T, self._handlers[kind](value))

    def _copy_fields(self, source: Any, clone: Any, stop: type | None = None) -> None:
        for field in iter_fields(source, stop):
            value = get_field(source, field)
            if value is MISSING:
                continue
            set_field(clone, field, self.clone(value))

    def _clone_array(self, source: Any) -> Any:
        cls = type(source)
        clone = allocate(cls)
        if isinstance(source, Array):
            init_storage(clone, source.lengths, source.lower_bounds)
            # Registered before recursing so self-referential arrays resolve
            self._visited.register(source, clone)
            for index in source.indices():
                clone[index] = self.clone(source[index])
            self._copy_fields(source, clone, stop=Array)
            return clone

        if isinstance(source, deque):
            native_method(cls, "__init__")(clone, (), source.maxlen)
        self._visited.register(source, clone)
        append = native_method(cls, "append")
        for item in native_method(cls, "__iter__")(source):
            append(clone, self.clone(item))
        self._copy_fields(source, clone)
        return clone

    def _clone_mapping(self, source: Any) -> Any:
        cls = type(source)
        clone = allocate(cls)
        self._visited.register(source, clone)
        if isinstance(source, defaultdict):
            clone.default_factory = self.clone(source.default_factory)
        setitem = native_method(cls, "__setitem__")
        for key, value in native_method(cls, "items")(source):
            setitem(clone, self.clone(key), self.clone(value))
        self._copy_fields(source, clone)
        return clone

    def _clone_set(self, source: Any) -> Any:
        cls = type(source)
        clone = allocate(cls)
        self._visited.register(source, clone)
        add = native_method(cls, "add")
        for item in native_method(cls, "__iter__")(source):
            add(clone, self.clone(item))
        self._copy_fields(source, clone)
        return clone

    def _clone_value(self, source: Any) -> Any:
        # Built from already-cloned parts, so registered only once complete.
        # A cycle through a part may have registered this source meanwhile.
        cls = type(source)
        if isinstance(source, MethodType):
            clone = MethodType(self.clone(source.__func__), self.clone(source.__self__))
        elif isinstance(source, tuple):
            items = [self.clone(item) for item in tuple.__iter__(source)]
            clone = tuple.__new__(cls, items)
        else:
            items = [self.clone(item) for item in frozenset.__iter__(source)]
            clone = frozenset.__new__(cls, items)
        existing = self._visited.get(source)
        if existing is not MISSING:
            return existing
        self._visited.register(source, clone)
        if not isinstance(source, MethodType):
            self._copy_fields(source, clone)
        return clone

    def _clone_weakref(self, source: weakref.ref[Any]) -> Any:
        referent = source()
        if referent is None:
            return source
        target = self.clone(referent)
        existing = self._visited.get(source)
        if existing is not MISSING:
            return existing
        if isinstance(source, weakref.KeyedRef):
            clone = type(source)(target, source.__callback__, self.clone(source.key))
        else:
            clone = type(source)(target, source.__callback__)
        self._visited.register(source, clone)
        return clone

    def _clone_reference(self, source: Any) -> Any:
        clone = allocate(type(source))
        # Registered before the field walk so self-references point at the clone
        self._visited.register(source, clone)
        self._copy_fields(source, clone)
        return clone
