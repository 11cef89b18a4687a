"""Deep structural equality of arbitrary object graphs.

Two graphs are equal when they have the same runtime types at every node,
the same fields set, and equal immutable leaves. ``__eq__`` is only used for
immutable values.

Cycle handling: once a pair (a, b) has been entered, meeting it again
answers True without descending. A pair reached twice through different
paths is therefore assumed equal the second time.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Callable, Hashable
from types import MethodType
from typing import Any

from graphclone.core.allocation import native_method
from graphclone.core.arrays import Array
from graphclone.core.classify import NodeKind, TypeClassifier
from graphclone.core.fields import get_field, iter_fields
from graphclone.core.types import MISSING
from graphclone.traversal.context import PairSet

logger = logging.getLogger(__name__)


class GraphComparer:
    """Compares object graphs structurally.

    Args:
        classifier: Decides which values are compared with ``==``.
        visited: Pair set to use (default: a fresh one).
        trace: Emit a DEBUG record for every compared pair.
    """

    def __init__(
        self,
        classifier: TypeClassifier,
        visited: PairSet | None = None,
        trace: bool = False,
    ) -> None:
        self._classifier = classifier
        self._visited = visited if visited is not None else PairSet()
        self._trace = trace
        self._handlers: dict[NodeKind, Callable[[Any, Any], bool]] = {
            NodeKind.ARRAY: self._equal_array,
            NodeKind.VALUE: self._equal_value,
            NodeKind.MAPPING: self._equal_mapping,
            NodeKind.SET: self._equal_set,
            NodeKind.WEAKREF: self._equal_weakref,
            NodeKind.REFERENCE: self._equal_fields,
        }

    @property
    def visited(self) -> PairSet:
        return self._visited

    def equal(self, a: Any, b: Any) -> bool:
        """Check two values for deep structural equality.

        Args:
            a: First value.
            b: Second value.

        Returns:
            True if both graphs have the same shape, types and leaf values.
        """
        if a is b:
            return True
        if a is None or b is None:
            return False
        if type(a) is not type(b):
            return False
        kind = self._classifier.classify(a)
        if kind is NodeKind.IMMUTABLE:
            return bool(a == b)
        if not self._visited.add(a, b):
            return True
        if self._trace:
            logger.debug("Comparing %s node %s", kind.name, type(a).__qualname__)
        return self._handlers[kind](a, b)

    def _equal_fields(self, a: Any, b: Any, stop: type | None = None) -> bool:
        fields = list(iter_fields(a, stop))
        if set(fields) != set(iter_fields(b, stop)):
            return False
        for field in fields:
            value_a = get_field(a, field)
            value_b = get_field(b, field)
            if value_a is MISSING or value_b is MISSING:
                if value_a is not value_b:
                    return False
                continue
            if not self.equal(value_a, value_b):
                return False
        return True

    def _equal_items(self, items_a: Any, items_b: Any) -> bool:
        return all(self.equal(x, y) for x, y in zip(items_a, items_b, strict=True))

    def _equal_array(self, a: Any, b: Any) -> bool:
        if isinstance(a, Array):
            if a.lengths != b.lengths or a.lower_bounds != b.lower_bounds:
                return False
            if not all(self.equal(a[index], b[index]) for index in a.indices()):
                return False
            return self._equal_fields(a, b, stop=Array)

        cls = type(a)
        length = native_method(cls, "__len__")
        if length(a) != length(b):
            return False
        if isinstance(a, deque) and a.maxlen != b.maxlen:
            return False
        iterate = native_method(cls, "__iter__")
        if not self._equal_items(iterate(a), iterate(b)):
            return False
        return self._equal_fields(a, b)

    def _equal_value(self, a: Any, b: Any) -> bool:
        if isinstance(a, MethodType):
            return self.equal(a.__func__, b.__func__) and self.equal(a.__self__, b.__self__)
        if isinstance(a, tuple):
            if len(a) != len(b):
                return False
            if not self._equal_items(tuple.__iter__(a), tuple.__iter__(b)):
                return False
        elif isinstance(a, frozenset) and not self._equal_members(
            list(frozenset.__iter__(a)), list(frozenset.__iter__(b))
        ):
            return False
        return self._equal_fields(a, b)

    def _equal_mapping(self, a: Any, b: Any) -> bool:
        cls = type(a)
        if native_method(cls, "__len__")(a) != native_method(cls, "__len__")(b):
            return False
        if isinstance(a, defaultdict) and not self.equal(a.default_factory, b.default_factory):
            return False
        items = native_method(cls, "items")
        keys = native_method(cls, "__iter__")
        if self._all_immutable(list(keys(a))):
            if _typed(keys(a)) != _typed(keys(b)):
                return False
            lookup = native_method(cls, "get")
            for key, value in items(a):
                if not self.equal(value, lookup(b, key, MISSING)):
                    return False
        # Keys hashed by identity never match their copies: pair entries instead
        elif not self._equal_members(list(items(a)), list(items(b))):
            return False
        return self._equal_fields(a, b)

    def _equal_set(self, a: Any, b: Any) -> bool:
        iterate = native_method(type(a), "__iter__")
        if not self._equal_members(list(iterate(a)), list(iterate(b))):
            return False
        return self._equal_fields(a, b)

    def _equal_weakref(self, a: Any, b: Any) -> bool:
        return self.equal(a(), b()) and self.equal(a.__callback__, b.__callback__)

    def _equal_members(self, members_a: list[Any], members_b: list[Any]) -> bool:
        """Pair up unordered members one-to-one.

        Candidates with the same fingerprint are tried first; the rest only
        when none of those match.
        """
        if len(members_a) != len(members_b):
            return False
        if self._all_immutable(members_a) and self._all_immutable(members_b):
            return _typed(members_a) == _typed(members_b)

        buckets: defaultdict[Hashable, list[Any]] = defaultdict(list)
        for candidate in members_b:
            buckets[self._fingerprint(candidate)].append(candidate)
        for member in members_a:
            key = self._fingerprint(member)
            if self._match(member, buckets.get(key, [])):
                continue
            if not any(self._match(member, bucket) for k, bucket in buckets.items() if k != key):
                return False
        return True

    def _match(self, member: Any, candidates: list[Any]) -> bool:
        for position, candidate in enumerate(candidates):
            # Failed trial matches must not leave pairs behind as "equal"
            mark = self._visited.mark()
            if self.equal(member, candidate):
                del candidates[position]
                return True
            self._visited.rollback(mark)
        return False

    def _fingerprint(self, value: Any, depth: int = 2) -> Hashable:
        """Cheap summary that is identical for any two deep-equal values."""
        kind = self._classifier.classify(value)
        if kind is NodeKind.IMMUTABLE:
            try:
                return (type(value), hash(value))
            except TypeError:
                return (type(value),)
        if depth == 0:
            return (type(value),)
        if isinstance(value, tuple):
            parts = tuple(self._fingerprint(v, depth - 1) for v in tuple.__iter__(value))
            return (type(value), parts)
        if kind is NodeKind.REFERENCE:
            fields = frozenset(
                (field.owner, field.name, self._fingerprint(get_field(value, field), depth - 1))
                for field in iter_fields(value)
            )
            return (type(value), fields)
        return (type(value),)

    def _all_immutable(self, values: list[Any]) -> bool:
        return all(self._classifier.classify(v) is NodeKind.IMMUTABLE for v in values)


def _typed(values: Any) -> frozenset[tuple[type, Any]]:
    # 1 == True == 1.0 hash alike; equal graphs also need equal leaf types
    return frozenset((type(v), v) for v in values)
