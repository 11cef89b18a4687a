"""Type classification: which values can be shared and how the rest are walked.

Usage:
    classifier = TypeClassifier()
    classifier.is_immutable(str)            # True
    classifier.is_immutable(int | None)     # True
    classifier.classify([1, 2])             # NodeKind.ARRAY

    # Extend the allowlist for application value objects
    classifier = TypeClassifier(extra_immutable=(Money,))

Bound methods of Python functions are rebuilt around a copy of their
``__self__``. Bound methods of builtins such as ``items.append`` count as
builtin functions and are shared, so they keep acting on the source object.
Weak references are re-created against the copy of their referent.
"""

from __future__ import annotations

import datetime
import importlib
import ipaddress
import re
import types
import typing
import uuid
import weakref
from collections import deque
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, get_args, get_origin
from urllib.parse import DefragResult, ParseResult, SplitResult

from graphclone.core.arrays import Array
from graphclone.core.classify.models import NodeKind
from graphclone.core.errors import ConfigurationError

if TYPE_CHECKING:
    from graphclone.config import GraphSettings

IMMUTABLE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Enum,
    Decimal,
    Fraction,
    # Instants and intervals
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    # Identifiers and locators
    uuid.UUID,
    ParseResult,
    SplitResult,
    DefragResult,
    PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    range,
    slice,
    re.Pattern,
    type(NotImplemented),
    type(Ellipsis),
    # Code objects: cannot be allocated without running code
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.ModuleType,
    property,
)
"""Types whose instances are shared between a source graph and its clones."""

ARRAY_TYPES: tuple[type, ...] = (list, bytearray, deque, Array)


def _is_optional(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is typing.Union or origin is types.UnionType


def resolve_type(dotted: str) -> type:
    """Resolve a dotted name like ``"package.module.Type"`` to a class.

    Args:
        dotted: Fully qualified type name.

    Returns:
        The referenced class.

    Raises:
        ConfigurationError: If the name cannot be imported or is not a class.
    """
    module_name, _, attr_path = dotted.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Immutable type must be a dotted path, got {dotted!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        # Nested classes: "pkg.mod.Outer.Inner"
        if "." not in module_name:
            raise ConfigurationError(f"Cannot import {dotted!r}: {e}") from e
        obj = resolve_type(module_name)
    try:
        for part in attr_path.split("."):
            obj = getattr(obj, part)
    except AttributeError as e:
        raise ConfigurationError(f"Cannot resolve {dotted!r}: {e}") from e
    if not isinstance(obj, type):
        raise ConfigurationError(f"{dotted!r} is not a class")
    return obj


class TypeClassifier:
    """Decides how a value is treated by the traversal engines.

    The immutable allowlist is fixed at construction. Instances are never
    mutated afterwards, so one classifier can serve concurrent calls.

    Args:
        extra_immutable: Additional types whose instances are shared as-is.
    """

    __slots__ = ("_immutable",)

    def __init__(self, extra_immutable: Iterable[type] = ()) -> None:
        self._immutable: tuple[type, ...] = IMMUTABLE_TYPES + tuple(extra_immutable)

    @classmethod
    def from_settings(cls, settings: GraphSettings) -> TypeClassifier:
        """Build a classifier from settings.

        Args:
            settings: Settings carrying ``extra_immutable_types`` dotted names.

        Returns:
            Classifier with the resolved types added to the allowlist.

        Raises:
            ConfigurationError: If a configured type cannot be resolved.
        """
        return cls(resolve_type(name) for name in settings.extra_immutable_types)

    @property
    def immutable_types(self) -> tuple[type, ...]:
        return self._immutable

    def is_immutable(self, tp: Any) -> bool:
        """Check whether instances of a type (or annotation) can be shared.

        ``Optional[X]`` and ``X | None`` are immutable iff ``X`` is.

        Args:
            tp: A class or a type annotation.

        Returns:
            True if values of this type never need copying.
        """
        if _is_optional(tp):
            args = [arg for arg in get_args(tp) if arg is not type(None)]
            return len(args) == 1 and self.is_immutable(args[0])
        if get_origin(tp) is not None or not isinstance(tp, type):
            return False
        return issubclass(tp, self._immutable)

    def classify(self, value: Any) -> NodeKind:
        """Classify a runtime value.

        Args:
            value: Any object.

        Returns:
            The node kind deciding how the value is traversed.
        """
        tp = type(value)
        if issubclass(tp, self._immutable):
            return NodeKind.IMMUTABLE
        if issubclass(tp, ARRAY_TYPES):
            return NodeKind.ARRAY
        if issubclass(tp, dict):
            return NodeKind.MAPPING
        if issubclass(tp, set):
            return NodeKind.SET
        if issubclass(tp, weakref.ref):
            return NodeKind.WEAKREF
        if issubclass(tp, (tuple, frozenset, types.MethodType)):
            return NodeKind.VALUE
        return NodeKind.REFERENCE


def is_immutable(tp: Any) -> bool:
    """Check a type against the built-in immutable allowlist.

    Args:
        tp: A class or a type annotation.

    Returns:
        True if values of this type never need copying.
    """
    return TypeClassifier().is_immutable(tp)
