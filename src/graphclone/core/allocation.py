"""Allocation of instances without running their constructors."""

from __future__ import annotations

import logging
from types import FunctionType
from typing import Any

from graphclone.core.errors import AllocationError

logger = logging.getLogger(__name__)


def _native_base(cls: type) -> type:
    """Find the nearest class in the MRO whose ``__new__`` is not Python code.

    A ``__new__`` written in Python is stored as a staticmethod in the class
    namespace; builtin allocators are not.
    """
    for base in cls.__mro__:
        new = vars(base).get("__new__")
        if new is not None and not isinstance(new, staticmethod):
            return base
    return object


def allocate[T](cls: type[T]) -> T:
    """Create an empty instance of ``cls`` without calling ``__init__``.

    Python-level ``__new__`` overrides are skipped as well; the native
    allocator of the nearest builtin base is used instead, so the instance
    starts with no attributes set.

    Args:
        cls: Exact type to allocate.

    Returns:
        New, zero-state instance of ``cls``.

    Raises:
        AllocationError: If the native allocator refuses to run without arguments.
    """
    base = _native_base(cls)
    try:
        return base.__new__(cls)  # type: ignore[call-overload,no-any-return]
    except TypeError as e:
        logger.debug("Allocation of %s via %s.__new__ failed: %s", cls, base.__name__, e)
        raise AllocationError(cls, str(e)) from e


def native_method(cls: type, name: str) -> Any:
    """Find the builtin implementation of a storage method in the MRO.

    Python-level overrides (e.g. a validating ``append`` on a list subclass)
    are skipped so container contents are read and written directly.

    Args:
        cls: Runtime type of the container.
        name: Method name, e.g. ``"append"`` or ``"__setitem__"``.

    Returns:
        The unbound builtin method.

    Raises:
        AttributeError: If no class in the MRO provides a builtin ``name``.
    """
    for base in cls.__mro__:
        method = vars(base).get(name)
        if method is not None and not isinstance(
            method, (FunctionType, staticmethod, classmethod)
        ):
            return method
    raise AttributeError(f"{cls.__name__} has no builtin {name!r}")
