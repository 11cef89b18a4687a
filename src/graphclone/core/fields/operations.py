"""Field enumeration and raw field access.

Fields are read and written below the attribute protocol: slot member
descriptors and the instance ``__dict__`` are used directly, so properties,
custom ``__setattr__``, frozen dataclasses and pydantic validation are all
bypassed. This is what lets a revert restore private state with no setter.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import MemberDescriptorType
from typing import Any

from graphclone.core.fields.models import FieldRef
from graphclone.core.types import MISSING


def instance_dict(obj: Any) -> dict[str, Any] | None:
    """Return the instance ``__dict__`` of an object, or None if it has none."""
    try:
        namespace = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        return None
    return namespace if isinstance(namespace, dict) else None


def declared_slots(cls: type) -> list[FieldRef]:
    """Enumerate the slots declared by one class, ignoring its bases.

    Args:
        cls: Class to inspect.

    Returns:
        One FieldRef per slot declared in ``cls.__slots__``.
    """
    namespace = vars(cls)
    if "__slots__" not in namespace:
        return []
    return [
        FieldRef(owner=cls, name=name, slot=member)
        for name, member in namespace.items()
        if isinstance(member, MemberDescriptorType) and member.__objclass__ is cls
    ]


def iter_fields(obj: Any, stop: type | None = None) -> Iterator[FieldRef]:
    """Enumerate every storage slot of an instance exactly once.

    ``__dict__`` entries come first, owned by the runtime type. Then the MRO
    is walked from the runtime type towards ``object`` and each level yields
    only the slots it declares itself, so a slot re-declared under the same
    name by a subclass is visited once per level that owns storage for it.

    Args:
        obj: Instance to inspect.
        stop: Skip slots declared by this class and its bases. Used for
            containers whose own storage is handled separately.

    Yields:
        FieldRef for each storage slot.
    """
    cls = type(obj)
    namespace = instance_dict(obj)
    if namespace is not None:
        for name in list(namespace):
            yield FieldRef(owner=cls, name=name)
    for klass in cls.__mro__:
        if klass is object:
            break
        if stop is not None and issubclass(stop, klass):
            continue
        yield from declared_slots(klass)


def get_field(obj: Any, field: FieldRef) -> Any:
    """Read a field, returning MISSING for an unset slot or absent entry."""
    if field.slot is None:
        namespace = instance_dict(obj)
        if namespace is None:
            return MISSING
        return namespace.get(field.name, MISSING)
    try:
        return field.slot.__get__(obj, field.owner)
    except AttributeError:
        return MISSING


def set_field(obj: Any, field: FieldRef, value: Any) -> None:
    """Write a field. Writing MISSING deletes it."""
    if value is MISSING:
        delete_field(obj, field)
        return
    if field.slot is None:
        namespace = instance_dict(obj)
        if namespace is None:
            raise AttributeError(
                f"{type(obj).__name__} instance has no __dict__ for field {field.name!r}"
            )
        namespace[field.name] = value
    else:
        field.slot.__set__(obj, value)


def delete_field(obj: Any, field: FieldRef) -> None:
    """Remove a field. Deleting an unset field does nothing."""
    if field.slot is None:
        namespace = instance_dict(obj)
        if namespace is not None:
            namespace.pop(field.name, None)
        return
    if get_field(obj, field) is not MISSING:
        field.slot.__delete__(obj)
