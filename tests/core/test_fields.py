"""Tests for field enumeration and raw field access."""

from dataclasses import dataclass

import pytest

from graphclone import MISSING
from graphclone.core.fields import (
    FieldRef,
    declared_slots,
    delete_field,
    get_field,
    iter_fields,
    set_field,
)


class Base:
    def __init__(self) -> None:
        self.__secret = "base"
        self.shared = 1

    def base_secret(self) -> str:
        return self.__secret


class Derived(Base):
    def __init__(self) -> None:
        super().__init__()
        self.__secret = "derived"

    def derived_secret(self) -> str:
        return self.__secret


class SlotBase:
    __slots__ = ("value",)


class SlotDerived(SlotBase):
    __slots__ = ("value", "extra")


class Guarded:
    """Rejects attribute assignment after construction."""

    def __init__(self, value: int) -> None:
        object.__setattr__(self, "value", value)

    def __setattr__(self, name, value):
        raise AttributeError("read-only")


@dataclass(frozen=True, slots=True)
class FrozenSlots:
    x: int


def names(obj, stop=None):
    return [(f.owner.__name__, f.name) for f in iter_fields(obj, stop)]


def test_private_fields_of_each_level_are_distinct():
    """Name-mangled privates of base and derived classes are separate fields."""
    obj = Derived()

    fields = names(obj)

    assert ("Derived", "_Base__secret") in fields
    assert ("Derived", "_Derived__secret") in fields
    assert ("Derived", "shared") in fields
    assert len(fields) == 3


def test_shadowed_slot_is_visited_once_per_level():
    """A slot re-declared by a subclass has storage at both levels."""
    obj = SlotDerived()
    SlotBase.value.__set__(obj, "base")
    obj.value = "derived"

    fields = {(f.owner, f.name): f for f in iter_fields(obj)}

    assert set(fields) == {
        (SlotDerived, "value"),
        (SlotDerived, "extra"),
        (SlotBase, "value"),
    }
    assert get_field(obj, fields[SlotDerived, "value"]) == "derived"
    assert get_field(obj, fields[SlotBase, "value"]) == "base"
    assert get_field(obj, fields[SlotDerived, "extra"]) is MISSING


def test_declared_slots_ignores_bases():
    assert [f.name for f in declared_slots(SlotBase)] == ["value"]
    assert sorted(f.name for f in declared_slots(SlotDerived)) == ["extra", "value"]
    assert declared_slots(Base) == []


def test_unset_slot_reads_as_missing():
    obj = SlotBase()
    (field,) = declared_slots(SlotBase)

    assert get_field(obj, field) is MISSING


def test_set_field_bypasses_setattr():
    """Raw writes reach objects whose __setattr__ refuses assignment."""
    obj = Guarded(1)
    (field,) = iter_fields(obj)

    set_field(obj, field, 2)

    assert obj.value == 2


def test_set_field_on_frozen_slotted_dataclass():
    obj = FrozenSlots(1)
    (field,) = iter_fields(obj)

    set_field(obj, field, 5)

    assert obj.x == 5


def test_set_missing_deletes_field():
    obj = Derived()
    field = FieldRef(owner=Derived, name="shared")

    set_field(obj, field, MISSING)

    assert "shared" not in vars(obj)
    assert get_field(obj, field) is MISSING


def test_delete_unset_slot_is_noop():
    obj = SlotBase()
    (field,) = declared_slots(SlotBase)

    delete_field(obj, field)
    obj.value = 3
    delete_field(obj, field)

    assert get_field(obj, field) is MISSING


def test_set_dict_field_without_dict_raises():
    obj = SlotBase()

    with pytest.raises(AttributeError, match="no __dict__"):
        set_field(obj, FieldRef(owner=SlotBase, name="other"), 1)


def test_stop_skips_levels():
    """Slots declared by the stop class and its bases are skipped."""
    obj = SlotDerived()

    assert sorted(names(obj, stop=SlotBase)) == [
        ("SlotDerived", "extra"),
        ("SlotDerived", "value"),
    ]
    assert names(obj, stop=SlotDerived) == []
