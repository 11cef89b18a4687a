"""Tests for type classification."""

import datetime
import types
import uuid
import weakref
from collections import OrderedDict, defaultdict, deque
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePosixPath
from typing import NamedTuple, Optional
from urllib.parse import urlparse

import pytest

from graphclone import Array, ConfigurationError, NodeKind, TypeClassifier, is_immutable
from graphclone.core.classify import resolve_type


class Color(Enum):
    RED = 1
    GREEN = 2


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str


@dataclass
class Account:
    balance: Decimal


class Point(NamedTuple):
    x: int
    y: int


class Ticker:
    def tick(self) -> None:
        pass


@pytest.fixture
def classifier():
    return TypeClassifier()


@pytest.mark.parametrize(
    "tp",
    [
        int,
        bool,
        float,
        complex,
        str,
        bytes,
        Color,
        Decimal,
        Fraction,
        datetime.datetime,
        datetime.date,
        datetime.timedelta,
        datetime.timezone,
        uuid.UUID,
        PurePosixPath,
        type(None),
        type,
    ],
)
def test_allowlisted_types_are_immutable(tp):
    """Primitives, enums and well-known value types are shared as-is."""
    assert is_immutable(tp)


def test_uri_is_immutable():
    """Parsed URIs are immutable locators."""
    assert is_immutable(type(urlparse("https://example.com/a?b=1")))


@pytest.mark.parametrize(
    "tp",
    [list, dict, set, tuple, bytearray, Account, Money, Array, types.MethodType, weakref.ref],
)
def test_containers_and_user_types_are_not_immutable(tp):
    """Anything that can hold mutable state is copied."""
    assert not is_immutable(tp)


def test_optional_of_immutable_is_immutable():
    """Optional wrappers are immutable iff the wrapped type is."""
    assert is_immutable(Optional[int])  # noqa: UP045
    assert is_immutable(str | None)
    assert is_immutable(None | uuid.UUID)
    assert not is_immutable(list[int] | None)
    assert not is_immutable(Account | None)


def test_non_optional_unions_are_not_immutable():
    """Only the single-type optional wrapper is unwrapped."""
    assert not is_immutable(int | str)


def test_generic_aliases_are_not_immutable():
    assert not is_immutable(list[int])


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (1, NodeKind.IMMUTABLE),
        ("text", NodeKind.IMMUTABLE),
        (Color.RED, NodeKind.IMMUTABLE),
        (len, NodeKind.IMMUTABLE),
        ([1], NodeKind.ARRAY),
        (bytearray(b"x"), NodeKind.ARRAY),
        (deque([1]), NodeKind.ARRAY),
        (Array(2), NodeKind.ARRAY),
        ({"a": 1}, NodeKind.MAPPING),
        (OrderedDict(a=1), NodeKind.MAPPING),
        (defaultdict(list), NodeKind.MAPPING),
        ({1}, NodeKind.SET),
        ((1, [2]), NodeKind.VALUE),
        (Point(1, 2), NodeKind.VALUE),
        (frozenset({1}), NodeKind.VALUE),
        (Money(Decimal("1"), "EUR"), NodeKind.REFERENCE),
        (Ticker().tick, NodeKind.VALUE),
        (weakref.ref(Ticker()), NodeKind.WEAKREF),
        ([].append, NodeKind.IMMUTABLE),
        (Account(Decimal("1")), NodeKind.REFERENCE),
        (object(), NodeKind.REFERENCE),
    ],
)
def test_classify(classifier, value, kind):
    assert classifier.classify(value) is kind


def test_extra_immutable_types_extend_allowlist():
    """Application value objects can be registered as immutable."""
    classifier = TypeClassifier(extra_immutable=(Money,))

    assert classifier.is_immutable(Money)
    assert classifier.is_immutable(Money | None)
    assert classifier.classify(Money(Decimal("2"), "USD")) is NodeKind.IMMUTABLE
    # Default classifier is unaffected
    assert not is_immutable(Money)


def test_from_settings_resolves_dotted_names(settings):
    """Settings carry dotted type names resolved at classifier construction."""
    settings.extra_immutable_types = ["collections.OrderedDict"]

    classifier = TypeClassifier.from_settings(settings)

    assert classifier.is_immutable(OrderedDict)


def test_resolve_type():
    assert resolve_type("datetime.datetime") is datetime.datetime
    assert resolve_type("collections.abc.Iterable") is Iterable


@pytest.mark.parametrize(
    "name",
    ["NoDots", "no_such_module_xyz.Type", "datetime.NoSuchType", "datetime.MINYEAR"],
)
def test_resolve_type_errors(name):
    """Unresolvable or non-class names fail loudly."""
    with pytest.raises(ConfigurationError):
        resolve_type(name)
