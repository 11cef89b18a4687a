"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field

from graphclone import GraphSettings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from GRAPHCLONE_* variables and the cached settings."""
    for name in ("GRAPHCLONE_EXTRA_IMMUTABLE_TYPES", "GRAPHCLONE_LOG_TRAVERSAL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Explicit default settings."""
    return GraphSettings()


@dataclass
class FixtureAddress:
    city: str
    owner: "FixturePerson | None" = None


@dataclass
class FixturePerson:
    name: str
    age: int = 0
    address: FixtureAddress | None = None
    tags: list[str] = field(default_factory=list)


@pytest.fixture
def person_cls():
    return FixturePerson


@pytest.fixture
def address_cls():
    return FixtureAddress


@pytest.fixture
def alice():
    """Alice living in Rome."""
    return FixturePerson(name="Alice", age=25, address=FixtureAddress(city="Rome"), tags=["a"])


@pytest.fixture
def cyclic_alice(alice):
    """Alice whose address points back at her."""
    alice.address.owner = alice
    return alice
