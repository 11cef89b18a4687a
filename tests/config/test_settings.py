"""Tests for GraphSettings and get_settings."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from graphclone import (
    ConfigurationError,
    GraphSettings,
    deep_clone,
    default_classifier,
    get_settings,
)
from graphclone.core.classify import TypeClassifier


class Money:
    def __init__(self, amount: Decimal) -> None:
        self.amount = amount


def test_defaults(settings):
    assert settings.extra_immutable_types == []
    assert settings.log_traversal is False


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("GRAPHCLONE_LOG_TRAVERSAL", "true")
    monkeypatch.setenv("GRAPHCLONE_EXTRA_IMMUTABLE_TYPES", '["decimal.Decimal"]')

    settings = GraphSettings()

    assert settings.log_traversal is True
    assert settings.extra_immutable_types == ["decimal.Decimal"]


def test_get_settings_is_cached_until_cleared(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("GRAPHCLONE_LOG_TRAVERSAL", "true")

    assert get_settings() is first
    get_settings.cache_clear()
    assert get_settings().log_traversal is True


@pytest.mark.parametrize("name", ["Money", "pkg.", ".Money", "a..b"])
def test_undotted_names_are_rejected(name):
    with pytest.raises(ValidationError):
        GraphSettings(extra_immutable_types=[name])


def test_unresolvable_type_fails_on_use():
    settings = GraphSettings(extra_immutable_types=["no_such_module_xyz.Money"])

    with pytest.raises(ConfigurationError, match="no_such_module_xyz"):
        TypeClassifier.from_settings(settings)


def test_environment_settings_reach_operations(monkeypatch):
    """Operations without explicit settings read the environment."""
    monkeypatch.setenv("GRAPHCLONE_EXTRA_IMMUTABLE_TYPES", f'["{__name__}.Money"]')
    money = Money(Decimal("1.00"))

    assert deep_clone([money])[0] is money


def test_traversal_logging(caplog):
    settings = GraphSettings(log_traversal=True)

    with caplog.at_level("DEBUG", logger="graphclone"):
        deep_clone([Money(Decimal("1"))], settings=settings)

    assert any("REFERENCE" in record.getMessage() for record in caplog.records)


def test_default_classifier_follows_environment(monkeypatch):
    assert not default_classifier().is_immutable(Money)

    monkeypatch.setenv("GRAPHCLONE_EXTRA_IMMUTABLE_TYPES", f'["{__name__}.Money"]')
    get_settings.cache_clear()

    assert default_classifier().is_immutable(Money)
