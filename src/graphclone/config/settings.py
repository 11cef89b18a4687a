"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from graphclone.config import GraphSettings, get_settings

    # Load from environment variables (GRAPHCLONE_*)
    settings = get_settings()

    # Or override with explicit values
    settings = GraphSettings(extra_immutable_types=["myapp.money.Money"])
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for clone, compare and revert operations.

    Attributes:
        extra_immutable_types: Dotted names of application types whose
            instances are shared as-is instead of copied (value objects).
        log_traversal: Emit a DEBUG log record for every visited node.

    Environment Variables:
        GRAPHCLONE_EXTRA_IMMUTABLE_TYPES (JSON list, e.g. '["pkg.mod.Money"]')
        GRAPHCLONE_LOG_TRAVERSAL
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    extra_immutable_types: list[str] = []
    log_traversal: bool = False

    @field_validator("extra_immutable_types")
    @classmethod
    def _check_dotted(cls, names: list[str]) -> list[str]:
        for name in names:
            parts = name.split(".")
            if len(parts) < 2 or not all(parts):
                raise ValueError(f"{name!r} is not a dotted type name")
        return names


@lru_cache(maxsize=1)
def get_settings() -> GraphSettings:
    """Load settings from the environment once per process.

    Call ``get_settings.cache_clear()`` after changing the environment.

    Returns:
        The process-wide GraphSettings.
    """
    return GraphSettings()
