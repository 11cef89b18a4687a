"""Configuration module using Pydantic Settings.

Usage:
    from graphclone.config import GraphSettings, get_settings

    settings = GraphSettings(log_traversal=True)
"""

from graphclone.config.settings import GraphSettings, get_settings

__all__ = [
    "GraphSettings",
    "get_settings",
]
