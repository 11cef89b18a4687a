"""Type classification: immutable allowlist and node kinds."""

from graphclone.core.classify.core import (
    ARRAY_TYPES,
    IMMUTABLE_TYPES,
    TypeClassifier,
    is_immutable,
    resolve_type,
)
from graphclone.core.classify.models import NodeKind

__all__ = [
    # Models
    "NodeKind",
    # Core
    "TypeClassifier",
    "is_immutable",
    "resolve_type",
    "IMMUTABLE_TYPES",
    "ARRAY_TYPES",
]
