"""Field walking: enumerate and access instance storage across a class hierarchy."""

from graphclone.core.fields.models import FieldRef
from graphclone.core.fields.operations import (
    declared_slots,
    delete_field,
    get_field,
    instance_dict,
    iter_fields,
    set_field,
)

__all__ = [
    # Models
    "FieldRef",
    # Operations
    "declared_slots",
    "iter_fields",
    "instance_dict",
    "get_field",
    "set_field",
    "delete_field",
]
