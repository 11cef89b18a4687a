"""Field descriptor model."""

from __future__ import annotations

from dataclasses import dataclass
from types import MemberDescriptorType


@dataclass(slots=True, frozen=True)
class FieldRef:
    """One storage slot of an instance.

    Attributes:
        owner: Class that declares the slot. For ``__dict__`` entries, the
            runtime type of the instance.
        name: Attribute name as stored (name-mangled for ``__private`` names).
        slot: Member descriptor for ``__slots__`` storage, None for ``__dict__``.
    """

    owner: type
    name: str
    slot: MemberDescriptorType | None = None

    @property
    def in_dict(self) -> bool:
        return self.slot is None
