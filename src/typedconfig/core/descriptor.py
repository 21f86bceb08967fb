"""Resolved per-setting metadata."""

from dataclasses import dataclass, field
from typing import Any

from ..utils import unwrap_optional, is_optional


@dataclass(frozen=True)
class PropertyDescriptor:
    """Resolved metadata for one configuration setting.

    Attributes:
        name: Canonical store key (alias if declared, else member name)
        declared_type: Type as written on the contract, possibly Optional[T]
        base_type: declared_type without its nullable wrapper
        default_value: Value used when no store holds one for ``name``
        member_name: Attribute name on the contract
        writable: False for read-only properties
    """
    name: str
    declared_type: Any
    base_type: Any = field(default=None)
    default_value: Any = None
    member_name: str = ""
    writable: bool = True

    def __post_init__(self):
        if self.base_type is None:
            object.__setattr__(self, "base_type", unwrap_optional(self.declared_type))
        if not self.member_name:
            object.__setattr__(self, "member_name", self.name)

    @property
    def nullable(self) -> bool:
        return is_optional(self.declared_type)

    def __repr__(self) -> str:
        return (
            f"PropertyDescriptor(name={self.name!r}, member={self.member_name!r}, "
            f"type={self.declared_type!r}, default={self.default_value!r})"
        )
