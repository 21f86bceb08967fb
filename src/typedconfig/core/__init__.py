"""Contract discovery and option resolution.

The engine walks a contract class (and its ancestors), reads each
member's ``Option`` annotation and produces one immutable
``PropertyDescriptor`` per setting.
"""

from .descriptor import PropertyDescriptor
from .walker import ContractMember, ContractWalker
from .resolver import OptionResolver, discover

__all__ = [
    "PropertyDescriptor",
    "ContractMember",
    "ContractWalker",
    "OptionResolver",
    "discover",
]
