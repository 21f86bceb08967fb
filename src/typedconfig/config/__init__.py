"""Configuration for typedconfig bindings.

Describes which stores back a binding. Can be loaded from:
- Environment variables
- YAML/JSON files
- Programmatic construction
"""

from .system import BindingConfig
from .stores import StoreConfig, StoreType

__all__ = [
    "BindingConfig",
    "StoreConfig",
    "StoreType",
]
