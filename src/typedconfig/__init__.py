"""typedconfig: typed configuration contracts over pluggable stores.

Declare settings as annotated members of a class, then bind the class to
one or more stores:

    from typing import Annotated
    from typedconfig import ConfigurationBuilder, Option

    class ServerSettings:
        timeout: Annotated[int, Option(alias="timeout-seconds", default="30")]
        retries: int = 3
        host: str = "localhost"

    settings = ConfigurationBuilder(ServerSettings).use_environment().build()
    settings.timeout  # 30 unless "timeout-seconds" is set
"""

from .interfaces import ConfigStore, Option, ValueParser
from .errors import (
    DuplicateOptionError,
    StoreOperationError,
    TypedConfigError,
    TypeMismatchError,
)
from .core import PropertyDescriptor, discover
from .values import ValueHandler
from .binding import ConfigBinding, bind
from .builder import ConfigurationBuilder, create_store

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "Option",
    "ValueParser",
    "ValueHandler",
    "PropertyDescriptor",
    "discover",
    "ConfigBinding",
    "bind",
    "ConfigurationBuilder",
    "create_store",
    "TypedConfigError",
    "TypeMismatchError",
    "DuplicateOptionError",
    "StoreOperationError",
]
