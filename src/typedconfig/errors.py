"""Exceptions raised by typedconfig.

Coercion failures of string defaults are deliberately absent from this
module: an unparseable default is tolerated and replaced by the zero value
of the property type (see ``OptionResolver``).
"""

from typing import Optional


class TypedConfigError(Exception):
    """Base class for all typedconfig errors."""


class TypeMismatchError(TypedConfigError, TypeError):
    """A value's runtime type is incompatible with a property's declared type.

    Raised at binding time when an ``Option`` default is neither of the
    property type nor a string, and at write time when a binding is given a
    value of the wrong type.
    """

    def __init__(
        self,
        property_name: str,
        declared_type: object,
        actual_type: type,
        message: Optional[str] = None,
    ):
        self.property_name = property_name
        self.declared_type = declared_type
        self.actual_type = actual_type
        super().__init__(message or (
            f"Default value for option {property_name} is of type "
            f"{type_name(actual_type)} whereas the property has type "
            f"{type_name(declared_type)}. Either set the default to a "
            f"{type_name(declared_type)} or to a string parseable to it."
        ))


class DuplicateOptionError(TypedConfigError, ValueError):
    """Two contract members resolve to the same canonical name."""

    def __init__(self, name: str, first_member: str, second_member: str):
        self.name = name
        super().__init__(
            f"Option name '{name}' is used by both '{first_member}' "
            f"and '{second_member}'"
        )


class StoreOperationError(TypedConfigError, RuntimeError):
    """A store was asked to perform an operation it does not support."""


def type_name(tp: object) -> str:
    """Readable name for a class or typing construct."""
    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp).replace("typing.", "")
