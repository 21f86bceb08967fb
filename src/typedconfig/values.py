"""Default text <-> value conversion.

``ValueHandler`` is the stock ``ValueParser``. It keeps a registry of
parse/format pairs keyed by exact type, and handles ``Enum`` subclasses
and homogeneous collections generically.
"""

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Callable, get_args

from .interfaces import ValueParser
from .utils import is_optional, runtime_class, unwrap_optional

logger = logging.getLogger(__name__)

TRUE_STRINGS = ("true", "1", "yes", "on")
FALSE_STRINGS = ("false", "0", "no", "off")

# [-][D.]HH:MM:SS[.ffffff]
_TIMESPAN_RE = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d{1,6}))?$"
)

_ZERO_VALUES = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
    timedelta: timedelta(0),
}

_COLLECTION_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class Converter:
    """Parse/format pair for one type."""
    parse: Callable[[str], Any]
    format: Callable[[Any], str] = str


def parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    raise ValueError(f"Not a boolean: {text!r}")


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_timedelta(text: str) -> timedelta:
    """Parse ``[-][D.]HH:MM:SS[.ffffff]`` or a plain number of seconds."""
    match = _TIMESPAN_RE.match(text.strip())
    if not match:
        return timedelta(seconds=float(text))
    delta = timedelta(
        days=int(match["days"] or 0),
        hours=int(match["hours"]),
        minutes=int(match["minutes"]),
        seconds=int(match["seconds"]),
        microseconds=int((match["fraction"] or "0").ljust(6, "0")),
    )
    return -delta if match["sign"] else delta


def format_timedelta(value: timedelta) -> str:
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, rest = divmod(value.seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.days:
        text = f"{value.days}.{text}"
    if value.microseconds:
        text = f"{text}.{value.microseconds:06d}"
    return sign + text


def _default_converters() -> dict[type, Converter]:
    return {
        str: Converter(parse=lambda text: text),
        bool: Converter(parse=parse_bool, format=format_bool),
        int: Converter(parse=lambda text: int(text.strip())),
        float: Converter(parse=lambda text: float(text.strip())),
        complex: Converter(parse=lambda text: complex(text.strip())),
        Decimal: Converter(parse=lambda text: Decimal(text.strip())),
        timedelta: Converter(parse=parse_timedelta, format=format_timedelta),
        datetime: Converter(parse=lambda text: datetime.fromisoformat(text.strip()),
                            format=lambda v: v.isoformat()),
        date: Converter(parse=lambda text: date.fromisoformat(text.strip()),
                        format=lambda v: v.isoformat()),
        Path: Converter(parse=lambda text: Path(text).expanduser()),
        uuid.UUID: Converter(parse=lambda text: uuid.UUID(text.strip())),
    }


class ValueHandler(ValueParser):
    """Registry-based parser for the common scalar and collection types.

    Collections are written as comma-separated items; each item is parsed
    as the collection's element type (``str`` if unparameterized).

    Usage:
        handler = ValueHandler()
        handler.register(IPv4Address, IPv4Address)
        ok, value = handler.try_parse(int, "42")
    """

    def __init__(self):
        self._converters = _default_converters()

    def register(
        self,
        target_type: type,
        parse: Callable[[str], Any],
        format: Callable[[Any], str] = str,
    ) -> None:
        """Add or replace the converter for target_type."""
        self._converters[target_type] = Converter(parse=parse, format=format)

    def supports(self, target_type: Any) -> bool:
        target_type = unwrap_optional(target_type)
        cls = runtime_class(target_type)
        if cls is None:
            return False
        if cls in _COLLECTION_TYPES:
            return self.supports(self._element_type(target_type))
        return cls in self._converters or issubclass(cls, Enum)

    def try_parse(self, target_type: Any, text: str) -> tuple[bool, Any]:
        try:
            return True, self._parse(unwrap_optional(target_type), text)
        except (ValueError, TypeError, ArithmeticError, KeyError) as e:
            logger.debug(f"Cannot parse {text!r} as {target_type!r}: {e}")
            return False, None

    def format(self, target_type: Any, value: Any) -> str:
        target_type = unwrap_optional(target_type)
        cls = runtime_class(target_type) or type(value)

        if cls in _COLLECTION_TYPES:
            element_type = self._element_type(target_type)
            return ",".join(self.format(element_type, item) for item in value)
        if cls in self._converters:
            return self._converters[cls].format(value)
        if isinstance(value, Enum):
            return value.name
        return str(value)

    def zero_value(self, target_type: Any) -> Any:
        if is_optional(target_type):
            return None
        return _ZERO_VALUES.get(target_type)

    def _parse(self, target_type: Any, text: str) -> Any:
        cls = runtime_class(target_type)
        if cls is None:
            raise TypeError(f"No runtime class for {target_type!r}")

        if cls in _COLLECTION_TYPES:
            element_type = self._element_type(target_type)
            items = [item.strip() for item in text.split(",")] if text.strip() else []
            return cls(self._parse(element_type, item) for item in items)

        converter = self._converters.get(cls)
        if converter is not None:
            return converter.parse(text)

        if issubclass(cls, Enum):
            return self._parse_enum(cls, text)

        raise TypeError(f"No converter registered for {cls.__qualname__}")

    @staticmethod
    def _parse_enum(cls: type, text: str) -> Enum:
        name = text.strip()
        for member in cls:
            if member.name.lower() == name.lower():
                return member
        for member in cls:
            if str(member.value) == name:
                return member
        raise ValueError(f"{text!r} is not a member of {cls.__qualname__}")

    @staticmethod
    def _element_type(target_type: Any) -> Any:
        args = [arg for arg in get_args(target_type) if arg is not Ellipsis]
        return args[0] if args else str


default_handler = ValueHandler()
