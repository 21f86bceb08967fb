"""Core interfaces for typedconfig.

These define the contracts between the discovery engine and its
collaborators: the per-member ``Option`` annotation, the ``ValueParser``
used to convert between text and typed values, and the ``ConfigStore``
adapters that hold the text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Option:
    """Per-member option annotation.

    Attach to a contract member either through ``Annotated`` or as the
    member's class attribute value::

        class ServerSettings:
            timeout: Annotated[int, Option(alias="timeout-seconds", default="30")]
            retries: int = Option(default=3)

    Attributes:
        alias: Key used in backing stores instead of the member name.
        default: Either a value of the member's type or a string parseable
                 into it. ``None`` means no default.
    """
    alias: Optional[str] = None
    default: Any = None


class ValueParser(ABC):
    """Converts between stored text and typed values."""

    @abstractmethod
    def try_parse(self, target_type: Any, text: str) -> tuple[bool, Any]:
        """Parse text into target_type.

        Returns:
            Tuple of (success, value). Never raises for malformed text.
        """
        pass

    @abstractmethod
    def format(self, target_type: Any, value: Any) -> str:
        """Convert a typed value into its stored text form."""
        pass

    @abstractmethod
    def zero_value(self, target_type: Any) -> Any:
        """Natural default of a type: zero for value-like types, else None."""
        pass


class ConfigStore(ABC):
    """Key to text storage backing a configuration binding.

    Keys are canonical option names. ``read`` returns ``None`` when the key
    is absent; writing ``None`` deletes the key. A store that reports
    ``can_read``/``can_write`` as False must raise ``StoreOperationError``
    from the corresponding method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable store identifier."""
        pass

    @property
    @abstractmethod
    def can_read(self) -> bool:
        pass

    @property
    @abstractmethod
    def can_write(self) -> bool:
        pass

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None if not found."""
        pass

    @abstractmethod
    def write(self, key: str, value: Optional[str]) -> None:
        """Store text for key, or delete it when value is None."""
        pass

    def close(self) -> None:
        """Release underlying connections. Safe to call more than once."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
