"""Store-specific configuration classes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class StoreType(Enum):
    """Available store backends."""
    MEMORY = "memory"
    ENVIRONMENT = "environment"
    FILE = "file"
    BLOB = "blob"
    HTTP = "http"


@dataclass
class StoreConfig:
    """Configuration for one backing store.

    Attributes:
        type: Which store backend to use
        path: File path (file) or root directory (blob)
        prefix: Environment variable prefix (environment)
        url: Base URL (http)
        api_key: Bearer token (http)
        timeout_seconds: Request timeout (http)
        read_only: Refuse writes (http)
        values: Initial contents (memory)
    """
    type: StoreType = StoreType.MEMORY
    path: Optional[str] = None
    prefix: str = ""
    url: Optional[str] = None
    api_key: Optional[str] = None
    timeout_seconds: float = 10.0
    read_only: bool = False
    values: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = StoreType(self.type.lower())

    @classmethod
    def from_dict(cls, data: dict) -> "StoreConfig":
        """Create configuration from dictionary.

        Raises:
            ValueError: Unknown keys or an unknown store type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Store configuration must be a mapping, got {data!r}")
        data = dict(data)
        values = data.pop("values", None) or {}
        try:
            return cls(values={str(k): str(v) for k, v in values.items()}, **data)
        except TypeError as e:
            raise ValueError(f"Invalid store configuration {data!r}: {e}") from e

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []
        label = f"{self.type.value} store"

        if self.type in (StoreType.FILE, StoreType.BLOB) and not self.path:
            errors.append(f"{label} requires path")
        if self.type == StoreType.HTTP:
            if not self.url:
                errors.append(f"{label} requires url")
            elif not self.url.startswith(("http://", "https://")):
                errors.append(f"{label} url must start with http:// or https://, got {self.url}")
            if self.timeout_seconds <= 0:
                errors.append(f"{label} timeout_seconds must be positive, got {self.timeout_seconds}")

        return errors
