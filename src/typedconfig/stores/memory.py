"""In-memory configuration store."""

from typing import Mapping, Optional

from ..interfaces import ConfigStore


class InMemoryConfigStore(ConfigStore):
    """Dictionary-backed store for testing and development."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values: dict[str, str] = dict(values or {})

    @property
    def name(self) -> str:
        return "In-Memory Dictionary"

    @property
    def can_read(self) -> bool:
        return True

    @property
    def can_write(self) -> bool:
        return True

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self._values.pop(key, None)
        else:
            self._values[key] = value

    def close(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)
