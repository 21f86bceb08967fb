"""Environment variable configuration store (read-only)."""

import os
from typing import Mapping, Optional

from ..errors import StoreOperationError
from ..interfaces import ConfigStore


class EnvironmentConfigStore(ConfigStore):
    """Reads options from environment variables.

    A key is looked up as-is, then with dots replaced by underscores,
    then upper-cased, so ``db.host`` matches ``db.host``, ``db_host`` or
    ``DB_HOST``. An optional prefix is prepended to every candidate.
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    @property
    def name(self) -> str:
        return "Environment Variables"

    @property
    def can_read(self) -> bool:
        return True

    @property
    def can_write(self) -> bool:
        return False

    def read(self, key: str) -> Optional[str]:
        for candidate in self._candidates(key):
            value = self._environ.get(candidate)
            if value is not None:
                return value
        return None

    def write(self, key: str, value: Optional[str]) -> None:
        raise StoreOperationError(f"{self.name} store is read-only (key: {key})")

    def _candidates(self, key: str) -> list[str]:
        underscored = key.replace(".", "_").replace("-", "_")
        candidates = [key, underscored, underscored.upper()]
        # dict.fromkeys keeps order while dropping repeats
        return [self.prefix + c for c in dict.fromkeys(candidates)]
