"""Binding-wide configuration."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .stores import StoreConfig, StoreType

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class BindingConfig:
    """Complete binding configuration.

    Lists the stores backing a binding in lookup order: reads take the
    first store holding a value, writes go to every writable store.

    Attributes:
        stores: Store configurations, in lookup order
        log_level: Logging level for the CLI
    """
    stores: list[StoreConfig] = field(default_factory=list)
    log_level: str = "warning"

    @classmethod
    def from_file(cls, path: str | Path) -> "BindingConfig":
        """Load configuration from a YAML (or JSON) file.

        A missing file yields the default configuration.
        """
        path = Path(path).expanduser()
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "BindingConfig":
        """Create configuration from dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Binding configuration must be a mapping, got {type(data).__name__}")
        return cls(
            stores=[StoreConfig.from_dict(s) for s in data.get("stores") or []],
            log_level=str(data.get("log_level") or "warning").lower(),
        )

    @classmethod
    def from_env(cls, prefix: str = "TYPEDCONFIG") -> "BindingConfig":
        """Load configuration from environment variables.

        Environment variables:
            {prefix}_CONFIG: Path to a YAML config file (takes precedence)
            {prefix}_ENV_PREFIX: Add an environment store with this prefix
            {prefix}_FILE: Add a file store for this path
            {prefix}_URL: Add an HTTP store for this base URL
            {prefix}_API_KEY: Bearer token for the HTTP store
            {prefix}_LOG_LEVEL: Logging level
        """
        def get(key: str, default: str = None) -> Optional[str]:
            return os.environ.get(f"{prefix}_{key}", default)

        config_path = get("CONFIG")
        if config_path:
            return cls.from_file(config_path)

        stores = []
        env_prefix = get("ENV_PREFIX")
        if env_prefix is not None:
            stores.append(StoreConfig(type=StoreType.ENVIRONMENT, prefix=env_prefix))
        if get("FILE"):
            stores.append(StoreConfig(type=StoreType.FILE, path=get("FILE")))
        if get("URL"):
            stores.append(StoreConfig(type=StoreType.HTTP, url=get("URL"), api_key=get("API_KEY")))

        return cls(stores=stores, log_level=get("LOG_LEVEL", "warning").lower())

    @classmethod
    def for_testing(cls, values: Optional[dict[str, str]] = None) -> "BindingConfig":
        """Create a configuration backed by a single in-memory store."""
        return cls(
            stores=[StoreConfig(type=StoreType.MEMORY, values=dict(values or {}))],
            log_level="debug",
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.stores:
            errors.append("at least one store must be configured")

        for index, store in enumerate(self.stores):
            errors.extend(f"stores[{index}]: {e}" for e in store.validate())

        if self.log_level not in LOG_LEVELS:
            errors.append(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}"
            )

        return errors
