"""Fluent construction of configuration bindings."""

import logging
from pathlib import Path
from typing import Generic, Mapping, Optional, TypeVar

from .binding import ConfigBinding
from .config import BindingConfig, StoreConfig, StoreType
from .core import discover
from .interfaces import ConfigStore, ValueParser
from .stores import (
    BlobConfigStore,
    DirectoryBlobStorage,
    EnvironmentConfigStore,
    FileConfigStore,
    HttpConfigStore,
    InMemoryConfigStore,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ConfigurationBuilder(Generic[T]):
    """Collects stores for a contract and builds its binding.

    Stores are consulted in the order they are added.

    Usage:
        settings = (
            ConfigurationBuilder(ServerSettings)
            .use_environment(prefix="APP_")
            .use_file("~/.app/config.yaml")
            .build()
        )
    """

    def __init__(self, contract: type[T]):
        self.contract = contract
        self._stores: list[ConfigStore] = []
        self._parser: Optional[ValueParser] = None

    def use_store(self, store: ConfigStore) -> "ConfigurationBuilder[T]":
        self._stores.append(store)
        return self

    def use_in_memory(self, values: Optional[Mapping[str, str]] = None) -> "ConfigurationBuilder[T]":
        return self.use_store(InMemoryConfigStore(values))

    def use_environment(self, prefix: str = "") -> "ConfigurationBuilder[T]":
        return self.use_store(EnvironmentConfigStore(prefix=prefix))

    def use_file(self, path: str | Path) -> "ConfigurationBuilder[T]":
        return self.use_store(FileConfigStore(path))

    def use_blob_directory(self, root: str | Path) -> "ConfigurationBuilder[T]":
        return self.use_store(BlobConfigStore(DirectoryBlobStorage(root)))

    def use_http(self, base_url: str, **kwargs) -> "ConfigurationBuilder[T]":
        return self.use_store(HttpConfigStore(base_url, **kwargs))

    def use_config(self, config: BindingConfig) -> "ConfigurationBuilder[T]":
        """Add every store described by config.

        Raises:
            ValueError: If the configuration is invalid
        """
        errors = config.validate()
        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")
        for store_config in config.stores:
            self.use_store(create_store(store_config))
        return self

    def with_parser(self, parser: ValueParser) -> "ConfigurationBuilder[T]":
        self._parser = parser
        return self

    def build(self) -> ConfigBinding[T]:
        """Discover the contract and return a binding over the stores."""
        descriptors = discover(self.contract, self._parser)
        if not self._stores:
            logger.warning(
                f"No stores configured for {self.contract.__qualname__}; "
                f"every option will read as its default"
            )
        logger.info(
            f"Bound {self.contract.__qualname__} "
            f"({len(descriptors)} options, {len(self._stores)} stores)"
        )
        return ConfigBinding(self.contract, descriptors, self._stores, self._parser)


def create_store(config: StoreConfig) -> ConfigStore:
    """Create a store based on config."""
    if config.type == StoreType.MEMORY:
        return InMemoryConfigStore(config.values)
    elif config.type == StoreType.ENVIRONMENT:
        return EnvironmentConfigStore(prefix=config.prefix)
    elif config.type == StoreType.FILE:
        return FileConfigStore(config.path)
    elif config.type == StoreType.BLOB:
        return BlobConfigStore(DirectoryBlobStorage(config.path))
    elif config.type == StoreType.HTTP:
        return HttpConfigStore(
            config.url,
            timeout_seconds=config.timeout_seconds,
            api_key=config.api_key,
            read_only=config.read_only,
        )
    else:
        raise ValueError(f"Unknown store type: {config.type}")
