"""Live configuration object over a contract's descriptors."""

import logging
from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar

from .core import PropertyDescriptor, discover
from .errors import StoreOperationError, TypeMismatchError, type_name
from .interfaces import ConfigStore, ValueParser
from .utils import conforms, runtime_class
from .values import default_handler

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ConfigBinding(Generic[T]):
    """Exposes a contract's settings as attributes backed by stores.

    Reads consult the stores in order and return the first value found,
    parsed into the setting's base type. A setting no store holds, or
    whose stored text cannot be parsed, reads as its default. Writes are
    formatted as text and sent to every writable store; assigning None
    deletes the stored value so the default applies again.

    The descriptor set is fixed when the binding is created. The binding
    owns its stores and closes them on ``close()``.

    Usage:
        with ConfigurationBuilder(ServerSettings).use_environment().build() as settings:
            settings.timeout      # -> int
            settings.timeout = 60

    ``get``/``set`` address a setting by member name and are needed for
    members whose names clash with the binding's own methods.
    """

    def __init__(
        self,
        contract: type,
        descriptors: Mapping[str, PropertyDescriptor],
        stores: Sequence[ConfigStore],
        parser: Optional[ValueParser] = None,
    ):
        object.__setattr__(self, "_contract", contract)
        object.__setattr__(self, "_descriptors", descriptors)
        object.__setattr__(self, "_stores", tuple(stores))
        object.__setattr__(self, "_parser", parser or default_handler)
        object.__setattr__(self, "_closed", False)

    @property
    def contract(self) -> type:
        return self._contract

    @property
    def descriptors(self) -> Mapping[str, PropertyDescriptor]:
        return self._descriptors

    @property
    def stores(self) -> tuple[ConfigStore, ...]:
        return self._stores

    def get(self, member: str) -> Any:
        """Current value of a setting."""
        descriptor = self._descriptor(member)

        for store in self._stores:
            if not store.can_read:
                continue
            text = store.read(descriptor.name)
            if text is None:
                continue
            ok, value = self._parser.try_parse(descriptor.base_type, text)
            if ok:
                return value
            logger.warning(
                f"Value {text!r} for option {descriptor.name} in {store.name} "
                f"is not a valid {type_name(descriptor.base_type)}; using default"
            )
            return descriptor.default_value

        return descriptor.default_value

    def set(self, member: str, value: Any) -> None:
        """Write a setting to every writable store, or clear it with None."""
        descriptor = self._descriptor(member)
        if not descriptor.writable:
            raise AttributeError(f"Option {member} is read-only")

        targets = [store for store in self._stores if store.can_write]
        if not targets:
            raise StoreOperationError(
                f"No writable store configured for option {descriptor.name}"
            )

        text = None
        if value is not None:
            expected = runtime_class(descriptor.base_type)
            if expected is not None and not conforms(value, expected):
                raise TypeMismatchError(
                    descriptor.name,
                    descriptor.declared_type,
                    type(value),
                    message=(
                        f"Cannot assign {type_name(type(value))} to option "
                        f"{descriptor.name} of type {type_name(descriptor.declared_type)}"
                    ),
                )
            text = self._parser.format(descriptor.base_type, value)

        for store in targets:
            store.write(descriptor.name, text)
        logger.debug(f"Wrote option {descriptor.name} to {len(targets)} store(s)")

    def reset(self, member: str) -> None:
        """Clear a setting so that its default applies."""
        self.set(member, None)

    def close(self) -> None:
        """Close every store, last registered first.

        A failing store does not keep the others open; the first error is
        re-raised once all stores have been closed.
        """
        if self._closed:
            return
        object.__setattr__(self, "_closed", True)

        errors = []
        for store in reversed(self._stores):
            try:
                store.close()
            except Exception as e:
                logger.warning(f"Failed to close {store.name}: {e}")
                errors.append(e)

        logger.debug(f"Closed binding for {self._contract.__qualname__}")
        if errors:
            raise errors[0]

    def _descriptor(self, member: str) -> PropertyDescriptor:
        try:
            return self._descriptors[member]
        except KeyError:
            raise AttributeError(
                f"{self._contract.__qualname__} has no option {member!r}"
            ) from None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._descriptors))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        stores = ", ".join(store.name for store in self._stores)
        return f"ConfigBinding({self._contract.__qualname__}, stores=[{stores}])"


def bind(
    contract: type,
    *stores: ConfigStore,
    parser: Optional[ValueParser] = None,
) -> ConfigBinding:
    """Discover a contract and bind it to the given stores."""
    return ConfigBinding(contract, discover(contract, parser), stores, parser)
