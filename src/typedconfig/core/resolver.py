"""Option resolution: turns contract members into property descriptors."""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import DuplicateOptionError, TypeMismatchError, type_name
from ..interfaces import ValueParser
from ..utils import conforms, runtime_class, unwrap_optional
from ..values import default_handler
from .descriptor import PropertyDescriptor
from .walker import ContractMember, ContractWalker

logger = logging.getLogger(__name__)

_NO_DEFAULT = object()


class OptionResolver:
    """Resolves canonical name, types and default for one member.

    Default handling is asymmetric on purpose:

    - a string default that cannot be parsed into the member's type is
      tolerated. A warning is logged and the type's zero value is used,
      so one malformed default never aborts discovery. Callers wanting
      strict validation must check defaults themselves.
    - a non-string default of the wrong type is an authoring error and
      raises ``TypeMismatchError`` at binding time.
    """

    def __init__(self, parser: Optional[ValueParser] = None):
        self.parser = parser or default_handler

    def resolve(self, member: ContractMember) -> PropertyDescriptor:
        option = member.option
        name = member.name
        if option is not None and option.alias:
            name = option.alias

        base_type = unwrap_optional(member.declared_type)

        default_value = _NO_DEFAULT
        if option is not None and option.default is not None:
            default_value = self._coerce_default(name, member, base_type, option.default)

        if default_value is _NO_DEFAULT:
            default_value = self.parser.zero_value(member.declared_type)

        return PropertyDescriptor(
            name=name,
            declared_type=member.declared_type,
            base_type=base_type,
            default_value=default_value,
            member_name=member.name,
            writable=member.writable,
        )

    def _coerce_default(
        self,
        name: str,
        member: ContractMember,
        base_type: Any,
        raw: Any,
    ) -> Any:
        """Coerce an option default, or return _NO_DEFAULT."""
        target_class = runtime_class(base_type)

        if target_class is None or conforms(raw, target_class):
            return raw

        if isinstance(raw, str) and target_class is not str:
            ok, value = self.parser.try_parse(base_type, raw)
            if ok:
                return value
            logger.warning(
                f"Default {raw!r} for option {name} is not a valid "
                f"{type_name(base_type)}; using the type's zero value"
            )
            return _NO_DEFAULT

        raise TypeMismatchError(name, member.declared_type, type(raw))


def discover(
    contract: type,
    parser: Optional[ValueParser] = None,
) -> Mapping[str, PropertyDescriptor]:
    """Resolve every setting of a contract.

    Args:
        contract: Class declaring the configuration schema
        parser: Converter for string defaults (defaults to ValueHandler)

    Returns:
        Read-only mapping from member name to descriptor, own members first.

    Raises:
        TypeMismatchError: An option default has an incompatible type.
        DuplicateOptionError: Two members share a canonical name.
    """
    resolver = OptionResolver(parser)
    result: dict[str, PropertyDescriptor] = {}
    owners: dict[str, str] = {}

    for member in ContractWalker().discover(contract):
        descriptor = resolver.resolve(member)
        if descriptor.name in owners:
            raise DuplicateOptionError(descriptor.name, owners[descriptor.name], member.name)
        owners[descriptor.name] = member.name
        result[member.name] = descriptor

    logger.debug(f"Resolved {len(result)} options for {contract.__qualname__}")
    return MappingProxyType(result)
