"""Contract discovery.

Walks a contract class and its ancestors breadth-first and collects the
members that make up the configuration schema.
"""

import abc
import inspect
import logging
import typing
from collections import deque
from dataclasses import dataclass, replace
from typing import Annotated, Any, ClassVar, Optional, get_args, get_origin

from ..interfaces import Option

logger = logging.getLogger(__name__)

# Bases that carry no settings of their own
_NON_CONTRACT_BASES = frozenset({object, typing.Protocol, typing.Generic, abc.ABC})

_MISSING = object()


@dataclass(frozen=True)
class ContractMember:
    """A member declared on a contract, before option resolution.

    Attributes:
        name: Attribute name on the contract
        declared_type: Declared type with any Annotated metadata stripped
        option: Option annotation, if the member carries one
        owner: Class that declares the member
        writable: False for properties without a setter
    """
    name: str
    declared_type: Any
    option: Optional[Option] = None
    owner: Optional[type] = None
    writable: bool = True


class ContractWalker:
    """Enumerates the settings of a contract across its inheritance graph.

    Each ancestor is visited at most once, however many paths reach it,
    and a member name collected from an earlier visited class shadows the
    same name on later ones. Because the walk is breadth-first, the
    shallowest declaration of a member wins.

    Usage:
        members = ContractWalker().discover(MySettings)
    """

    def discover(self, contract: type) -> list[ContractMember]:
        """Return the contract's members, own members first.

        Members of closer ancestors precede those of farther ones, and
        members of one class keep their declaration order.
        """
        if not isinstance(contract, type):
            raise TypeError(f"Contract must be a class, got {contract!r}")

        members: list[ContractMember] = []
        collected: set[str] = set()

        considered = {contract}
        queue = deque([contract])

        while queue:
            klass = queue.popleft()

            for base in klass.__bases__:
                if base in _NON_CONTRACT_BASES or base in considered:
                    continue
                considered.add(base)
                queue.append(base)

            for member in self._declared_members(klass, contract):
                if member.name in collected:
                    continue
                collected.add(member.name)
                members.append(member)

        logger.debug(
            f"Discovered {len(members)} members on {contract.__qualname__} "
            f"across {len(considered)} classes"
        )
        return members

    def _declared_members(self, klass: type, contract: type) -> list[ContractMember]:
        """Members declared directly on klass, in declaration order."""
        members = []
        annotations = inspect.get_annotations(klass, eval_str=True)

        for name, annotation in annotations.items():
            if name.startswith("_") or get_origin(annotation) is ClassVar:
                continue
            declared_type, option = _split_annotated(annotation)
            value, overridden = _class_value(contract, klass, name)
            option = _merge_class_value(option, value, overridden)
            members.append(ContractMember(
                name=name,
                declared_type=declared_type,
                option=option,
                owner=klass,
            ))

        for name, value in klass.__dict__.items():
            if name.startswith("_") or name in annotations:
                continue
            if not isinstance(value, property) or value.fget is None:
                continue
            hints = typing.get_type_hints(value.fget, include_extras=True)
            if "return" not in hints:
                continue
            declared_type, option = _split_annotated(hints["return"])
            members.append(ContractMember(
                name=name,
                declared_type=declared_type,
                option=option,
                owner=klass,
                writable=value.fset is not None,
            ))

        return members


def _split_annotated(annotation: Any) -> tuple[Any, Optional[Option]]:
    """Separate ``Annotated[T, Option(...)]`` into T and the option."""
    if get_origin(annotation) is not Annotated:
        return annotation, None
    inner, *metadata = get_args(annotation)
    option = next((m for m in metadata if isinstance(m, Option)), None)
    return inner, option


def _class_value(contract: type, klass: type, name: str) -> tuple[Any, bool]:
    """Value of name as seen from the contract, and whether it shadows klass.

    Follows attribute lookup: the nearest class in the contract's MRO that
    assigns name supplies the value, so ``port = 8080`` on a subclass
    overrides an inherited ``port: int = 80``.
    """
    for owner in contract.__mro__:
        if name in owner.__dict__:
            return owner.__dict__[name], owner is not klass
    return _MISSING, False


def _merge_class_value(
    option: Optional[Option],
    value: Any,
    overridden: bool = False,
) -> Optional[Option]:
    """Fold a member's class attribute value into its option.

    An ``Option`` assigned as the value takes precedence over one from
    ``Annotated``; a plain value becomes the default unless the option
    already has one. A plain value assigned further down the hierarchy
    (overridden) replaces any inherited default.
    """
    if value is _MISSING:
        return option
    if isinstance(value, Option):
        return value
    if isinstance(value, (property, staticmethod, classmethod)) or inspect.isfunction(value):
        return option
    if option is None:
        return Option(default=value)
    if option.default is None or overridden:
        return replace(option, default=value)
    return option
