"""Shared type helpers for typedconfig.

Used by the discovery engine, the value parser and the binding so that
all of them agree on what "nullable" and "runtime class" mean.
"""

import types
from typing import Any, Optional, Union, get_args, get_origin

_UNION_TYPES = (Union, types.UnionType)


def is_optional(tp: Any) -> bool:
    """Whether tp is a nullable wrapper, i.e. ``Optional[T]`` or ``T | None``."""
    if get_origin(tp) not in _UNION_TYPES:
        return False
    args = get_args(tp)
    return len(args) == 2 and type(None) in args


def unwrap_optional(tp: Any) -> Any:
    """Strip a nullable wrapper: ``Optional[T]`` becomes ``T``.

    Unions of more than one non-None type are not nullable wrappers and
    are returned unchanged.
    """
    if not is_optional(tp):
        return tp
    return next(arg for arg in get_args(tp) if arg is not type(None))


def runtime_class(tp: Any) -> Optional[type]:
    """Concrete class values of tp are instances of, or None.

    ``list[int]`` maps to ``list``; ``Any``, unions and ``Literal`` have
    no single runtime class.
    """
    if tp is Any:
        return None
    if isinstance(tp, type):
        return tp
    origin = get_origin(tp)
    if isinstance(origin, type) and origin not in _UNION_TYPES:
        return origin
    return None


def conforms(value: Any, cls: type) -> bool:
    """Whether value is usable where cls is expected.

    Subclasses are accepted (``PosixPath`` for ``Path``), but ``bool``
    only stands in for ``bool`` and never for ``int``.
    """
    if isinstance(value, bool) and cls is not bool:
        return False
    return isinstance(value, cls)
