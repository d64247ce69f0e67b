"""Comparable-value capability.

A value type must claim this capability before it can appear in an
exact-match or any-of-type argument matcher. The capability provides two
things:

- a placeholder instance usable as "any value of this type"
- value equality against another value, which is False (never an error)
  when the other value has a different concrete type

Types the caller owns implement the ``Comparable`` ABC. Types the caller
does not own (builtins, enums) are registered with ``register_comparable``.
"""

import enum
import logging
import operator
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import DeclarationError

logger = logging.getLogger(__name__)


class Comparable(ABC):
    """Capability implemented by value types usable inside argument patterns."""

    @classmethod
    @abstractmethod
    def any_value(cls) -> "Comparable":
        """Return the canonical placeholder instance of this type."""

    @abstractmethod
    def equals(self, other: object) -> bool:
        """Return True when ``other`` has the same value as this instance.

        Must return False, not raise, when ``other`` is of a different
        concrete type.
        """


@dataclass(frozen=True)
class _Capability:
    """Capability entry for a type registered from outside."""

    type_: type
    placeholder: Callable[[type], Any]
    equals: Callable[[Any, Any], bool]


_registry: dict[type, _Capability] = {}


def register_comparable(
    type_: type,
    placeholder: Any,
    equals: Callable[[Any, Any], bool] | None = None,
) -> None:
    """Give ``type_`` the comparable capability.

    Args:
        type_: Type to register. Subclasses inherit the registration
            unless registered themselves.
        placeholder: Placeholder value, or a callable taking the concrete
            type and returning one.
        equals: Equality between two values of the type. Defaults to ``==``.
    """
    factory = placeholder if callable(placeholder) else (lambda _type: placeholder)
    _registry[type_] = _Capability(
        type_=type_,
        placeholder=factory,
        equals=equals or operator.eq,
    )
    logger.debug(f"Registered comparable type {type_.__name__}")


def _lookup(type_: type) -> _Capability | None:
    for klass in type_.__mro__:
        entry = _registry.get(klass)
        if entry is not None:
            return entry
    return None


def is_comparable(type_: type) -> bool:
    """Return True when values of ``type_`` may be used in argument patterns."""
    if not isinstance(type_, type):
        return False
    return issubclass(type_, Comparable) or _lookup(type_) is not None


def placeholder_for(type_: type) -> Any:
    """Return the "any value" placeholder for ``type_``.

    Raises:
        DeclarationError: If ``type_`` does not implement the capability.
    """
    if not is_comparable(type_):
        raise DeclarationError(
            f"{getattr(type_, '__name__', type_)!s} is not comparable; implement "
            f"Comparable or call register_comparable() before matching on it"
        )
    if issubclass(type_, Comparable):
        return type_.any_value()
    entry = _lookup(type_)
    assert entry is not None
    return entry.placeholder(type_)


def require_comparable_value(value: Any) -> None:
    """Fail fast when ``value`` cannot take part in exact matching.

    ``None`` is always accepted.

    Raises:
        DeclarationError: If the value's type does not implement the capability.
    """
    if value is None:
        return
    if not is_comparable(type(value)):
        raise DeclarationError(
            f"Cannot match on {value!r}: {type(value).__name__} is not comparable; "
            f"implement Comparable, call register_comparable(), or use Arg.verify()"
        )


def values_equal(expected: Any, actual: Any) -> bool:
    """Compare two values through the comparable capability.

    Both None is a match; exactly one None is not. Values whose concrete
    types map to different capability entries never match.
    """
    if expected is None or actual is None:
        return expected is None and actual is None

    if isinstance(expected, Comparable):
        if not isinstance(actual, Comparable):
            return False
        return bool(expected.equals(actual))

    expected_entry = _lookup(type(expected))
    if expected_entry is None:
        raise DeclarationError(
            f"{type(expected).__name__} is not comparable and cannot be matched exactly"
        )
    if _lookup(type(actual)) is not expected_entry:
        return False
    return bool(expected_entry.equals(expected, actual))


def is_value_of(value: Any, type_: type) -> bool:
    """Return True when ``value`` counts as a value of ``type_``.

    A subclass holding its own capability entry is a different type, so
    ``True`` is not a value of ``int``.
    """
    if not isinstance(value, type_):
        return False
    if issubclass(type_, Comparable):
        return True
    return _lookup(type(value)) is _lookup(type_)


def _first_member(enum_type: type) -> Any:
    members = list(enum_type)
    if not members:
        raise DeclarationError(f"Enum {enum_type.__name__} has no members")
    return members[0]


register_comparable(str, "")
register_comparable(bytes, b"")
register_comparable(bool, False)
register_comparable(int, 0)
register_comparable(float, 0.0)
register_comparable(complex, 0j)
register_comparable(tuple, lambda _type: ())
register_comparable(list, lambda _type: [])
register_comparable(dict, lambda _type: {})
register_comparable(set, lambda _type: set())
register_comparable(frozenset, lambda _type: frozenset())
register_comparable(enum.Enum, _first_member)


__all__ = [
    "Comparable",
    "is_comparable",
    "is_value_of",
    "placeholder_for",
    "register_comparable",
    "require_comparable_value",
    "values_equal",
]
