"""Argument matchers.

An argument matcher answers one question about a single actual argument:
does this value satisfy me? Matchers are placed positionally (or by
keyword) in a declaration such as::

    mock.stub().call(mock.bar(Arg.eq("hello"), Arg.any(int))).and_return(True)

All variants are stateless except the captor (see captor.py).
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .comparable import (
    is_value_of,
    placeholder_for,
    require_comparable_value,
    values_equal,
)

logger = logging.getLogger(__name__)


class ArgumentMatcher(ABC):
    """A predicate over one actual call argument."""

    @abstractmethod
    def matches(self, actual: Any) -> bool:
        """Return True when ``actual`` satisfies this matcher."""

    def observe(self, actual: Any) -> None:
        """Observe an actual value after its registration matched.

        No-op for every matcher except captors.
        """

    @abstractmethod
    def describe(self) -> str:
        """Human-readable form used in verification reports."""

    def __repr__(self) -> str:
        return self.describe()


class ExactMatcher(ArgumentMatcher):
    """Matches values equal to the expected value.

    The expected value must be comparable (or None); this is checked
    when the matcher is built.
    """

    def __init__(self, expected: Any):
        require_comparable_value(expected)
        self.expected = expected

    def matches(self, actual: Any) -> bool:
        return values_equal(self.expected, actual)

    def describe(self) -> str:
        return f"eq({self.expected!r})"


class AnyOfTypeMatcher(ArgumentMatcher):
    """Matches any value of the declared type.

    ``accepts_none`` decides whether None matches. When left as None the
    policy is inherited from the mock the matcher is declared on, see
    ``with_none_policy``.
    """

    def __init__(self, type_: type, accepts_none: bool | None = None):
        self.placeholder = placeholder_for(type_)
        self.type_ = type_
        self.accepts_none = accepts_none

    def matches(self, actual: Any) -> bool:
        if actual is None:
            return bool(self.accepts_none)
        return is_value_of(actual, self.type_)

    def with_none_policy(self, accepts_none: bool) -> "AnyOfTypeMatcher":
        """Return this matcher with an undecided None policy settled."""
        if self.accepts_none is not None:
            return self
        return AnyOfTypeMatcher(self.type_, accepts_none=accepts_none)

    def describe(self) -> str:
        suffix = "?" if self.accepts_none else ""
        return f"any<{self.type_.__name__}>{suffix}"


class PredicateMatcher(ArgumentMatcher):
    """Matches values for which a predicate returns True.

    None is passed to the predicate like any other value. A predicate that
    trips over an unexpected value (TypeError, AttributeError, ValueError)
    counts as a non-match.
    """

    def __init__(self, predicate: Callable[[Any], bool]):
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {predicate!r}")
        self.predicate = predicate

    def matches(self, actual: Any) -> bool:
        try:
            return bool(self.predicate(actual))
        except (TypeError, AttributeError, ValueError) as e:
            logger.debug(f"Predicate {self.describe()} rejected {actual!r}: {e}")
            return False

    def describe(self) -> str:
        name = getattr(self.predicate, "__name__", type(self.predicate).__name__)
        return f"verify({name})"


class FunctionValueMatcher(ArgumentMatcher):
    """Matches any function argument.

    Functions cannot be compared by value, so this variant accepts every
    actual value unconditionally.
    """

    def matches(self, actual: Any) -> bool:
        return True

    def describe(self) -> str:
        return "function_value"


def as_matcher(value: Any) -> ArgumentMatcher:
    """Wrap a literal placed in a declaration as an exact matcher."""
    if isinstance(value, ArgumentMatcher):
        return value
    return ExactMatcher(value)


class Arg:
    """Factory for argument matchers."""

    @staticmethod
    def eq(value: Any) -> ExactMatcher:
        """Match arguments equal to ``value``."""
        return ExactMatcher(value)

    @staticmethod
    def any(type_: type) -> AnyOfTypeMatcher:
        """Match any argument of ``type_``. None follows the mock's policy."""
        return AnyOfTypeMatcher(type_)

    @staticmethod
    def any_or_none(type_: type) -> AnyOfTypeMatcher:
        """Match any argument of ``type_``, and None."""
        return AnyOfTypeMatcher(type_, accepts_none=True)

    @staticmethod
    def verify(predicate: Callable[[Any], bool]) -> PredicateMatcher:
        """Match arguments for which ``predicate`` returns True."""
        return PredicateMatcher(predicate)

    @staticmethod
    def function_value() -> FunctionValueMatcher:
        """Match any function argument."""
        return FunctionValueMatcher()


__all__ = [
    "AnyOfTypeMatcher",
    "Arg",
    "ArgumentMatcher",
    "ExactMatcher",
    "FunctionValueMatcher",
    "PredicateMatcher",
    "as_matcher",
]
