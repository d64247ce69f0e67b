"""Tests for argument matchers and the Arg factory."""

from enum import Enum

import pytest

from understudy.core.errors import DeclarationError
from understudy.core.matchers import (
    AnyOfTypeMatcher,
    Arg,
    ExactMatcher,
    FunctionValueMatcher,
    PredicateMatcher,
    as_matcher,
)
from understudy.tests.fakes import Point, Priority


class Opaque:
    """A type that never claimed the comparable capability."""


# ============================================================================
# Exact
# ============================================================================


def test_exact_matches_equal_value() -> None:
    """eq() matches a value equal under the capability."""
    matcher = Arg.eq("hello")
    assert isinstance(matcher, ExactMatcher)
    assert matcher.matches("hello")
    assert not matcher.matches("world")


def test_exact_rejects_other_concrete_types() -> None:
    """eq() is False for any other concrete type."""
    matcher = Arg.eq(42)
    assert not matcher.matches(42.0)
    assert not matcher.matches("42")
    assert not matcher.matches(None)


def test_exact_none_matches_only_none() -> None:
    """eq(None) matches None and nothing else."""
    matcher = Arg.eq(None)
    assert matcher.matches(None)
    assert not matcher.matches(0)
    assert not matcher.matches("")


def test_exact_with_user_type() -> None:
    """eq() works with user-defined comparable values."""
    matcher = Arg.eq(Point(1, 2))
    assert matcher.matches(Point(1, 2))
    assert not matcher.matches(Point(3, 4))


def test_exact_with_non_comparable_value_fails_at_declaration() -> None:
    """eq() on a non-comparable value fails immediately."""
    with pytest.raises(DeclarationError):
        Arg.eq(Opaque())


# ============================================================================
# AnyOfType
# ============================================================================


def test_any_accepts_every_value_of_type() -> None:
    """any(T) accepts every T."""
    matcher = Arg.any(str)
    assert matcher.matches("")
    assert matcher.matches("anything")


def test_any_rejects_other_types() -> None:
    """any(T) rejects values of a different type."""
    matcher = Arg.any(str)
    assert not matcher.matches(1)
    assert not matcher.matches(b"bytes")


def test_any_int_rejects_bool() -> None:
    """any(int) treats bool as a different type, as eq() does."""
    assert not Arg.any(int).matches(True)
    assert not Arg.any(int).matches(False)
    assert Arg.any(bool).matches(True)
    assert not Arg.any(bool).matches(1)


def test_any_enum_rejects_members_of_other_enums() -> None:
    """Enums share a capability entry but any(E) still only accepts E."""

    class Colour(Enum):
        RED = 1

    assert Arg.any(Priority).matches(Priority.HIGH)
    assert not Arg.any(Priority).matches(Colour.RED)


def test_any_rejects_none_by_default() -> None:
    """any(T) with an undecided policy rejects None."""
    assert not Arg.any(str).matches(None)


def test_any_or_none_accepts_none() -> None:
    """any_or_none(T) accepts None as well as T."""
    matcher = Arg.any_or_none(str)
    assert matcher.matches(None)
    assert matcher.matches("x")
    assert not matcher.matches(1)


def test_with_none_policy_settles_undecided_matcher() -> None:
    """An undecided matcher takes the policy it is given."""
    settled = Arg.any(int).with_none_policy(True)
    assert settled.matches(None)
    assert settled.matches(3)


def test_with_none_policy_keeps_explicit_choice() -> None:
    """An explicit policy is not overridden."""
    matcher = AnyOfTypeMatcher(int, accepts_none=False)
    assert matcher.with_none_policy(True) is matcher
    assert not matcher.matches(None)


def test_any_exposes_placeholder() -> None:
    """any(T) holds the capability's placeholder."""
    assert Arg.any(Point).placeholder == Point(0, 0)
    assert Arg.any(Priority).placeholder is Priority.LOW


def test_any_on_non_comparable_type_fails_at_declaration() -> None:
    """any(T) on a non-comparable type fails immediately."""
    with pytest.raises(DeclarationError, match="Opaque is not comparable"):
        Arg.any(Opaque)


# ============================================================================
# Predicate
# ============================================================================


def test_predicate_matches_when_true() -> None:
    """verify() follows the predicate."""
    matcher = Arg.verify(lambda value: value > 10)
    assert isinstance(matcher, PredicateMatcher)
    assert matcher.matches(11)
    assert not matcher.matches(10)


def test_predicate_tolerates_none() -> None:
    """A predicate that cannot handle None is a non-match, not an error."""
    matcher = Arg.verify(lambda value: value.startswith("a"))
    assert matcher.matches("abc")
    assert not matcher.matches(None)


def test_predicate_may_accept_none() -> None:
    """None is handed to the predicate."""
    assert Arg.verify(lambda value: value is None).matches(None)


def test_predicate_errors_outside_type_mismatch_propagate() -> None:
    """Only type-mismatch style errors are swallowed."""

    def explode(value: object) -> bool:
        raise KeyError("boom")

    with pytest.raises(KeyError):
        Arg.verify(explode).matches("x")


def test_predicate_must_be_callable() -> None:
    """verify() rejects non-callables."""
    with pytest.raises(TypeError):
        Arg.verify("not callable")  # type: ignore[arg-type]


# ============================================================================
# Function value
# ============================================================================


def test_function_value_matches_anything() -> None:
    """function_value() matches unconditionally."""
    matcher = Arg.function_value()
    assert isinstance(matcher, FunctionValueMatcher)
    assert matcher.matches(lambda: None)
    assert matcher.matches(print)
    assert matcher.matches(None)


# ============================================================================
# Helpers
# ============================================================================


def test_as_matcher_wraps_literals() -> None:
    """Literals in a declaration become exact matchers."""
    wrapped = as_matcher("x")
    assert isinstance(wrapped, ExactMatcher)
    assert wrapped.matches("x")


def test_as_matcher_keeps_matchers() -> None:
    """Matchers pass through untouched."""
    matcher = Arg.any(int)
    assert as_matcher(matcher) is matcher


def test_as_matcher_rejects_functions() -> None:
    """Functions must be declared with function_value()."""
    with pytest.raises(DeclarationError):
        as_matcher(lambda: None)


def test_matcher_descriptions() -> None:
    """Matchers render readably for reports."""

    def is_positive(value: int) -> bool:
        return value > 0

    assert Arg.eq("x").describe() == "eq('x')"
    assert Arg.any(int).describe() == "any<int>"
    assert Arg.any_or_none(int).describe() == "any<int>?"
    assert Arg.verify(is_positive).describe() == "verify(is_positive)"
    assert Arg.function_value().describe() == "function_value"
    assert repr(Arg.eq(3)) == "eq(3)"
