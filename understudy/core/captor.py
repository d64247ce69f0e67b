"""Argument captor: a matcher that records what it sees."""

import logging
from typing import Any, Generic, TypeVar

from .matchers import ArgumentMatcher

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Captor(ArgumentMatcher, Generic[T]):
    """Matches every argument and remembers each value it is compared with.

    A captor never rejects a call. Each time a registration holding it
    matches, the actual argument is appended to the captor's history: None
    is kept positionally, values that are not instances of the captor's
    type are ignored.

    Example:
        captor = Captor(str)
        mock.stub().call(mock.bar(captor.capture(), Arg.eq(42))).and_return(True)
        mock.bar("a", 42)
        mock.bar("b", 42)
        assert captor.all == ["a", "b"]
        assert captor.latest == "b"
    """

    def __init__(self, type_: type = object):
        self.type_ = type_
        self._values: list[T | None] = []

    def capture(self) -> "Captor[T]":
        """Return the matcher to place in a declaration."""
        return self

    def matches(self, actual: Any) -> bool:
        return True

    def observe(self, actual: Any) -> None:
        if actual is None or isinstance(actual, self.type_):
            self._values.append(actual)
            logger.debug(f"{self.describe()} captured {actual!r}")

    @property
    def latest(self) -> T | None:
        """Most recently captured value, or None when nothing was captured."""
        if self._values:
            return self._values[-1]
        return None

    @property
    def all(self) -> list[T | None]:
        """Every captured value in call order."""
        return list(self._values)

    def describe(self) -> str:
        return f"captured<{getattr(self.type_, '__name__', self.type_)!s}>"


__all__ = ["Captor"]
