"""Domain models for the Understudy test-double engine.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeAlias

from .errors import DeclarationError
from .matchers import ArgumentMatcher


@dataclass(frozen=True)
class Call:
    """One invocation of a mocked operation with its actual arguments."""

    operation: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any] | MappingProxyType[str, Any] = field(
        default_factory=dict
    )  # converted to proxy in __post_init__

    def __post_init__(self) -> None:
        """Freeze keyword arguments into a read-only proxy."""
        if isinstance(self.kwargs, dict):
            object.__setattr__(self, "kwargs", MappingProxyType(dict(self.kwargs)))

    def describe(self) -> str:
        """Render the call as ``operation(arg, ..., key=value)``."""
        parts = [repr(arg) for arg in self.args]
        parts.extend(f"{key}={value!r}" for key, value in self.kwargs.items())
        return f"{self.operation}({', '.join(parts)})"


@dataclass(frozen=True)
class ReturnValue:
    """Return a fixed value."""

    value: Any


@dataclass(frozen=True)
class ReturnComputed:
    """Return the result of a function of the call."""

    compute: Callable[[Call], Any]


@dataclass(frozen=True)
class SideEffect:
    """Run a function of the call for its effect."""

    effect: Callable[[Call], None]


@dataclass(frozen=True)
class RaiseError:
    """Raise an exception instead of returning."""

    error: BaseException


Action: TypeAlias = ReturnValue | ReturnComputed | SideEffect | RaiseError


class RegistrationKind(Enum):
    """What a registration does when a call matches it.

    - STUB: executes its actions
    - EXPECTATION: counts toward a required number of calls
    - REJECTION: must never match
    """

    STUB = "stub"
    EXPECTATION = "expectation"
    REJECTION = "rejection"


@dataclass
class Registration:
    """A declared call pattern.

    Holds one matcher per positional parameter plus one per keyword
    parameter. Stubs carry actions, expectations carry an expected count
    (None meaning "at least once").

    Note: ``matched_count`` only ever grows, through ``record_match``,
    which the resolution engine calls.
    """

    operation: str
    matchers: tuple[ArgumentMatcher, ...]
    kind: RegistrationKind
    keyword_matchers: dict[str, ArgumentMatcher] | MappingProxyType[
        str, ArgumentMatcher
    ] = field(default_factory=dict)
    actions: list[Action] = field(default_factory=list)
    expected_count: int | None = None
    matched_count: int = 0

    def __post_init__(self) -> None:
        """Validate registration invariants on creation."""
        if isinstance(self.keyword_matchers, dict):
            self.keyword_matchers = MappingProxyType(dict(self.keyword_matchers))
        if self.kind is not RegistrationKind.EXPECTATION and self.expected_count is not None:
            raise DeclarationError(
                f"Only expectations take an expected count, not {self.kind.value}s"
            )
        if self.expected_count is not None and self.expected_count < 0:
            raise DeclarationError(
                f"expected count must be non-negative, got {self.expected_count}"
            )

    @property
    def arity(self) -> int:
        """Number of positional parameters this pattern targets."""
        return len(self.matchers)

    def accepts(self, call: Call) -> bool:
        """Return True when every matcher accepts its actual argument."""
        if call.operation != self.operation:
            return False
        if len(call.args) != self.arity:
            return False
        if set(call.kwargs) != set(self.keyword_matchers):
            return False
        if not all(m.matches(a) for m, a in zip(self.matchers, call.args)):
            return False
        return all(
            matcher.matches(call.kwargs[key])
            for key, matcher in self.keyword_matchers.items()
        )

    def observe(self, call: Call) -> None:
        """Hand each actual argument to its matcher after a match."""
        for matcher, actual in zip(self.matchers, call.args):
            matcher.observe(actual)
        for key, matcher in self.keyword_matchers.items():
            matcher.observe(call.kwargs[key])

    def record_match(self) -> None:
        """Count one more matching call."""
        self.matched_count += 1

    def add_action(self, action: Action) -> None:
        """Append an action; only stubs act."""
        if self.kind is not RegistrationKind.STUB:
            raise DeclarationError(
                f"Cannot add actions to a {self.kind.value} on {self.describe()}"
            )
        self.actions.append(action)

    def describe(self) -> str:
        """Render the pattern as ``operation(matcher, ..., key=matcher)``."""
        parts = [matcher.describe() for matcher in self.matchers]
        parts.extend(
            f"{key}={matcher.describe()}"
            for key, matcher in self.keyword_matchers.items()
        )
        return f"{self.operation}({', '.join(parts)})"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one call, handed back to the substitute object.

    ``has_value`` is False when no stub supplied a return value, which is
    different from a stub explicitly returning None. ``declaring`` is True
    when the call was part of a declaration rather than a real invocation.
    """

    value: Any = None
    has_value: bool = False
    declaring: bool = False

    @classmethod
    def absent(cls) -> "Resolution":
        return cls()

    @classmethod
    def of(cls, value: Any) -> "Resolution":
        return cls(value=value, has_value=True)


__all__ = [
    "Action",
    "Call",
    "RaiseError",
    "Registration",
    "RegistrationKind",
    "Resolution",
    "ReturnComputed",
    "ReturnValue",
    "SideEffect",
]
