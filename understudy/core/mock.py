"""Mock instances and the declaration API.

A declaration is written by invoking the mocked operation with matchers in
place of real arguments, inside a builder's ``call``::

    mock.stub().call(mock.bar(Arg.eq("hello"), Arg.eq(42))).and_return(True)
    mock.expect().call(mock.bar(Arg.any(str), 7), times=2)

``stub()`` / ``expect()`` / ``reject()`` put the mock in declaring mode.
The next call of a mocked operation is then recorded as the declared
pattern instead of being resolved, and the builder's ``call`` turns it
into a registration. A declaration whose statement fails before the mocked
operation is invoked is dropped, and the next call is resolved normally.
"""

import logging
import weakref
from collections.abc import Callable, Mapping
from typing import Any

from .errors import DeclarationError
from .matchers import AnyOfTypeMatcher, ArgumentMatcher, as_matcher
from .models import (
    Call,
    RaiseError,
    Registration,
    RegistrationKind,
    Resolution,
    ReturnComputed,
    ReturnValue,
    SideEffect,
)
from .ports import MockPort
from .resolution import ResolutionEngine
from .store import RegistrationStore
from .verifier import VerificationReport, Verifier

logger = logging.getLogger(__name__)

_MISSING = object()


def _warn_abandoned(kind: RegistrationKind) -> None:
    logger.warning(
        f"Abandoning an unfinished {kind.value} declaration; "
        f"no mocked operation was invoked for it"
    )


class _Declaration:
    """Collects the pattern of one declaration until it is completed."""

    kind: RegistrationKind

    def __init__(self, mock: "MockInstance"):
        self._mock = mock
        self._operation: str | None = None
        self._matchers: tuple[ArgumentMatcher, ...] = ()
        self._keyword_matchers: dict[str, ArgumentMatcher] = {}

    def record(
        self, operation: str, args: tuple[Any, ...], kwargs: Mapping[str, Any]
    ) -> None:
        """Take the invoked operation and its arguments as the pattern."""
        self._operation = operation
        self._matchers = tuple(self._mock._settle(as_matcher(arg)) for arg in args)
        self._keyword_matchers = {
            key: self._mock._settle(as_matcher(value)) for key, value in kwargs.items()
        }

    def _complete(self, expected_count: int | None = None) -> Registration:
        if self._operation is None:
            self._mock._abandon(self)
            raise DeclarationError(
                f"No mocked operation was invoked while declaring a {self.kind.value}; "
                f"write it as mock.{self.kind.value}().call(mock.method(...))"
            )
        registration = Registration(
            operation=self._operation,
            matchers=self._matchers,
            keyword_matchers=self._keyword_matchers,
            kind=self.kind,
            expected_count=expected_count,
        )
        return self._mock._store.add(registration)


class StubDeclaration(_Declaration):
    """Builder returned by ``stub()``."""

    kind = RegistrationKind.STUB

    def call(self, invocation: Any) -> "StubHandle":
        """Complete the stub declared by ``invocation``.

        Args:
            invocation: Result of invoking the mocked operation with
                matchers. Its value is ignored.
        """
        return StubHandle(self._complete())


class ExpectationDeclaration(_Declaration):
    """Builder returned by ``expect()``."""

    kind = RegistrationKind.EXPECTATION

    def call(self, invocation: Any, times: int | None = 1) -> "ExpectationHandle":
        """Complete the expectation declared by ``invocation``.

        Args:
            invocation: Result of invoking the mocked operation with
                matchers. Its value is ignored.
            times: Exact number of matching calls required, or None for
                at least one.
        """
        return ExpectationHandle(self._complete(expected_count=times), self._mock)


class RejectionDeclaration(_Declaration):
    """Builder returned by ``reject()``."""

    kind = RegistrationKind.REJECTION

    def call(self, invocation: Any) -> "ExpectationHandle":
        """Complete the rejection declared by ``invocation``."""
        return ExpectationHandle(self._complete(), self._mock)


class StubHandle:
    """Chains actions onto a declared stub.

    Each method appends one action and returns the handle, so actions can
    be chained. When several actions of the same kind apply to a call, the
    most recently declared one wins.
    """

    def __init__(self, registration: Registration):
        self.registration = registration

    def and_return(
        self,
        value: Any = _MISSING,
        *,
        computing: Callable[[Call], Any] | None = None,
    ) -> "StubHandle":
        """Return ``value``, or the result of ``computing(call)``.

        A fixed value always beats a computed one on the same call.
        """
        if (value is _MISSING) == (computing is None):
            raise TypeError("and_return() takes exactly one of a value or computing=")
        if computing is not None:
            self.registration.add_action(ReturnComputed(computing))
        else:
            self.registration.add_action(ReturnValue(value))
        return self

    def and_do(self, side_effect: Callable[[Call], None]) -> "StubHandle":
        """Run ``side_effect(call)`` when the stub acts."""
        self.registration.add_action(SideEffect(side_effect))
        return self

    def and_raise(self, error: BaseException) -> "StubHandle":
        """Raise ``error`` when the stub acts."""
        self.registration.add_action(RaiseError(error))
        return self


class ExpectationHandle:
    """A declared expectation or rejection."""

    def __init__(self, registration: Registration, mock: "MockInstance"):
        self.registration = registration
        self._mock = mock

    @property
    def matched_count(self) -> int:
        return self.registration.matched_count

    def verify(self) -> VerificationReport:
        """Check this expectation alone.

        Raises:
            VerificationError: If it is not met.
        """
        return self._mock._verifier.verify_one(self.registration)


class MockInstance(MockPort):
    """One test double: a registration store, its history, and the engine.

    Substitutes inherit from it, or hold one through ``DelegatingMock``.
    A substitute defining its own ``__init__`` must call ``super().__init__()``.

    Args:
        any_matches_none: Whether ``Arg.any(T)`` matchers declared on this
            mock without an explicit None policy accept None.
        max_reported_calls: Received calls listed per failure in
            verification reports.
    """

    def __init__(self, any_matches_none: bool = False, max_reported_calls: int = 10):
        self._store = RegistrationStore()
        self._engine = ResolutionEngine(self._store)
        self._verifier = Verifier(self._store, max_reported_calls=max_reported_calls)
        self._any_matches_none = any_matches_none
        self._pending: weakref.ref[_Declaration] | None = None

    def resolve(
        self,
        operation: str,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Resolution:
        kwargs = dict(kwargs or {})
        declaration = self._pending_declaration()
        if declaration is not None:
            self._pending = None
            declaration.record(operation, tuple(args), kwargs)
            return Resolution(declaring=True)
        return self._engine.resolve(Call(operation, tuple(args), kwargs))

    def stub(self) -> StubDeclaration:
        return self._begin(StubDeclaration(self))

    def expect(self) -> ExpectationDeclaration:
        return self._begin(ExpectationDeclaration(self))

    def reject(self) -> RejectionDeclaration:
        return self._begin(RejectionDeclaration(self))

    def verification_report(self) -> VerificationReport:
        return self._verifier.report()

    def verify(self) -> VerificationReport:
        return self._verifier.verify()

    @property
    def history(self) -> tuple[Call, ...]:
        return self._store.history

    @property
    def registrations(self) -> tuple[Registration, ...]:
        """Every registration in declaration order."""
        return self._store.registrations

    def _begin(self, declaration: _Declaration) -> Any:
        unfinished = self._pending_declaration()
        if unfinished is not None:
            _warn_abandoned(unfinished.kind)
        kind = declaration.kind
        # Only a weak reference: the builder lives as long as the statement
        # declaring it, so a statement that fails before the mocked operation
        # runs (a bad matcher, say) takes its declaration with it.
        self._pending = weakref.ref(
            declaration, lambda ref: self._discard(ref, kind)
        )
        return declaration

    def _pending_declaration(self) -> _Declaration | None:
        if self._pending is None:
            return None
        return self._pending()

    def _discard(self, ref: weakref.ref[_Declaration], kind: RegistrationKind) -> None:
        if self._pending is ref:
            self._pending = None
            _warn_abandoned(kind)

    def _abandon(self, declaration: _Declaration) -> None:
        if self._pending_declaration() is declaration:
            self._pending = None

    def _settle(self, matcher: ArgumentMatcher) -> ArgumentMatcher:
        if isinstance(matcher, AnyOfTypeMatcher):
            return matcher.with_none_policy(self._any_matches_none)
        return matcher


class DelegatingMock(MockPort):
    """Base for substitutes that hold a ``MockInstance`` instead of being one."""

    def __init__(self, mock: MockInstance | None = None):
        self.mock = mock if mock is not None else MockInstance()

    def resolve(
        self,
        operation: str,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Resolution:
        return self.mock.resolve(operation, args, kwargs)

    def stub(self) -> StubDeclaration:
        return self.mock.stub()

    def expect(self) -> ExpectationDeclaration:
        return self.mock.expect()

    def reject(self) -> RejectionDeclaration:
        return self.mock.reject()

    def verification_report(self) -> VerificationReport:
        return self.mock.verification_report()

    def verify(self) -> VerificationReport:
        return self.mock.verify()

    @property
    def history(self) -> tuple[Call, ...]:
        return self.mock.history
