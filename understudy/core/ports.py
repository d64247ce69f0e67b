"""Port interface for substitute objects.

A substitute object stands in for a real collaborator in a test. It
obtains its mock machinery either by inheriting ``MockInstance`` or by
inheriting ``DelegatingMock`` and forwarding to a held ``MockInstance``.
Either way it satisfies ``MockPort``: every mocked method forwards its
actual arguments into ``call`` (or ``call_required``) and returns the
result::

    class GreeterMock(MockInstance, Greeter):
        def greet(self, name: str, times: int) -> str:
            return self.call_required(name, times)

The operation name is taken from the calling method, so the method body
never repeats it.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import MissingStubError
from .models import Call, Resolution

if TYPE_CHECKING:
    from .mock import (
        ExpectationDeclaration,
        RejectionDeclaration,
        StubDeclaration,
    )
    from .verifier import VerificationReport


def _calling_operation() -> str:
    """Name of the function that called the caller of this helper."""
    frame = inspect.currentframe()
    try:
        assert frame is not None and frame.f_back is not None
        caller = frame.f_back.f_back
        assert caller is not None
        return caller.f_code.co_name
    finally:
        del frame


class MockPort(ABC):
    """Capability shared by every substitute object."""

    @abstractmethod
    def resolve(
        self,
        operation: str,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Resolution:
        """Single entry point for a call of a mocked operation.

        While a declaration is in progress the call is recorded as the
        declared pattern instead of being resolved.
        """

    @abstractmethod
    def stub(self) -> "StubDeclaration":
        """Begin declaring a stub."""

    @abstractmethod
    def expect(self) -> "ExpectationDeclaration":
        """Begin declaring an expectation."""

    @abstractmethod
    def reject(self) -> "RejectionDeclaration":
        """Begin declaring a call that must never happen."""

    @abstractmethod
    def verification_report(self) -> "VerificationReport":
        """Check every expectation without raising."""

    @abstractmethod
    def verify(self) -> "VerificationReport":
        """Check every expectation, raising VerificationError on failure."""

    @property
    @abstractmethod
    def history(self) -> tuple[Call, ...]:
        """Every call received so far, in order."""

    def call(self, *args: Any, **kwargs: Any) -> Any:
        """Resolve a call of the calling method.

        Returns None when no stub supplied a value.
        """
        return self.resolve(_calling_operation(), args, kwargs).value

    def call_required(self, *args: Any, **kwargs: Any) -> Any:
        """Resolve a call of the calling method that must produce a value.

        Raises:
            MissingStubError: If no stub supplied a value for the call.
        """
        operation = _calling_operation()
        resolution = self.resolve(operation, args, kwargs)
        if resolution.has_value or resolution.declaring:
            return resolution.value
        raise MissingStubError(operation, Call(operation, args, kwargs).describe())
