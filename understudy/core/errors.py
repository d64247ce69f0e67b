"""Error taxonomy for the Understudy test-double engine.

- DeclarationError: a stub or expectation was declared incorrectly.
  Raised immediately, at declaration time.
- MissingStubError: a call that must produce a value resolved to nothing.
  Raised at the mock-creation boundary, never by the engine itself.
- VerificationError: one or more expectations were not met.
  Raised only by an explicit verify() call.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .verifier import VerificationReport


class UnderstudyError(Exception):
    """Base class for every error raised by Understudy."""


class DeclarationError(UnderstudyError):
    """A matcher, stub or expectation could not be declared."""


class MissingStubError(UnderstudyError):
    """A call required a value but no stub supplied one."""

    def __init__(self, operation: str, description: str):
        self.operation = operation
        self.description = description
        super().__init__(
            f"No stub supplied a value for {description}; "
            f"declare one with stub().call(...).and_return(...)"
        )


class VerificationError(UnderstudyError, AssertionError):
    """Expectations declared on a mock were not met.

    Subclasses AssertionError so test runners report it as a test
    failure rather than an error.
    """

    def __init__(self, report: "VerificationReport"):
        self.report = report
        super().__init__(str(report))
