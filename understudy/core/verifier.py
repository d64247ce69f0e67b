"""Verification of expectations against recorded calls."""

import logging
from dataclasses import dataclass

from .errors import VerificationError
from .models import Registration, RegistrationKind
from .store import RegistrationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpectationFailure:
    """One unmet expectation or violated rejection."""

    operation: str
    pattern: str
    kind: RegistrationKind
    expected_count: int | None
    actual_count: int
    received: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        """Human-readable summary of the failure."""
        if self.kind is RegistrationKind.REJECTION:
            return (
                f"Rejected call {self.pattern} was called "
                f"{_times(self.actual_count)}"
            )
        if self.expected_count is None:
            return f"Expected call {self.pattern} at least once but it was never called"
        return (
            f"Expected call {self.pattern} {_times(self.expected_count)} "
            f"but it was called {_times(self.actual_count)}"
        )


@dataclass(frozen=True)
class VerificationReport:
    """Every failure found by one verification pass."""

    failures: tuple[ExpectationFailure, ...]
    checked: int

    @property
    def passed(self) -> bool:
        return not self.failures

    def __str__(self) -> str:
        if self.passed:
            return f"All {self.checked} expectation(s) met"
        lines = [f"{len(self.failures)} of {self.checked} expectation(s) not met:"]
        for failure in self.failures:
            lines.append(f"  - {failure.message}")
            if failure.received:
                lines.append(f"    received calls to {failure.operation}:")
                lines.extend(f"      {call}" for call in failure.received)
            elif failure.kind is RegistrationKind.EXPECTATION:
                lines.append(f"    no calls to {failure.operation} were received")
        return "\n".join(lines)


def _times(count: int) -> str:
    return "1 time" if count == 1 else f"{count} times"


class Verifier:
    """Replays a store's counts against its expectations.

    Verification never mutates the store, so repeated passes without new
    calls produce the same report.
    """

    def __init__(self, store: RegistrationStore, max_reported_calls: int = 10):
        self.store = store
        self.max_reported_calls = max_reported_calls

    def report(self) -> VerificationReport:
        """Check every expectation and rejection, collecting all failures."""
        checked = self.store.checked()
        failures = tuple(
            self.failure_for(registration)
            for registration in checked
            if not self.is_met(registration)
        )
        return VerificationReport(failures=failures, checked=len(checked))

    def verify(self) -> VerificationReport:
        """Check expectations, raising when any is unmet.

        Raises:
            VerificationError: Listing every unmet expectation.
        """
        report = self.report()
        if not report.passed:
            logger.info(f"Verification failed with {len(report.failures)} failure(s)")
            raise VerificationError(report)
        return report

    @staticmethod
    def is_met(registration: Registration) -> bool:
        """Whether one expectation or rejection holds right now."""
        if registration.kind is RegistrationKind.REJECTION:
            return registration.matched_count == 0
        if registration.expected_count is None:
            return registration.matched_count > 0
        return registration.matched_count == registration.expected_count

    def failure_for(self, registration: Registration) -> ExpectationFailure:
        calls = self.store.calls_to(registration.operation)
        return ExpectationFailure(
            operation=registration.operation,
            pattern=registration.describe(),
            kind=registration.kind,
            expected_count=registration.expected_count,
            actual_count=registration.matched_count,
            received=tuple(
                call.describe() for call in calls[: self.max_reported_calls]
            ),
        )

    def verify_one(self, registration: Registration) -> VerificationReport:
        """Check a single expectation or rejection.

        Raises:
            VerificationError: If it is not met.
        """
        failures = () if self.is_met(registration) else (self.failure_for(registration),)
        report = VerificationReport(failures=failures, checked=1)
        if not report.passed:
            raise VerificationError(report)
        return report
