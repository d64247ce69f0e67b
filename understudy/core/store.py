"""Per-mock registration store and invocation history."""

import logging

from .models import Call, Registration, RegistrationKind

logger = logging.getLogger(__name__)


class RegistrationStore:
    """Insertion-ordered registrations plus the running call history.

    Registrations are never reordered or removed: declaration order drives
    action precedence during resolution and report order during
    verification. The history is append-only.
    """

    def __init__(self) -> None:
        self._registrations: list[Registration] = []
        self._history: list[Call] = []

    def add(self, registration: Registration) -> Registration:
        """Append a registration and return it."""
        self._registrations.append(registration)
        logger.debug(
            f"Registered {registration.kind.value} #{len(self._registrations)}: "
            f"{registration.describe()}"
        )
        return registration

    @property
    def registrations(self) -> tuple[Registration, ...]:
        """All registrations in declaration order."""
        return tuple(self._registrations)

    def stubs(self) -> list[Registration]:
        """Stub registrations in declaration order."""
        return [r for r in self._registrations if r.kind is RegistrationKind.STUB]

    def checked(self) -> list[Registration]:
        """Expectations and rejections in declaration order."""
        return [r for r in self._registrations if r.kind is not RegistrationKind.STUB]

    def record(self, call: Call) -> None:
        """Append a call to the history."""
        self._history.append(call)

    @property
    def history(self) -> tuple[Call, ...]:
        """Every recorded call in order."""
        return tuple(self._history)

    def calls_to(self, operation: str) -> list[Call]:
        """Recorded calls of one operation in order."""
        return [call for call in self._history if call.operation == operation]
