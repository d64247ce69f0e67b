"""Resolution engine: turns an incoming call into a return value.

Resolution of one call:

1. Record the call in the history.
2. Find every registration accepting the call, in declaration order.
3. Let each matching registration's matchers observe their arguments,
   so captors see every match, not only the winning one.
4. Count the match on every matching registration, whatever its kind.
5. Collect the actions of the matching stubs.
6. Scan those actions most-recently-declared first:
   - the first side effect runs, and it is the only one that runs
   - the first declared error, if any, is raised
   - otherwise the first fixed return value wins
   - otherwise the first computed return value is computed
   A fixed return value beats a computed one even when the computed one
   was declared later.
"""

import logging

from .models import (
    Action,
    Call,
    RaiseError,
    Registration,
    RegistrationKind,
    Resolution,
    ReturnComputed,
    ReturnValue,
    SideEffect,
)
from .store import RegistrationStore

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Matches calls against a store and executes the winning actions."""

    def __init__(self, store: RegistrationStore):
        self.store = store

    def resolve(self, call: Call) -> Resolution:
        """Record ``call``, update matched registrations and compute its result."""
        self.store.record(call)

        matching = self.find_matching(call)
        for registration in matching:
            registration.observe(call)
            registration.record_match()

        acting = [r for r in matching if r.kind is RegistrationKind.STUB]
        if not acting:
            logger.info(f"No stub matched {call.describe()}")
            return Resolution.absent()

        logger.debug(
            f"{call.describe()} matched {len(matching)} registration(s), "
            f"{len(acting)} stub(s)"
        )
        return self.execute(call, acting)

    def find_matching(self, call: Call) -> list[Registration]:
        """Registrations accepting ``call``, in declaration order."""
        return [r for r in self.store.registrations if r.accepts(call)]

    def execute(self, call: Call, stubs: list[Registration]) -> Resolution:
        """Run the winning actions of ``stubs`` against ``call``."""
        side_effect: SideEffect | None = None
        error: RaiseError | None = None
        returned: ReturnValue | None = None
        computed: ReturnComputed | None = None

        for action in self._most_recent_first(stubs):
            if isinstance(action, SideEffect) and side_effect is None:
                side_effect = action
            elif isinstance(action, RaiseError) and error is None:
                error = action
            elif isinstance(action, ReturnValue) and returned is None:
                returned = action
            elif isinstance(action, ReturnComputed) and computed is None:
                computed = action

        if side_effect is not None:
            side_effect.effect(call)
        if error is not None:
            raise error.error
        if returned is not None:
            return Resolution.of(returned.value)
        if computed is not None:
            return Resolution.of(computed.compute(call))
        return Resolution.absent()

    @staticmethod
    def _most_recent_first(stubs: list[Registration]) -> list[Action]:
        return [
            action
            for registration in reversed(stubs)
            for action in reversed(registration.actions)
        ]
