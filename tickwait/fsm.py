from __future__ import annotations

from statemachine import State, StateMachine

from tickwait.outcome import Outcome


class OperationFSM(StateMachine):
    """Lifecycle of a single wait operation.

    One non-final state and one final state per outcome. Final states have no
    outgoing transitions, so a second outcome raises `TransitionNotAllowed`.
    A hard stop through the handle lands in `canceled` like a user cancel;
    the engine decides which callbacks run, the FSM only guards transitions.
    """

    running = State("running", value="running", initial=True)
    completed = State(Outcome.COMPLETED.value, value=Outcome.COMPLETED.value, final=True)
    canceled = State(Outcome.CANCELED.value, value=Outcome.CANCELED.value, final=True)
    canceled_by_system = State(
        Outcome.CANCELED_BY_SYSTEM.value,
        value=Outcome.CANCELED_BY_SYSTEM.value,
        final=True,
    )

    complete = running.to(completed)
    cancel = running.to(canceled)
    hard_stop = running.to(canceled)
    cancel_by_system = running.to(canceled_by_system)

    @property
    def is_running(self) -> bool:
        return self.current_state.value == "running"

    @property
    def outcome(self) -> Outcome | None:
        if self.is_running:
            return None
        return Outcome(str(self.current_state.value))
