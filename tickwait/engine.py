from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from tickwait.clock import Clock
from tickwait.errors import OperationTerminatedError
from tickwait.fsm import OperationFSM
from tickwait.outcome import Outcome
from tickwait.policy import Cadence, CadenceWait, Callback, Predicate, TerminationPolicy

logger = logging.getLogger(__name__)

DoneCallback = Callable[[Outcome], None]


@dataclass(slots=True)
class _Run:
    """Everything a running operation holds; dropped as soon as it terminates."""

    clock: Clock
    policy: TerminationPolicy
    cadence: Cadence
    cancel_when: Predicate | None
    on_tick: Callback | None
    on_complete: Callback | None
    on_canceled: Callback | None
    wait: CadenceWait | None = None


class Operation:
    """One cooperative wait, advanced by the host exactly once per tick.

    Every resumption runs the same order:

    1. liveness: a dead host ends the wait as `canceled_by_system`, even if the
       operation would also complete or cancel on this tick;
    2. cadence: spend one tick of the current frame/time cadence;
    3. user cancellation: the cancel predicate beats a completion due on the
       same tick;
    4. once the cadence is spent, the termination policy is evaluated and, if
       the operation goes on, the tick callback runs before the next cadence.

    `step()` returns None while the operation is suspended and the outcome on
    the tick it terminates. Resuming a terminal operation is an error.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        policy: TerminationPolicy,
        cadence: Cadence,
        cancel_when: Predicate | None = None,
        on_tick: Callback | None = None,
        on_complete: Callback | None = None,
        on_canceled: Callback | None = None,
        name: str = "operation",
    ) -> None:
        self.name = name
        self.cycles = 0
        self._run: _Run | None = _Run(
            clock=clock,
            policy=policy,
            cadence=cadence,
            cancel_when=cancel_when,
            on_tick=on_tick,
            on_complete=on_complete,
            on_canceled=on_canceled,
        )
        self._listeners: list[DoneCallback] = []
        self._fsm = OperationFSM()

    @property
    def running(self) -> bool:
        return self._fsm.is_running

    @property
    def outcome(self) -> Outcome | None:
        return self._fsm.outcome

    def begin(self) -> Outcome | None:
        """Run the part of the first cycle that precedes the first suspension."""

        run = self._live()
        if not run.clock.is_alive():
            return self._finish(run, Outcome.CANCELED_BY_SYSTEM)
        if run.wait is None:
            run.wait = run.cadence.begin()
            logger.debug("operation %s started (%r)", self.name, run.cadence)
        return None

    def step(self) -> Outcome | None:
        run = self._live()

        if not run.clock.is_alive():
            return self._finish(run, Outcome.CANCELED_BY_SYSTEM)

        if run.wait is None:
            run.wait = run.cadence.begin()
        cadence_spent = run.wait.consume(run.clock)

        # Any user call below may stop this operation through its handle.
        if run.cancel_when is not None:
            cancel = run.cancel_when()
            if not self._fsm.is_running:
                return self._fsm.outcome
            if cancel:
                return self._finish(run, Outcome.CANCELED)

        if not cadence_spent:
            return None

        self.cycles += 1
        satisfied = run.policy.is_satisfied()
        if not self._fsm.is_running:
            return self._fsm.outcome
        if satisfied:
            return self._finish(run, Outcome.COMPLETED)

        run.wait = run.cadence.begin()
        if run.on_tick is not None:
            run.on_tick()
            if not self._fsm.is_running:
                return self._fsm.outcome
        return None

    def stop(self) -> bool:
        """Hard stop: end as `canceled` without running any operation callback.

        Returns False if the operation had already terminated.
        """

        if not self._fsm.is_running:
            return False
        self._fsm.hard_stop()
        logger.debug("operation %s stopped after %d cycles", self.name, self.cycles)
        self._notify(self._release(), Outcome.CANCELED)
        return True

    def add_done_listener(self, listener: DoneCallback) -> None:
        outcome = self._fsm.outcome
        if outcome is not None:
            listener(outcome)
            return
        self._listeners.append(listener)

    def _finish(self, run: _Run, outcome: Outcome) -> Outcome:
        if outcome is Outcome.COMPLETED:
            self._fsm.complete()
            callback = run.on_complete
        elif outcome is Outcome.CANCELED:
            self._fsm.cancel()
            callback = run.on_canceled
        else:
            # Nothing that assumes a live environment may run after teardown.
            self._fsm.cancel_by_system()
            callback = None

        logger.debug("operation %s finished: %s after %d cycles", self.name, outcome.value, self.cycles)
        listeners = self._release()
        try:
            if callback is not None:
                callback()
        finally:
            self._notify(listeners, outcome)
        return outcome

    def _release(self) -> list[DoneCallback]:
        listeners = self._listeners
        self._listeners = []
        self._run = None
        return listeners

    @staticmethod
    def _notify(listeners: list[DoneCallback], outcome: Outcome) -> None:
        for listener in listeners:
            listener(outcome)

    def _live(self) -> _Run:
        if self._run is None:
            raise OperationTerminatedError(
                f"Operation '{self.name}' already finished ({self._fsm.outcome}) and cannot be resumed"
            )
        return self._run

    def __repr__(self) -> str:
        outcome = self._fsm.outcome
        state = outcome.value if outcome is not None else "running"
        return f"Operation(name={self.name!r}, state={state!r}, cycles={self.cycles})"


class Handle:
    """Caller-held reference to a started operation.

    `stop()` is the hard stop; it differs from the operation's own cancel
    predicate in that no completion or cancellation callback runs.
    """

    __slots__ = ("_operation",)

    def __init__(self, operation: Operation) -> None:
        self._operation = operation

    @property
    def name(self) -> str:
        return self._operation.name

    @property
    def running(self) -> bool:
        return self._operation.running

    @property
    def done(self) -> bool:
        return not self._operation.running

    @property
    def outcome(self) -> Outcome | None:
        return self._operation.outcome

    def stop(self) -> bool:
        return self._operation.stop()

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Call `callback(outcome)` once the operation terminates.

        Runs after the operation's own terminal callback; runs immediately if
        the operation is already done.
        """

        self._operation.add_done_listener(callback)

    def __repr__(self) -> str:
        return f"Handle({self._operation!r})"
