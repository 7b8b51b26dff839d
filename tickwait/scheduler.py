from __future__ import annotations

import logging

from tickwait.clock import HostClock, TimeScale
from tickwait.engine import Handle, Operation

logger = logging.getLogger(__name__)


class TickScheduler:
    """Minimal host loop: one `tick()` per frame resumes every live operation.

    Operations are resumed in the order they were started. An operation started
    from a callback during a tick is first resumed on the following tick.
    Exceptions raised by user callbacks propagate out of `tick()`.
    """

    def __init__(self, *, clock: HostClock | None = None, time_scale: TimeScale | None = None) -> None:
        self.clock = clock if clock is not None else HostClock()
        # Engine-wide scale used by the non-realtime operations.
        self.time_scale = time_scale if time_scale is not None else TimeScale()
        self._operations: list[Operation] = []

    @property
    def pending(self) -> int:
        return sum(1 for op in self._operations if op.running)

    def start(self, operation: Operation) -> Handle:
        handle = Handle(operation)
        if operation.begin() is None:
            self._operations.append(operation)
        return handle

    def tick(self, delta_time: float) -> None:
        self.clock.advance(delta_time)

        for op in [op for op in self._operations if op.running]:
            # An earlier operation's callback may have stopped this one.
            if op.running:
                op.step()

        self._operations = [op for op in self._operations if op.running]

    def shutdown(self) -> None:
        """Report the host as torn down and flush one tick.

        Every operation still waiting ends as `canceled_by_system`.
        """

        self.clock.alive = False
        logger.info("tick host shutting down with %d pending operation(s)", self.pending)
        self.tick(0.0)
