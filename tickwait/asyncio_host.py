from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from tickwait.config import settings_from_env
from tickwait.engine import Handle
from tickwait.outcome import Outcome
from tickwait.scheduler import TickScheduler

logger = logging.getLogger(__name__)


class AsyncioTickDriver:
    """Run a `TickScheduler` as the host loop of an asyncio application.

    Contract:
      - `run()` marks the host alive and ticks the scheduler every
        `1 / tick_rate` seconds, feeding loop-time deltas as `delta_time`.
      - leaving `run()` (stop request, `until()` true, task cancellation or an
        error) tears the host down: operations still waiting end as
        `canceled_by_system`.

    Only one `run()` should be active per driver.
    """

    def __init__(self, scheduler: TickScheduler, *, tick_rate: float | None = None) -> None:
        rate = tick_rate if tick_rate is not None else settings_from_env().tick_rate
        if not rate > 0:
            raise ValueError(f"tick_rate must be positive (got {rate})")
        self.scheduler = scheduler
        self.interval = 1.0 / rate
        self.ticks = 0
        self._stop_requested = False

    def stop(self) -> None:
        """Ask `run()` to return after the current tick."""

        self._stop_requested = True

    async def run(self, *, until: Callable[[], bool] | None = None) -> None:
        loop = asyncio.get_running_loop()
        self._stop_requested = False
        self.scheduler.clock.alive = True
        last = loop.time()
        try:
            while not self._stop_requested:
                if until is not None and until():
                    break
                await asyncio.sleep(self.interval)
                now = loop.time()
                self.scheduler.tick(max(now - last, 0.0))
                last = now
                self.ticks += 1
        finally:
            logger.debug("asyncio tick driver leaving after %d ticks", self.ticks)
            self.scheduler.shutdown()


async def wait_for(handle: Handle) -> Outcome:
    """Await the outcome of a started operation.

    Branch on the result: `canceled_by_system` means the host is gone and the
    caller should stop instead of touching host state.
    """

    outcome = handle.outcome
    if outcome is not None:
        return outcome

    loop = asyncio.get_running_loop()
    future: asyncio.Future[Outcome] = loop.create_future()

    def _resolve(result: Outcome) -> None:
        if not future.done():
            future.set_result(result)

    handle.add_done_callback(_resolve)
    return await future
