from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

import pytest

from tickwait.scheduler import TickScheduler


@dataclass(slots=True)
class Recorder:
    """Collects callback invocations as (tick, name) pairs.

    `tick` is the scheduler's frame counter when the callback ran, so 0 means
    "before any tick was delivered".
    """

    scheduler: TickScheduler
    calls: list[tuple[int, str]] = field(default_factory=list)

    def cb(self, name: str) -> Callable[[], None]:
        def _record() -> None:
            self.calls.append((self.scheduler.clock.frame, name))

        return _record

    def ticks_of(self, name: str) -> list[int]:
        return [tick for tick, n in self.calls if n == name]

    def names(self) -> list[str]:
        return [n for _, n in self.calls]


def run_ticks(scheduler: TickScheduler, count: int, delta_time: float = 1 / 60) -> None:
    for _ in range(count):
        scheduler.tick(delta_time)


def sequence_predicate(values: Iterable[bool]) -> Callable[[], bool]:
    """Predicate returning the given values in order, then repeating the last one."""

    items = list(values)
    state = {"i": 0}

    def _next() -> bool:
        i = state["i"]
        state["i"] = i + 1
        return items[min(i, len(items) - 1)]

    return _next


@pytest.fixture()
def scheduler() -> TickScheduler:
    return TickScheduler()


@pytest.fixture()
def recorder(scheduler: TickScheduler) -> Recorder:
    return Recorder(scheduler=scheduler)


@pytest.fixture()
def ticks(scheduler: TickScheduler) -> Callable[..., None]:
    """`ticks(n, delta_time=1/60)` delivers n host ticks to the scheduler."""

    def _run(count: int, delta_time: float = 1 / 60) -> None:
        run_ticks(scheduler, count, delta_time)

    return _run


@pytest.fixture()
def seq() -> Callable[[Iterable[bool]], Callable[[], bool]]:
    return sequence_predicate
