from __future__ import annotations

import math
from typing import Protocol


class Clock(Protocol):
    """Raw per-tick signals every wait reads.

    Purely observational: reading a clock never changes it.
    """

    def delta_time(self) -> float:  # pragma: no cover
        ...

    def is_alive(self) -> bool:  # pragma: no cover
        ...


class HostClock:
    """Clock fed by the host once per tick.

    The host calls `advance()` with the elapsed real time before resuming
    operations, and flips `alive` when it enters or leaves its active mode.
    """

    def __init__(self, *, alive: bool = True) -> None:
        self.alive = alive
        self.frame = 0
        self._delta_time = 0.0

    def advance(self, delta_time: float) -> None:
        if math.isnan(delta_time) or delta_time < 0:
            raise ValueError(f"delta_time must be non-negative (got {delta_time})")
        self._delta_time = float(delta_time)
        self.frame += 1

    def delta_time(self) -> float:
        return self._delta_time

    def is_alive(self) -> bool:
        return self.alive


def realtime_scale() -> float:
    return 1.0


class TimeScale:
    """Mutable global time scale (0 pauses, <1 slows down, >1 speeds up).

    Instances are callable so they can be passed anywhere a scale getter is
    expected; the engine re-reads the value on every tick.
    """

    def __init__(self, value: float = 1.0) -> None:
        self.value = value

    def __call__(self) -> float:
        return self.value

    def pause(self) -> None:
        self.value = 0.0

    def __repr__(self) -> str:
        return f"TimeScale(value={self.value!r})"
