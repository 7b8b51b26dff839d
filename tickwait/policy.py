from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from tickwait.clock import Clock

Predicate = Callable[[], bool]
ScaleGetter = Callable[[], float]
Callback = Callable[[], None]

# Budgets built from binary fractions (0.1 s ticks) land a hair above zero.
_TIME_EPSILON = 1e-9


class TerminationPolicy(ABC):
    """Decides, once per finished cadence, whether the operation is done."""

    @abstractmethod
    def is_satisfied(self) -> bool:
        raise NotImplementedError


@dataclass(slots=True)
class FrameCount(TerminationPolicy):
    """Done after `remaining` cycles; zero still waits one cycle."""

    remaining: int

    def is_satisfied(self) -> bool:
        self.remaining -= 1
        return self.remaining <= 0


@dataclass(frozen=True, slots=True)
class Until(TerminationPolicy):
    condition: Predicate

    def is_satisfied(self) -> bool:
        return bool(self.condition())

    @classmethod
    def negated(cls, condition: Predicate) -> Until:
        """`while condition` is `until not condition`."""

        return cls(condition=lambda: not condition())


@dataclass(frozen=True, slots=True)
class Forever(TerminationPolicy):
    def is_satisfied(self) -> bool:
        return False


class CadenceWait(ABC):
    """Progress through one cadence; `consume` is called once per tick."""

    @abstractmethod
    def consume(self, clock: Clock) -> bool:
        raise NotImplementedError


class _FrameWait(CadenceWait):
    __slots__ = ("remaining",)

    def __init__(self, ticks: int) -> None:
        self.remaining = ticks

    def consume(self, clock: Clock) -> bool:
        self.remaining -= 1
        return self.remaining <= 0


class _TimeWait(CadenceWait):
    __slots__ = ("remaining", "scale")

    def __init__(self, budget: float, scale: ScaleGetter) -> None:
        self.remaining = budget
        self.scale = scale

    def consume(self, clock: Clock) -> bool:
        # Re-read every tick so a live pause/slow-motion control applies mid-wait.
        scale = float(self.scale())
        # Negative and NaN scales pause the wait.
        if not scale > 0:
            scale = 0.0
        self.remaining -= clock.delta_time() * scale
        return self.remaining <= _TIME_EPSILON


class FrameCadence(BaseModel):
    """Wait `frames` host ticks per cycle (0 and 1 both mean every tick)."""

    model_config = ConfigDict(frozen=True)

    frames: int = Field(0, ge=0)

    @property
    def is_time_based(self) -> bool:
        return False

    def begin(self) -> CadenceWait:
        return _FrameWait(max(self.frames, 1))


class TimeCadence(BaseModel):
    """Wait until `duration` seconds of scaled time have elapsed."""

    model_config = ConfigDict(frozen=True)

    duration: float = Field(0.0, ge=0, allow_inf_nan=False, strict=True)
    scale: ScaleGetter

    @property
    def is_time_based(self) -> bool:
        return True

    def begin(self) -> CadenceWait:
        return _TimeWait(self.duration, self.scale)


Cadence = FrameCadence | TimeCadence
