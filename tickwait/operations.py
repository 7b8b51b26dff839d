"""Public wait operations.

Every function validates its arguments, builds a termination policy and a
cadence, starts one `Operation` on the given scheduler and returns its
`Handle` right away. The work itself happens on the scheduler's later ticks;
no callback ever runs synchronously at the call site.

Families:

- frames: cadence counted in host ticks (`skip_frames` ticks between checks);
- scaled: cadence in seconds of the scheduler's global `TimeScale`;
- realtime: cadence in unscaled seconds;
- custom time scale: cadence in seconds of a caller-supplied scale getter.

The `*_while` functions are the `*_until` functions with a negated condition.
`cancel_when` is polled every tick; when it returns true the operation ends as
`canceled` and `on_canceled` runs.
"""

from __future__ import annotations

from tickwait.clock import realtime_scale
from tickwait.engine import Handle, Operation
from tickwait.guards import frame_cadence, require_callable, require_frame_count, require_optional_callable, time_cadence
from tickwait.policy import (
    Cadence,
    Callback,
    FrameCadence,
    FrameCount,
    Forever,
    Predicate,
    ScaleGetter,
    TerminationPolicy,
    Until,
)
from tickwait.scheduler import TickScheduler


def _launch(
    scheduler: TickScheduler,
    *,
    name: str,
    policy: TerminationPolicy,
    cadence: Cadence,
    on_tick: Callback | None = None,
    on_complete: Callback | None = None,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    require_optional_callable(on_complete, name="on_complete")
    require_optional_callable(cancel_when, name="cancel_when")
    require_optional_callable(on_canceled, name="on_canceled")

    op = Operation(
        clock=scheduler.clock,
        policy=policy,
        cadence=cadence,
        cancel_when=cancel_when,
        on_tick=on_tick,
        on_complete=on_complete,
        on_canceled=on_canceled,
        name=name,
    )
    return scheduler.start(op)


def _condition_policy(condition: Predicate, *, negate: bool) -> Until:
    require_callable(condition, name="condition")
    return Until.negated(condition) if negate else Until(condition=condition)


def _wait(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None,
    cadence: Cadence,
    *,
    negate: bool,
    name: str,
    cancel_when: Predicate | None,
    on_canceled: Callback | None,
) -> Handle:
    return _launch(
        scheduler,
        name=name,
        policy=_condition_policy(condition, negate=negate),
        cadence=cadence,
        on_complete=on_complete,
        cancel_when=cancel_when,
        on_canceled=on_canceled,
    )


def _repeat(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None,
    cadence: Cadence,
    *,
    negate: bool,
    name: str,
    cancel_when: Predicate | None,
    on_canceled: Callback | None,
) -> Handle:
    policy = _condition_policy(condition, negate=negate)
    require_callable(on_tick, name="on_tick")
    return _launch(
        scheduler,
        name=name,
        policy=policy,
        cadence=cadence,
        on_tick=on_tick,
        on_complete=on_complete,
        cancel_when=cancel_when,
        on_canceled=on_canceled,
    )


def _forever(
    scheduler: TickScheduler,
    on_tick: Callback,
    cadence: Cadence,
    *,
    name: str,
    cancel_when: Predicate | None,
    on_canceled: Callback | None,
) -> Handle:
    require_callable(on_tick, name="on_tick")
    return _launch(
        scheduler,
        name=name,
        policy=Forever(),
        cadence=cadence,
        on_tick=on_tick,
        cancel_when=cancel_when,
        on_canceled=on_canceled,
    )


# ---- frames ----


def skip_frames(
    scheduler: TickScheduler,
    frames: int,
    on_complete: Callback | None = None,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    """Call `on_complete` after `frames` ticks (0 still waits one tick)."""

    count = require_frame_count(frames)
    return _launch(
        scheduler,
        name="skip_frames",
        policy=FrameCount(remaining=count),
        cadence=FrameCadence(frames=0),
        on_complete=on_complete,
        cancel_when=cancel_when,
        on_canceled=on_canceled,
    )


def wait_frames_until(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None = None,
    skip_frames: int = 0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = frame_cadence(skip_frames)
    return _wait(
        scheduler, condition, on_complete, cadence,
        negate=False, name="wait_frames_until", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def wait_frames_while(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None = None,
    skip_frames: int = 0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = frame_cadence(skip_frames)
    return _wait(
        scheduler, condition, on_complete, cadence,
        negate=True, name="wait_frames_while", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_frames_until(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None = None,
    skip_frames: int = 0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = frame_cadence(skip_frames)
    return _repeat(
        scheduler, condition, on_tick, on_complete, cadence,
        negate=False, name="repeat_frames_until", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_frames_while(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None = None,
    skip_frames: int = 0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = frame_cadence(skip_frames)
    return _repeat(
        scheduler, condition, on_tick, on_complete, cadence,
        negate=True, name="repeat_frames_while", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_frames_forever(
    scheduler: TickScheduler,
    on_tick: Callback,
    skip_frames: int = 0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = frame_cadence(skip_frames)
    return _forever(
        scheduler, on_tick, cadence,
        name="repeat_frames_forever", cancel_when=cancel_when, on_canceled=on_canceled,
    )


# ---- delay ----


def delay_custom_time_scale(
    scheduler: TickScheduler,
    duration: float,
    time_scale: ScaleGetter,
    on_complete: Callback | None = None,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    """Call `on_complete` once `duration` seconds of `time_scale()` time have passed.

    Use a custom scale for pause or slow motion that applies to this operation
    only; the getter is re-read on every tick.
    """

    cadence = time_cadence(duration, time_scale)
    return _launch(
        scheduler,
        name="delay",
        policy=FrameCount(remaining=1),
        cadence=cadence,
        on_complete=on_complete,
        cancel_when=cancel_when,
        on_canceled=on_canceled,
    )


def delay(
    scheduler: TickScheduler,
    duration: float,
    on_complete: Callback | None = None,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return delay_custom_time_scale(
        scheduler, duration, scheduler.time_scale, on_complete, cancel_when=cancel_when, on_canceled=on_canceled
    )


def delay_realtime(
    scheduler: TickScheduler,
    duration: float,
    on_complete: Callback | None = None,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return delay_custom_time_scale(
        scheduler, duration, realtime_scale, on_complete, cancel_when=cancel_when, on_canceled=on_canceled
    )


# ---- wait ----


def wait_until_custom_time_scale(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None,
    time_scale: ScaleGetter,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    """Check `condition` every `tick_dilation` scaled seconds; complete once it is true."""

    cadence = time_cadence(tick_dilation, time_scale, name="tick_dilation")
    return _wait(
        scheduler, condition, on_complete, cadence,
        negate=False, name="wait_until", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def wait_while_custom_time_scale(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None,
    time_scale: ScaleGetter,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = time_cadence(tick_dilation, time_scale, name="tick_dilation")
    return _wait(
        scheduler, condition, on_complete, cadence,
        negate=True, name="wait_while", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def wait_until(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return wait_until_custom_time_scale(
        scheduler, condition, on_complete, scheduler.time_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


def wait_while(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return wait_while_custom_time_scale(
        scheduler, condition, on_complete, scheduler.time_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


def wait_until_realtime(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return wait_until_custom_time_scale(
        scheduler, condition, on_complete, realtime_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


def wait_while_realtime(
    scheduler: TickScheduler,
    condition: Predicate,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return wait_while_custom_time_scale(
        scheduler, condition, on_complete, realtime_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


# ---- repeat ----


def repeat_until_custom_time_scale(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None,
    time_scale: ScaleGetter,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    """Call `on_tick` every `tick_dilation` scaled seconds until `condition` is true."""

    cadence = time_cadence(tick_dilation, time_scale, name="tick_dilation")
    return _repeat(
        scheduler, condition, on_tick, on_complete, cadence,
        negate=False, name="repeat_until", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_while_custom_time_scale(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None,
    time_scale: ScaleGetter,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    cadence = time_cadence(tick_dilation, time_scale, name="tick_dilation")
    return _repeat(
        scheduler, condition, on_tick, on_complete, cadence,
        negate=True, name="repeat_while", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_until(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return repeat_until_custom_time_scale(
        scheduler, condition, on_tick, on_complete, scheduler.time_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_while(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return repeat_while_custom_time_scale(
        scheduler, condition, on_tick, on_complete, scheduler.time_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_until_realtime(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return repeat_until_custom_time_scale(
        scheduler, condition, on_tick, on_complete, realtime_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_while_realtime(
    scheduler: TickScheduler,
    condition: Predicate,
    on_tick: Callback,
    on_complete: Callback | None = None,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return repeat_while_custom_time_scale(
        scheduler, condition, on_tick, on_complete, realtime_scale, tick_dilation,
        cancel_when=cancel_when, on_canceled=on_canceled,
    )


# ---- repeat forever ----


def repeat_forever_custom_time_scale(
    scheduler: TickScheduler,
    on_tick: Callback,
    time_scale: ScaleGetter,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    """Call `on_tick` every `tick_dilation` scaled seconds until stopped.

    Never completes on its own: only `Handle.stop()`, `cancel_when` or a host
    shutdown end it.
    """

    cadence = time_cadence(tick_dilation, time_scale, name="tick_dilation")
    return _forever(
        scheduler, on_tick, cadence,
        name="repeat_forever", cancel_when=cancel_when, on_canceled=on_canceled,
    )


def repeat_forever(
    scheduler: TickScheduler,
    on_tick: Callback,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return repeat_forever_custom_time_scale(
        scheduler, on_tick, scheduler.time_scale, tick_dilation, cancel_when=cancel_when, on_canceled=on_canceled
    )


def repeat_forever_realtime(
    scheduler: TickScheduler,
    on_tick: Callback,
    tick_dilation: float = 0.0,
    *,
    cancel_when: Predicate | None = None,
    on_canceled: Callback | None = None,
) -> Handle:
    return repeat_forever_custom_time_scale(
        scheduler, on_tick, realtime_scale, tick_dilation, cancel_when=cancel_when, on_canceled=on_canceled
    )
