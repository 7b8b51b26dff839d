from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from tickwait import (
    Outcome,
    TickScheduler,
    delay,
    delay_realtime,
    repeat_forever_realtime,
    repeat_frames_forever,
    repeat_frames_until,
    skip_frames,
    wait_frames_until,
    wait_until,
)

if TYPE_CHECKING:
    from conftest import Recorder


def test_repeat_forever_stopped_through_handle_never_completes(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handle = repeat_frames_forever(scheduler, recorder.cb("tick"), skip_frames=1)
    outcomes: list[Outcome] = []
    handle.add_done_callback(outcomes.append)

    ticks(5)
    assert handle.stop() is True
    ticks(5)

    assert recorder.ticks_of("tick") == [1, 2, 3, 4, 5]
    assert handle.outcome is Outcome.CANCELED
    assert outcomes == [Outcome.CANCELED]
    assert scheduler.pending == 0


def test_repeat_forever_on_time_cadence(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handle = repeat_forever_realtime(scheduler, recorder.cb("tick"), tick_dilation=1.0)

    ticks(5, 1.0)
    handle.stop()

    assert len(recorder.ticks_of("tick")) == 5
    assert handle.outcome is not Outcome.COMPLETED


def test_hard_stop_skips_callbacks(scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]) -> None:
    handle = delay_realtime(
        scheduler,
        1.0,
        recorder.cb("complete"),
        cancel_when=lambda: False,
        on_canceled=recorder.cb("canceled"),
    )

    ticks(1, 0.5)
    handle.stop()
    ticks(3, 0.5)

    assert recorder.calls == []
    assert handle.outcome is Outcome.CANCELED
    assert handle.stop() is False


def test_liveness_lost_mid_delay_cancels_by_system(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handle = delay(scheduler, 10.0, recorder.cb("complete"), on_canceled=recorder.cb("canceled"))

    ticks(1, 1.0)
    scheduler.clock.alive = False
    ticks(1, 1.0)

    assert scheduler.clock.frame == 2
    assert handle.outcome is Outcome.CANCELED_BY_SYSTEM
    assert recorder.calls == []


def test_liveness_beats_due_completion_and_cancel(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handle = skip_frames(
        scheduler,
        0,
        recorder.cb("complete"),
        cancel_when=lambda: True,
        on_canceled=recorder.cb("canceled"),
    )

    scheduler.clock.alive = False
    ticks(1)

    assert handle.outcome is Outcome.CANCELED_BY_SYSTEM
    assert recorder.calls == []


def test_dead_host_at_call_site_cancels_immediately(scheduler: TickScheduler, recorder: Recorder) -> None:
    scheduler.clock.alive = False

    handle = delay_realtime(scheduler, 1.0, recorder.cb("complete"))

    assert handle.outcome is Outcome.CANCELED_BY_SYSTEM
    assert scheduler.pending == 0
    assert recorder.calls == []


def test_cancel_wins_over_completion_on_the_same_tick(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handle = skip_frames(
        scheduler,
        1,
        recorder.cb("complete"),
        cancel_when=lambda: True,
        on_canceled=recorder.cb("canceled"),
    )

    ticks(3)

    assert handle.outcome is Outcome.CANCELED
    assert recorder.calls == [(1, "canceled")]


def test_cancel_is_not_applied_at_call_site(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handle = wait_until(scheduler, lambda: False, cancel_when=lambda: True, on_canceled=recorder.cb("canceled"))

    assert handle.running is True
    assert recorder.calls == []

    ticks(1)
    assert recorder.ticks_of("canceled") == [1]


def test_cancel_flag_flipped_between_ticks_applies_on_next_tick(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    flag = {"cancel": False}
    handle = repeat_frames_forever(
        scheduler,
        recorder.cb("tick"),
        cancel_when=lambda: flag["cancel"],
        on_canceled=recorder.cb("canceled"),
    )

    ticks(3)
    flag["cancel"] = True
    ticks(3)

    assert recorder.ticks_of("tick") == [1, 2, 3]
    assert recorder.ticks_of("canceled") == [4]
    assert handle.outcome is Outcome.CANCELED


def test_cancel_requested_inside_tick_callback_lets_it_finish(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    flag = {"cancel": False}
    after: list[str] = []

    def _on_tick() -> None:
        recorder.cb("tick")()
        if scheduler.clock.frame == 2:
            flag["cancel"] = True
        after.append("tick finished")

    repeat_frames_forever(scheduler, _on_tick, cancel_when=lambda: flag["cancel"], on_canceled=recorder.cb("canceled"))

    ticks(5)

    assert recorder.names() == ["tick", "tick", "canceled"]
    assert recorder.ticks_of("canceled") == [3]
    assert after == ["tick finished", "tick finished"]


def test_cancel_is_polled_during_a_long_delay(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    flag = {"cancel": False}
    delay_realtime(
        scheduler,
        10.0,
        recorder.cb("complete"),
        cancel_when=lambda: flag["cancel"],
        on_canceled=recorder.cb("canceled"),
    )

    ticks(2, 1.0)
    flag["cancel"] = True
    ticks(1, 1.0)

    assert recorder.calls == [(3, "canceled")]


def test_tick_callback_can_stop_its_own_handle(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handles = []

    def _on_tick() -> None:
        recorder.cb("tick")()
        if len(recorder.ticks_of("tick")) == 2:
            handles[0].stop()

    handles.append(repeat_frames_forever(scheduler, _on_tick, on_canceled=recorder.cb("canceled")))

    ticks(5)

    assert recorder.names() == ["tick", "tick"]
    assert handles[0].outcome is Outcome.CANCELED


def test_condition_that_stops_its_own_handle_and_holds_does_not_complete(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handles = []

    def _condition() -> bool:
        handles[0].stop()
        return True

    handles.append(wait_frames_until(scheduler, _condition, recorder.cb("complete")))

    ticks(2)

    assert recorder.calls == []
    assert handles[0].outcome is Outcome.CANCELED
    assert scheduler.pending == 0


def test_repeat_condition_that_stops_its_own_handle_skips_tick_callback(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handles = []

    def _condition() -> bool:
        handles[0].stop()
        return False

    handles.append(repeat_frames_until(scheduler, _condition, recorder.cb("tick"), recorder.cb("complete")))

    ticks(3)

    assert recorder.calls == []
    assert handles[0].outcome is Outcome.CANCELED


def test_cancel_predicate_that_stops_its_own_handle_skips_on_canceled(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    handles = []

    def _cancel() -> bool:
        handles[0].stop()
        return True

    handles.append(
        repeat_frames_forever(scheduler, recorder.cb("tick"), cancel_when=_cancel, on_canceled=recorder.cb("canceled"))
    )

    ticks(2)

    assert recorder.calls == []
    assert handles[0].outcome is Outcome.CANCELED


def test_shutdown_cancels_every_waiting_operation_by_system(
    scheduler: TickScheduler, recorder: Recorder, ticks: Callable[..., None]
) -> None:
    first = delay(scheduler, 5.0, recorder.cb("first"))
    second = repeat_frames_forever(scheduler, recorder.cb("tick"))

    ticks(2)
    scheduler.shutdown()

    assert first.outcome is Outcome.CANCELED_BY_SYSTEM
    assert second.outcome is Outcome.CANCELED_BY_SYSTEM
    assert scheduler.pending == 0
    assert recorder.names() == ["tick", "tick"]
