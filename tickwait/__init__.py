"""Cooperative, cancelable wait primitives driven by a host tick source.

Operations suspend until a frame count or a (scaled) time budget is spent, a
condition flips, or the host environment shuts down. Everything runs on one
single-threaded timeline; the host resumes live operations once per tick.
"""

from tickwait.asyncio_host import AsyncioTickDriver, wait_for
from tickwait.clock import Clock, HostClock, TimeScale, realtime_scale
from tickwait.config import EngineSettings, configure_logging, settings_from_env
from tickwait.engine import Handle, Operation
from tickwait.errors import OperationArgumentError, OperationTerminatedError, TickwaitError
from tickwait.operations import (
    delay,
    delay_custom_time_scale,
    delay_realtime,
    repeat_forever,
    repeat_forever_custom_time_scale,
    repeat_forever_realtime,
    repeat_frames_forever,
    repeat_frames_until,
    repeat_frames_while,
    repeat_until,
    repeat_until_custom_time_scale,
    repeat_until_realtime,
    repeat_while,
    repeat_while_custom_time_scale,
    repeat_while_realtime,
    skip_frames,
    wait_frames_until,
    wait_frames_while,
    wait_until,
    wait_until_custom_time_scale,
    wait_until_realtime,
    wait_while,
    wait_while_custom_time_scale,
    wait_while_realtime,
)
from tickwait.outcome import Outcome
from tickwait.scheduler import TickScheduler

__all__ = [
    "AsyncioTickDriver",
    "Clock",
    "EngineSettings",
    "Handle",
    "HostClock",
    "Operation",
    "OperationArgumentError",
    "OperationTerminatedError",
    "Outcome",
    "TickScheduler",
    "TickwaitError",
    "TimeScale",
    "configure_logging",
    "delay",
    "delay_custom_time_scale",
    "delay_realtime",
    "realtime_scale",
    "repeat_forever",
    "repeat_forever_custom_time_scale",
    "repeat_forever_realtime",
    "repeat_frames_forever",
    "repeat_frames_until",
    "repeat_frames_while",
    "repeat_until",
    "repeat_until_custom_time_scale",
    "repeat_until_realtime",
    "repeat_while",
    "repeat_while_custom_time_scale",
    "repeat_while_realtime",
    "settings_from_env",
    "skip_frames",
    "wait_for",
    "wait_frames_until",
    "wait_frames_while",
    "wait_until",
    "wait_until_custom_time_scale",
    "wait_until_realtime",
    "wait_while",
    "wait_while_custom_time_scale",
    "wait_while_realtime",
]
