from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from tickwait.errors import OperationArgumentError
from tickwait.policy import FrameCadence, ScaleGetter, TimeCadence

_CALL_HINT = "Make sure that the argument is valid before calling a wait operation"


def require_callable(value: Any, *, name: str) -> None:
    if value is None or not callable(value):
        raise OperationArgumentError(f"'{name}' does not exist or is not callable. {_CALL_HINT}")


def require_optional_callable(value: Any, *, name: str) -> None:
    if value is not None and not callable(value):
        raise OperationArgumentError(f"'{name}' is not callable. {_CALL_HINT}")


def require_frame_count(frames: Any, *, name: str = "frames") -> int:
    if isinstance(frames, bool) or not isinstance(frames, int) or frames < 0:
        raise OperationArgumentError(f"'{name}' must be a non-negative integer (got {frames!r}). {_CALL_HINT}")
    return frames


def frame_cadence(skip_frames: Any) -> FrameCadence:
    require_frame_count(skip_frames, name="skip_frames")
    return FrameCadence(frames=skip_frames)


def time_cadence(duration: Any, scale: ScaleGetter | None, *, name: str = "duration") -> TimeCadence:
    """Validate a time budget and its scale getter.

    The scale getter is checked first so a missing getter is reported by name
    rather than as a generic validation failure.
    """

    require_callable(scale, name="time_scale")
    if isinstance(duration, bool):
        raise OperationArgumentError(f"delay or tick dilation '{name}' must be a number, not a bool. {_CALL_HINT}")
    try:
        return TimeCadence(duration=duration, scale=scale)
    except ValidationError as e:
        raise OperationArgumentError(
            f"delay or tick dilation '{name}' must be a non-negative number of seconds (got {duration!r}). {_CALL_HINT}"
        ) from e
