from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_TICK_RATE = 60.0


@dataclass(frozen=True, slots=True)
class EngineSettings:
    # Host ticks per second when the asyncio driver runs the scheduler.
    tick_rate: float = DEFAULT_TICK_RATE
    log_level: str = "INFO"


def settings_from_env() -> EngineSettings:
    raw_rate = os.environ.get("TICKWAIT_TICK_RATE", str(DEFAULT_TICK_RATE))
    try:
        tick_rate = float(raw_rate)
    except ValueError as e:
        raise RuntimeError(f"TICKWAIT_TICK_RATE must be a number (got {raw_rate!r})") from e
    if not tick_rate > 0:
        raise RuntimeError(f"TICKWAIT_TICK_RATE must be positive (got {raw_rate!r})")

    return EngineSettings(
        tick_rate=tick_rate,
        log_level=os.environ.get("TICKWAIT_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: EngineSettings | None = None) -> None:
    s = settings or settings_from_env()
    logging.basicConfig(
        level=s.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
