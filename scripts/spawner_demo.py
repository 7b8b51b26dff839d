"""Console walkthrough of the wait operations on an asyncio host.

Replays the classic spawner scenes without a UI:
- delay: spawn once, re-enable the spawn button after a delay
- delay with cancel option: the same wait, canceled halfway by a flag
- repeat forever with a custom time scale, stopped through its handle
- awaited delay that branches on the outcome

Usage:
    uv run python scripts/spawner_demo.py --seconds 2 --slow-motion 0.5
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from tickwait import (
    AsyncioTickDriver,
    Outcome,
    TickScheduler,
    configure_logging,
    delay,
    delay_realtime,
    repeat_forever_custom_time_scale,
    settings_from_env,
    wait_for,
)

logger = logging.getLogger("spawner_demo")


class Spawner:
    def __init__(self, name: str) -> None:
        self.name = name
        self.spawned = 0
        self.button_enabled = True

    def spawn(self) -> None:
        self.spawned += 1
        logger.info("%s spawned object #%d", self.name, self.spawned)

    def enable_button(self) -> None:
        self.button_enabled = True
        logger.info("%s button enabled", self.name)


async def _scenes(scheduler: TickScheduler, *, seconds: float, slow_motion: float) -> None:
    plain = Spawner("delay")
    plain.spawn()
    plain.button_enabled = False
    delay(scheduler, seconds, plain.enable_button)

    cancelable = Spawner("delay-with-cancel")
    canceled = False
    cancelable.spawn()
    cancelable.button_enabled = False
    delay(
        scheduler,
        seconds,
        cancelable.enable_button,
        cancel_when=lambda: canceled,
        on_canceled=lambda: logger.info("delay-with-cancel: canceled before the delay ran out"),
    )

    slowmo = Spawner("custom-time-scale")
    routine = repeat_forever_custom_time_scale(scheduler, slowmo.spawn, lambda: slow_motion, seconds / 4)

    awaited = Spawner("awaited-delay")
    awaited.spawn()
    result = await wait_for(delay_realtime(scheduler, seconds / 2))
    if result is Outcome.CANCELED_BY_SYSTEM:
        return
    canceled = True
    awaited.enable_button()

    await wait_for(delay_realtime(scheduler, seconds))
    routine.stop()
    logger.info("custom-time-scale stopped after %d spawns (slow motion x%s)", slowmo.spawned, slow_motion)


async def main(*, seconds: float, slow_motion: float) -> None:
    scheduler = TickScheduler()
    driver = AsyncioTickDriver(scheduler)
    host = asyncio.create_task(driver.run())
    try:
        await _scenes(scheduler, seconds=seconds, slow_motion=slow_motion)
    finally:
        driver.stop()
        await host


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--seconds", type=float, default=2.0)
    parser.add_argument("--slow-motion", type=float, default=0.5)
    args = parser.parse_args()

    configure_logging(settings_from_env())
    asyncio.run(main(seconds=args.seconds, slow_motion=args.slow_motion))
