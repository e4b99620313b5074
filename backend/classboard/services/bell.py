from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from classboard.services.broadcast_hub import BOARD_CHANNEL, BroadcastHub
from classboard.services.catalog import break_end_times, trigger_times
from classboard.services.locator import day_of_week_for, time_of_day_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BellSignal:
    key: str
    time: str
    duration_ms: int
    ends_break: bool

    def to_event(self) -> dict:
        return {
            "event": "bell.ring",
            "time": self.time,
            "durationMs": self.duration_ms,
            "endsBreak": self.ends_break,
        }


class BellScheduler:
    """Decides when the school bell rings; playing the sound is someone else's job.

    Rings at most once per day and minute, and only on a slot boundary. The
    end of a break gets the long ring.
    """

    def __init__(self, *, short_ms: int = 2000, long_ms: int = 4000) -> None:
        self.short_ms = short_ms
        self.long_ms = long_ms
        self._triggers = trigger_times()
        self._break_ends = break_end_times()
        self._last_key: str | None = None

    def check(self, moment: datetime) -> BellSignal | None:
        time_of_day = time_of_day_for(moment)
        if time_of_day not in self._triggers:
            return None
        key = f"{day_of_week_for(moment)}-{time_of_day}"
        if key == self._last_key:
            return None
        self._last_key = key
        ends_break = time_of_day in self._break_ends
        return BellSignal(
            key=key,
            time=time_of_day,
            duration_ms=self.long_ms if ends_break else self.short_ms,
            ends_break=ends_break,
        )


async def run_bell_loop(
    scheduler: BellScheduler,
    hub: BroadcastHub,
    *,
    clock: Callable[[], datetime],
    interval_seconds: float = 1.0,
) -> None:
    while True:
        signal = scheduler.check(clock())
        if signal is not None:
            logger.info("School bell triggered at %s (%d ms)", signal.time, signal.duration_ms)
            await hub.publish(BOARD_CHANNEL, signal.to_event())
        await asyncio.sleep(interval_seconds)
