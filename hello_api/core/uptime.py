"""Process start time and uptime.

The start instant is the moment this module is first imported (during
app startup, a few milliseconds after the interpreter itself started), not
the OS process creation time. It is captured once and only read afterwards.
"""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable


def format_iso(moment: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProcessClock:
    def __init__(
        self,
        monotonic: Callable[[], float] = time.monotonic,
        wall: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._monotonic = monotonic
        self._wall = wall
        self._started_monotonic = monotonic()
        self._started_at = wall()

    @property
    def started_at(self) -> datetime:
        return self._started_at

    def uptime(self) -> float:
        # monotonic clock: wall-clock adjustments must not make uptime shrink
        return max(0.0, self._monotonic() - self._started_monotonic)

    def now_iso(self) -> str:
        return format_iso(self._wall())


_PROCESS_CLOCK = ProcessClock()


def process_clock() -> ProcessClock:
    return _PROCESS_CLOCK


def uptime() -> float:
    return _PROCESS_CLOCK.uptime()


def now_iso() -> str:
    return _PROCESS_CLOCK.now_iso()


started_at: datetime = _PROCESS_CLOCK.started_at
