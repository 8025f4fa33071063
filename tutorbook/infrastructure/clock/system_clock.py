from __future__ import annotations

from datetime import datetime, timezone

from tutorbook.application.ports.clock import ClockPort
from tutorbook.application.utils.date_parser import normalize_instant


class SystemClock(ClockPort):
    def now(self) -> datetime:
        return normalize_instant(datetime.now(timezone.utc))


class FixedClock(ClockPort):
    """Clock pinned to one instant until set() moves it."""

    def __init__(self, current: datetime) -> None:
        self._current = normalize_instant(current)

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = normalize_instant(current)
