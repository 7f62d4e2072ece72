"""
Clock sources for promotion windows and order timestamps.

Services never call datetime.now() directly; they receive a Clock so tests
can evaluate promotions at a fixed instant.
"""

from datetime import datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

import config


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in the store's timezone (config.TIMEZONE)."""

    def __init__(self, timezone: str | None = None):
        self._zone = ZoneInfo(timezone or config.TIMEZONE)

    def now(self) -> datetime:
        return datetime.now(self._zone)


class FixedClock:
    """Clock frozen at a given instant; advance() moves it forward."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, **delta) -> datetime:
        self._instant = self._instant + timedelta(**delta)
        return self._instant
