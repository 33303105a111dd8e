"""
Clocks

Every timestamp the core writes or compares comes from a Clock, so tests
can freeze and advance time.
"""

from datetime import datetime, timedelta
from typing import Optional, Protocol

from organizations.domain.base import utcnow


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, naive UTC"""

    def now(self) -> datetime:
        return utcnow()


class FrozenClock:
    """Clock that only moves when told to"""

    def __init__(self, now: Optional[datetime] = None):
        self._now = now or utcnow()

    def now(self) -> datetime:
        return self._now

    def freeze(self, now: datetime) -> None:
        self._now = now

    def advance(self, delta: timedelta) -> datetime:
        self._now = self._now + delta
        return self._now
