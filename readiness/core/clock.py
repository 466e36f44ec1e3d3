"""
Clock and calendar helpers.

"Same day" always means the same year/month/day in the calendar timezone,
never a 24-hour window.

The calendar timezone is CALENDAR_TIMEZONE when set. Otherwise it is the
host's local time, represented as `None`: each instant is converted with
`astimezone()`, so the host's DST rules apply to that instant rather than
the offset in force when the process started.
"""
from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

from readiness.core.config import settings


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, timezone-aware in the calendar timezone."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz if tz is not None else calendar_timezone()

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz=self.tz)


def calendar_timezone() -> Optional[tzinfo]:
    """Configured zone, or None for host local time."""
    if settings.CALENDAR_TIMEZONE:
        return ZoneInfo(settings.CALENDAR_TIMEZONE)
    return None


def localize(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Attach the calendar timezone to a naive wall-clock time."""
    if moment.tzinfo is not None:
        return moment
    if tz is None:
        return moment.astimezone()
    return moment.replace(tzinfo=tz)


def local_day(moment: datetime, tz: Optional[tzinfo]) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()
