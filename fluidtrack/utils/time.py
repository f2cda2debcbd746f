"""Time utilities: clock, timezone resolution and logical day keys."""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Protocol, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fluidtrack.domain.models.day import DayKey

logger = logging.getLogger(__name__)

TimezoneLike = Union[str, tzinfo]


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock, always timezone-aware UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def resolve_timezone(name: TimezoneLike, fallback: str = "UTC") -> tzinfo:
    """
    Turn a configured timezone name into a tzinfo.

    Unknown names resolve to `fallback` so a typo in settings never stops
    aggregation or scheduling.
    """
    if isinstance(name, tzinfo):
        return name
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {name!r}, falling back to {fallback}")
        return ZoneInfo(fallback)


def to_local(instant: datetime, tz: TimezoneLike) -> datetime:
    """Convert to local time; naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(resolve_timezone(tz))


def compute_day_key(instant: datetime, day_start_hour: int, tz: TimezoneLike) -> DayKey:
    """
    Logical day an instant belongs to.

    A day runs from `day_start_hour` local time to the same hour the next
    calendar day, so with a start hour of 4 a log at 01:30 belongs to the
    previous day.
    """
    if not 0 <= day_start_hour <= 23:
        raise ValueError(f"day_start_hour must be within 0..23, got {day_start_hour}")

    local = to_local(instant, tz)
    key = DayKey(local.date())
    if local.hour < day_start_hour:
        key = key.shift(-1)
    return key


def format_clock_time(instant: datetime, tz: TimezoneLike) -> str:
    """12-hour wall clock time in the given timezone, e.g. '7:05 PM'."""
    local = to_local(instant, tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"
