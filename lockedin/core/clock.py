"""
Clock abstraction.

Services read the current time through a Clock so tests can pin it.

Dependencies: datetime (stdlib)
System role: Time source for session start/end and analytics windows
"""

from datetime import date, datetime, time, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of the current UTC time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def ensure_aware_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a timestamp to timezone-aware UTC.

    Naive values are taken to be UTC already (SQLite hands them back
    without tzinfo).

    Args:
        dt: Timestamp or None

    Returns:
        datetime | None: Aware UTC timestamp, or None when given None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_date(dt: datetime) -> date:
    """Return the UTC calendar date of a timestamp."""
    return ensure_aware_utc(dt).date()


def start_of_day(value: date | datetime) -> datetime:
    """First instant (UTC) of a calendar date; datetimes pass through normalized."""
    if isinstance(value, datetime):
        return ensure_aware_utc(value)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def end_of_day(value: date | datetime) -> datetime:
    """Last instant (UTC) of a calendar date; datetimes pass through normalized."""
    if isinstance(value, datetime):
        return ensure_aware_utc(value)
    return datetime.combine(value, time.max, tzinfo=timezone.utc)
