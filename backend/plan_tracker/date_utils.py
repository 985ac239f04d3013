"""UTC day arithmetic.

Every day-level comparison in the package goes through these helpers rather
than subtracting raw timestamps, so results never depend on the server's
local timezone or DST transitions.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day(value: Optional[datetime] = None) -> datetime:
    """Truncate to 00:00:00.000 UTC of the same UTC calendar day."""
    value = as_utc(value) if value is not None else utc_now()
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def days_between(start: datetime, end: Optional[datetime] = None) -> int:
    """
    Whole UTC days from ``start`` to ``end`` (defaults to now).

    Negative when ``end`` falls on an earlier day than ``start``.
    """
    delta = start_of_day(end) - start_of_day(start)
    return delta.days


def is_same_day(first: datetime, second: datetime) -> bool:
    return start_of_day(first) == start_of_day(second)


def add_days(value: datetime, days: int) -> datetime:
    """Shift by ``days`` (may be negative) and normalize to UTC midnight."""
    return start_of_day(as_utc(value) + timedelta(days=days))
