# dates.py
"""Local calendar-day keys and small calendar helpers."""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

Instant = Union[date, datetime]

KEY_FORMAT = "%Y-%m-%d"


def _local(instant: Instant) -> Instant:
    # Aware datetimes are moved into the local zone; naive ones already are.
    if isinstance(instant, datetime) and instant.tzinfo is not None:
        return instant.astimezone()
    return instant


def to_date_key(instant: Instant) -> str:
    """
    Canonical 'YYYY-MM-DD' key for the local calendar day of an instant.
    Built from the local year/month/day fields, never from a UTC shift.
    """
    d = _local(instant)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def is_today(instant: Instant) -> bool:
    return to_date_key(instant) == to_date_key(datetime.now())


def local_date(instant: Instant) -> date:
    d = _local(instant)
    return d.date() if isinstance(d, datetime) else d


def parse_date_key(value) -> Optional[date]:
    """Parse a 'YYYY-MM-DD' key into a date. Returns None on failure."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), KEY_FORMAT).date()
    except ValueError:
        return None


def parse_instant(value) -> Optional[datetime]:
    """
    Parse a stored ISO-8601 timestamp (a trailing 'Z' is accepted).
    Returns a datetime or None on failure.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def start_of_day(instant: Instant) -> datetime:
    """Local 00:00:00.000 of the instant's day."""
    return datetime.combine(local_date(instant), time.min)


def end_of_day(instant: Instant) -> datetime:
    """Local 23:59:59.999 of the instant's day."""
    return datetime.combine(local_date(instant), time(23, 59, 59, 999000))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months, either direction."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_days(year: int, month: int):
    """Every date of a calendar month, in order."""
    first = date(year, month, 1)
    for offset in range(days_in_month(year, month)):
        yield first + timedelta(days=offset)
