"""Date helpers shared by trip and activity routes.

Naive datetimes are treated as UTC: SQLite hands stored values back without
tzinfo, and clients may omit the offset.
"""
from datetime import date, datetime, timedelta, timezone
from typing import List


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_long_date(value: datetime) -> str:
    """Render e.g. ``October 21, 2026`` for mail bodies."""
    value = as_utc(value)
    return f"{value:%B} {value.day}, {value.year}"


def trip_days(starts_at: datetime, ends_at: datetime) -> List[date]:
    """Every calendar day from starts_at to ends_at, both included."""
    first = as_utc(starts_at).date()
    last = as_utc(ends_at).date()
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]
