"""
DateTime utility functions - records are stamped and reported in UTC.
"""
from datetime import date, datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is in UTC.
    Naive datetimes (SQLite drops tzinfo) are assumed to already be UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_isoformat(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to UTC and return as ISO format string.
    Used for API responses, e.g. "2024-12-17T09:00:00.123000+00:00".
    """
    utc_dt = to_utc(dt)
    if utc_dt is None:
        return None
    return utc_dt.isoformat()


def parse_calendar_date(value: str) -> date:
    """
    Parse an ISO-8601 date or date-time string into a calendar date.

    Accepts "2025-03-14", "2025-03-14T10:30:00" and "2025-03-14T10:30:00.000Z".
    Raises ValueError for anything else.
    """
    text = str(value).strip()
    if not text:
        raise ValueError("date string is empty")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"Cast to date failed for value \"{value}\"")
