"""
Timestamp utilities for svnviz.

Handles parsing and conversion of timestamps from svn XML logs and the data file.
svn log timestamps are UTC with 'Z' suffix and microsecond precision.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union


def parse_timestamp(ts: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO-8601 timestamp with Z suffix to datetime.

    svn emits UTC timestamps with 'Z' suffix.
    Returns None if parsing fails.

    Args:
        ts: Timestamp string like "2026-01-15T10:30:00.123456Z"

    Returns:
        timezone-aware datetime, or None if parsing failed
    """
    if not ts:
        return None

    ts = ts.strip()
    try:
        # Handle 'Z' suffix (UTC indicator)
        if ts.endswith('Z'):
            ts = ts[:-1] + '+00:00'

        parsed = datetime.fromisoformat(ts)
    except (ValueError, TypeError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_local(dt: datetime) -> datetime:
    """
    Convert a datetime to an aware datetime in the local timezone.

    Naive datetimes are taken to already be local time.
    """
    return dt.astimezone()


def local_date(value: Union[date, datetime]) -> date:
    """Calendar date of a value in local time."""
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def start_of_day(value: Union[date, datetime]) -> datetime:
    """Local midnight of the day containing `value`."""
    return datetime.combine(local_date(value), time.min).astimezone()


def end_of_day(value: Union[date, datetime]) -> datetime:
    """Local 23:59:59.999 of the day containing `value`."""
    return datetime.combine(local_date(value), time(23, 59, 59, 999000)).astimezone()


def to_date_string(dt: Optional[datetime]) -> str:
    """
    Convert datetime to date string (YYYY-MM-DD).

    Args:
        dt: datetime object

    Returns:
        Date string or "N/A" if None
    """
    if not dt:
        return "N/A"
    return dt.strftime('%Y-%m-%d')


def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to ISO-8601 string for storage.

    Args:
        dt: datetime object

    Returns:
        ISO format string or None if input is None
    """
    if not dt:
        return None
    return dt.isoformat()


def to_svn_instant(dt: datetime) -> str:
    """Format an instant for an svn revision range, e.g. {2024-01-01T00:00:01Z}."""
    utc = dt.astimezone(timezone.utc)
    return '{' + utc.strftime('%Y-%m-%dT%H:%M:%SZ') + '}'

