"""
Period labels for svnviz.

Maps a timestamp to the bucket keys used by every report: day, ISO week,
month, weekday name and hour of day. All labels are computed in local time.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Union

from svnviz.utils.timestamps import local_date, to_local

DateLike = Union[date, datetime]

# Calendar day-of-week names, indexed by date.weekday() (Monday=0)
_WEEKDAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

# Display/seed order for weekday distributions
WEEKDAY_ORDER = _WEEKDAY_NAMES

HOURS = tuple(range(24))


def format_day(value: DateLike) -> str:
    """Format as YYYY-MM-DD."""
    return local_date(value).isoformat()


def format_month(value: DateLike) -> str:
    """Format as YYYY-MM."""
    d = local_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def format_iso_week(value: DateLike) -> str:
    """
    Format as ISO-8601 week label YYYY-Www.

    Week 1 is the week containing the year's first Thursday; weeks start on
    Monday. The year is the ISO year (the year of that week's Thursday), so
    2023-01-01, a Sunday, is labelled 2022-W52.
    """
    iso_year, iso_week, _ = local_date(value).isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def weekday_name(value: DateLike) -> str:
    """Calendar day-of-week name, e.g. 'Sunday'."""
    return _WEEKDAY_NAMES[local_date(value).weekday()]


def hour_of_day(value: datetime) -> int:
    """Local hour component, 0-23."""
    return to_local(value).hour


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def shift_month(value: date, months: int) -> date:
    """First day of the month `months` away from the month of `value`."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)
