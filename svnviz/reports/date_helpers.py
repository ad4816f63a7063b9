"""Reporting range helpers.

Resolves the range a report covers: the persisted range of the data file,
an explicit YYYY-MM-DD:YYYY-MM-DD range, or the last N days.
Overrides always cover whole local days.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from svnviz.errors import CallerContractError
from svnviz.models.entities import DateRange
from svnviz.utils.timestamps import end_of_day, start_of_day

DATE_RANGE_PATTERN = re.compile(r'^(\d{4}-\d{2}-\d{2}):(\d{4}-\d{2}-\d{2})$')


def parse_date_range(value: str) -> DateRange:
    """Parse 'YYYY-MM-DD:YYYY-MM-DD' into a local whole-day range."""
    match = DATE_RANGE_PATTERN.match((value or '').strip())
    if not match:
        raise ValueError("Invalid date-range format. Expected: YYYY-MM-DD:YYYY-MM-DD")

    try:
        start = date.fromisoformat(match.group(1))
        end = date.fromisoformat(match.group(2))
    except ValueError:
        raise ValueError("Invalid date values in date-range")

    if start > end:
        raise ValueError("date-range start must not be after its end")

    return DateRange(start=start_of_day(start), end=end_of_day(end))


def relative_range(days: int, now: Optional[datetime] = None) -> DateRange:
    """Range covering the last `days` days up to and including today."""
    if days <= 0:
        raise ValueError("relative days must be a positive integer")
    if now is None:
        now = datetime.now().astimezone()
    return DateRange(start=start_of_day(now - timedelta(days=days)), end=end_of_day(now))


def resolve_reporting_range(
    persisted: DateRange,
    date_range: Optional[str] = None,
    relative_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> DateRange:
    """Pick the explicit range, else the relative range, else the persisted one."""
    if date_range is not None and relative_days is not None:
        raise CallerContractError("Cannot specify both a date range and relative days")

    if date_range is not None:
        return parse_date_range(date_range)
    if relative_days is not None:
        return relative_range(relative_days, now)
    return persisted
