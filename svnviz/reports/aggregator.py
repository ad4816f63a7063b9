"""
Commit aggregation for svnviz.

Buckets a commit set along every time dimension the reports use.

Two dimension sets share the same range filtering:
- range: day / ISO week / month totals over the normalized reporting range,
  overall (dense) and per author (only labels the author touched)
- dashboard: rolling 30-day and 12-month windows anchored at `now`, author
  totals, weekday and hour-of-day distributions

Every mapping is a plain dict. Display ordering is left to the renderers.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from svnviz.errors import CallerContractError
from svnviz.models.entities import AggregatedView, Commit, DashboardTotals, DateRange, RangeTotals
from svnviz.utils.periods import (
    HOURS, WEEKDAY_ORDER,
    format_day, format_iso_week, format_month, hour_of_day, iter_days, shift_month, weekday_name,
)
from svnviz.utils.timestamps import end_of_day, local_date, start_of_day

MODE_RANGE = 'range'
MODE_DASHBOARD = 'dashboard'
MODE_ALL = 'all'
MODES = (MODE_RANGE, MODE_DASHBOARD, MODE_ALL)

ROLLING_DAYS = 30
ROLLING_MONTHS = 12


def normalize_range(date_range: DateRange) -> DateRange:
    """Floor start to local midnight and ceil end to local 23:59:59.999."""
    return DateRange(start=start_of_day(date_range.start), end=end_of_day(date_range.end))


def filter_commits(commits: Sequence[Commit], normalized: DateRange) -> List[Commit]:
    """Commits whose timestamp lies within the normalized range, inclusive."""
    return [c for c in commits if normalized.start <= c.timestamp <= normalized.end]


def _bump(counts: Dict, key) -> None:
    counts[key] = counts.get(key, 0) + 1


def _bump_author(nested: Dict[str, Dict[str, int]], author: str, label: str) -> None:
    _bump(nested.setdefault(author, {}), label)


def aggregate_range(filtered: Sequence[Commit], normalized: DateRange) -> RangeTotals:
    """
    Day, week and month totals over a normalized range.

    Overall maps are seeded with zero for every label between the range's
    start and end dates. Per-author maps are created on the author's first
    commit and hold only the labels that author has commits in.

    Args:
        filtered: Commits already restricted to `normalized`
        normalized: Output of normalize_range()
    """
    days = list(iter_days(local_date(normalized.start), local_date(normalized.end)))

    totals = RangeTotals(
        by_day={format_day(d): 0 for d in days},
        by_week={format_iso_week(d): 0 for d in days},
        by_month={format_month(d): 0 for d in days},
    )

    for commit in filtered:
        day = format_day(commit.timestamp)
        week = format_iso_week(commit.timestamp)
        month = format_month(commit.timestamp)

        _bump(totals.by_day, day)
        _bump(totals.by_week, week)
        _bump(totals.by_month, month)

        _bump_author(totals.author_by_day, commit.author, day)
        _bump_author(totals.author_by_week, commit.author, week)
        _bump_author(totals.author_by_month, commit.author, month)

    return totals


def aggregate_dashboard(filtered: Sequence[Commit], now: datetime) -> DashboardTotals:
    """
    Rolling windows and distributions anchored at `now`.

    - last_30_days: today-29 .. today seeded; commits at or after local
      midnight 30 days ago are counted, so a commit on today-30 adds its key
    - last_12_months: current month and the 11 before it seeded; commits in
      or after the first window month are counted
    - author_totals: not seeded
    - by_weekday: Monday-first, seeded
    - by_hour: 0-23, seeded

    Args:
        filtered: Commits already restricted to the reporting range
        now: Anchor instant for the rolling windows
    """
    today = local_date(now)

    last_30_days = {
        format_day(today - timedelta(days=offset)): 0
        for offset in range(ROLLING_DAYS - 1, -1, -1)
    }
    thirty_days_ago = start_of_day(today - timedelta(days=ROLLING_DAYS))

    last_12_months = {
        format_month(shift_month(today, offset)): 0
        for offset in range(-(ROLLING_MONTHS - 1), 1)
    }
    first_month = format_month(shift_month(today, -(ROLLING_MONTHS - 1)))

    dashboard = DashboardTotals(
        last_30_days=last_30_days,
        last_12_months=last_12_months,
        by_weekday={name: 0 for name in WEEKDAY_ORDER},
        by_hour={hour: 0 for hour in HOURS},
    )

    for commit in filtered:
        if commit.timestamp >= thirty_days_ago:
            _bump(dashboard.last_30_days, format_day(commit.timestamp))

        month = format_month(commit.timestamp)
        if month >= first_month:
            _bump(dashboard.last_12_months, month)

        _bump(dashboard.author_totals, commit.author)
        _bump(dashboard.by_weekday, weekday_name(commit.timestamp))
        _bump(dashboard.by_hour, hour_of_day(commit.timestamp))

    return dashboard


def aggregate_commits(
    commits: Sequence[Commit],
    date_range: DateRange,
    mode: str = MODE_ALL,
    now: Optional[datetime] = None
) -> AggregatedView:
    """
    Aggregate commits by time period and author.

    Args:
        commits: Any commit set, in any order
        date_range: Reporting range; normalized to whole local days
        mode: 'range', 'dashboard' or 'all'
        now: Anchor for the rolling windows, defaults to the wall clock

    Returns:
        AggregatedView with the requested dimension sets filled in

    Raises:
        CallerContractError: Unknown mode, or start after end once normalized
    """
    if mode not in MODES:
        raise CallerContractError(f"Unknown aggregation mode: {mode!r}")

    normalized = normalize_range(date_range)
    if normalized.start > normalized.end:
        raise CallerContractError(
            f"Date range start {normalized.start.isoformat()} is after end {normalized.end.isoformat()}"
        )

    if now is None:
        now = datetime.now().astimezone()

    filtered = filter_commits(commits, normalized)
    view = AggregatedView(date_range=normalized, generated_at=now, commit_count=len(filtered))

    if mode in (MODE_RANGE, MODE_ALL):
        view.range_totals = aggregate_range(filtered, normalized)
    if mode in (MODE_DASHBOARD, MODE_ALL):
        view.dashboard = aggregate_dashboard(filtered, now)

    return view
