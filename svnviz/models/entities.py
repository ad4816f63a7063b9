"""
Data structures (entities) for svnviz.

Uses dataclasses for clean, typed data structures.
Named 'entities' instead of 'dataclasses' to avoid stdlib import confusion.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Commit:
    """A single commit record from the svn log. Identity is the revision."""
    revision: int
    author: str
    timestamp: datetime
    message: str = ''


@dataclass(frozen=True)
class DateRange:
    """An inclusive span of instants."""
    start: datetime
    end: datetime


@dataclass(frozen=True)
class FetchPlan:
    """
    Outcome of incremental window planning.

    Three distinct outcomes:
    - 'all': no date filter, pull the whole history
    - 'window': fetch only the instants in `window`
    - 'none': data is up to date, skip the svn call entirely
    """
    action: str
    window: Optional[DateRange] = None

    FETCH_ALL = 'all'
    WINDOW = 'window'
    UP_TO_DATE = 'none'

    @classmethod
    def fetch_all(cls) -> 'FetchPlan':
        return cls(cls.FETCH_ALL)

    @classmethod
    def incremental(cls, window: DateRange) -> 'FetchPlan':
        return cls(cls.WINDOW, window)

    @classmethod
    def up_to_date(cls) -> 'FetchPlan':
        return cls(cls.UP_TO_DATE)

    @property
    def is_fetch_all(self) -> bool:
        return self.action == self.FETCH_ALL

    @property
    def is_up_to_date(self) -> bool:
        return self.action == self.UP_TO_DATE


@dataclass
class MergeResult:
    """Merged record set plus the number of records that were new."""
    merged: List[Commit]
    new_count: int


@dataclass
class RangeTotals:
    """Fixed-range buckets over an explicit span, overall and per author."""
    by_day: Dict[str, int] = field(default_factory=dict)
    by_week: Dict[str, int] = field(default_factory=dict)
    by_month: Dict[str, int] = field(default_factory=dict)
    # author -> label -> count, only labels the author touched
    author_by_day: Dict[str, Dict[str, int]] = field(default_factory=dict)
    author_by_week: Dict[str, Dict[str, int]] = field(default_factory=dict)
    author_by_month: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass
class DashboardTotals:
    """Rolling windows anchored at 'now' plus fixed-domain distributions."""
    last_30_days: Dict[str, int] = field(default_factory=dict)
    last_12_months: Dict[str, int] = field(default_factory=dict)
    author_totals: Dict[str, int] = field(default_factory=dict)
    by_weekday: Dict[str, int] = field(default_factory=dict)
    by_hour: Dict[int, int] = field(default_factory=dict)


@dataclass
class AggregatedView:
    """Everything produced by one aggregation run."""
    date_range: DateRange  # normalized
    generated_at: datetime
    commit_count: int = 0
    range_totals: Optional[RangeTotals] = None
    dashboard: Optional[DashboardTotals] = None
