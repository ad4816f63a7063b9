"""Pydantic models for the commit statistics API."""

from typing import Dict, List

from pydantic import BaseModel

from svnviz.server.models.common import DateRangeModel


class CountPoint(BaseModel):
    """Commit count for one period label."""
    label: str
    count: int = 0


class HourPoint(BaseModel):
    """Commit count for one hour of the day."""
    hour: int
    count: int = 0


class AuthorCount(BaseModel):
    """Total commits by one author."""
    author: str
    count: int = 0


class DashboardResponse(BaseModel):
    """Rolling windows and distributions for the dashboard."""
    date_range: DateRangeModel
    generated_at: str
    commit_count: int
    last_30_days: List[CountPoint]
    last_12_months: List[CountPoint]
    author_totals: List[AuthorCount]
    by_weekday: List[CountPoint]
    by_hour: List[HourPoint]


class AuthorActivity(BaseModel):
    """One author's fixed-range series; only periods with commits appear."""
    by_day: List[CountPoint]
    by_week: List[CountPoint]
    by_month: List[CountPoint]


class ActivityResponse(BaseModel):
    """Day/week/month totals over the reporting range."""
    date_range: DateRangeModel
    commit_count: int
    by_day: List[CountPoint]
    by_week: List[CountPoint]
    by_month: List[CountPoint]
    authors: Dict[str, AuthorActivity]
