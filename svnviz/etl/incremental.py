"""
Incremental processing for the svnviz ETL pipeline.

Decides which slice of history the next gather run has to fetch.
"""

from datetime import datetime, timedelta
from typing import Optional

from svnviz.models.entities import DateRange, FetchPlan

# Offset past the last stored commit so the boundary commit isn't fetched again.
# Assumes no two commits straddle the boundary at sub-second precision.
BOUNDARY_OFFSET = timedelta(seconds=1)


def plan_window(prior_span: Optional[DateRange], now: datetime) -> FetchPlan:
    """
    Plan the next fetch window.

    Returns one of three outcomes:
    - FetchPlan.fetch_all(): no prior data, pull the whole history
    - FetchPlan.incremental(window): fetch from just after the last stored
      commit up to `now`
    - FetchPlan.up_to_date(): the window is empty, skip the fetch

    Args:
        prior_span: Persisted date range of the stored commits, or None
        now: Current instant (timezone-aware)
    """
    if prior_span is None:
        return FetchPlan.fetch_all()

    start = prior_span.end + BOUNDARY_OFFSET
    if start >= now:
        return FetchPlan.up_to_date()

    return FetchPlan.incremental(DateRange(start=start, end=now))
