"""Dashboard API endpoint."""

from datetime import datetime

from fastapi import APIRouter, Depends

from svnviz.models.entities import DateRange
from svnviz.models.schema import RecordSet
from svnviz.output.json_export import dashboard_to_dict
from svnviz.reports.aggregator import MODE_DASHBOARD, aggregate_commits
from svnviz.server.dependencies import get_now, get_record_set, get_reporting_range
from svnviz.server.models.stats import DashboardResponse
from svnviz.utils.timestamps import to_iso_string

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    date_range: DateRange = Depends(get_reporting_range),
    record_set: RecordSet = Depends(get_record_set),
    now: datetime = Depends(get_now),
):
    """Rolling windows, author totals and weekday/hour distributions."""
    view = aggregate_commits(record_set.commits, date_range, mode=MODE_DASHBOARD, now=now)
    return DashboardResponse(
        date_range={
            "start": to_iso_string(view.date_range.start),
            "end": to_iso_string(view.date_range.end),
        },
        generated_at=to_iso_string(view.generated_at),
        commit_count=view.commit_count,
        **dashboard_to_dict(view.dashboard),
    )
