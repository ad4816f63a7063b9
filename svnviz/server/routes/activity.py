"""Fixed-range activity endpoint (per day, ISO week and month)."""

from fastapi import APIRouter, Depends

from svnviz.models.entities import DateRange
from svnviz.models.schema import RecordSet
from svnviz.output.json_export import range_to_dict
from svnviz.reports.aggregator import MODE_RANGE, aggregate_commits
from svnviz.server.dependencies import get_record_set, get_reporting_range
from svnviz.server.models.stats import ActivityResponse
from svnviz.utils.timestamps import to_iso_string

router = APIRouter(prefix="/api", tags=["activity"])


@router.get("/activity", response_model=ActivityResponse)
def activity(
    date_range: DateRange = Depends(get_reporting_range),
    record_set: RecordSet = Depends(get_record_set),
):
    """Dense day/week/month series plus sparse per-author series."""
    view = aggregate_commits(record_set.commits, date_range, mode=MODE_RANGE)
    return ActivityResponse(
        date_range={
            "start": to_iso_string(view.date_range.start),
            "end": to_iso_string(view.date_range.end),
        },
        commit_count=view.commit_count,
        **range_to_dict(view.range_totals),
    )
