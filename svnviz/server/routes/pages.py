"""HTML dashboard page."""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from svnviz.models.entities import DateRange
from svnviz.models.schema import RecordSet
from svnviz.output.html import render_html
from svnviz.reports.aggregator import MODE_ALL, aggregate_commits
from svnviz.server.dependencies import get_now, get_record_set, get_reporting_range

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def index(
    date_range: DateRange = Depends(get_reporting_range),
    record_set: RecordSet = Depends(get_record_set),
    now: datetime = Depends(get_now),
):
    """Render the chart page for the requested range."""
    view = aggregate_commits(record_set.commits, date_range, mode=MODE_ALL, now=now)
    return HTMLResponse(render_html(view))
