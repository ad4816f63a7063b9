"""FastAPI dependency injection for data, config and the reporting range."""

from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException, Query, Request
from pydantic import ValidationError as PydanticValidationError

from svnviz.models.entities import DateRange
from svnviz.models.schema import RecordSet
from svnviz.reports.date_helpers import relative_range
from svnviz.server.models.common import DateRangeParams
from svnviz.utils.timestamps import end_of_day, start_of_day


def get_config(request: Request) -> dict:
    """Get the loaded config from app state."""
    return request.app.state.config


def get_record_set(request: Request) -> RecordSet:
    """Get the loaded record set, or 503 if no data file was loaded."""
    record_set = getattr(request.app.state, "record_set", None)
    if record_set is None:
        raise HTTPException(
            status_code=503,
            detail="No commit data loaded. Run 'svnviz gather' first.",
        )
    return record_set


def get_now(request: Request) -> datetime:
    """Anchor instant for rolling windows."""
    return request.app.state.clock()


def get_reporting_range(
    request: Request,
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    days: Optional[int] = Query(None),
) -> DateRange:
    """
    Resolve the reporting range from query parameters.

    - days=N: the last N days
    - from/to: whole local days; a missing end is the last stored commit,
      a missing start is the first stored commit
    - nothing: the persisted range of the data file
    """
    try:
        params = DateRangeParams(date_from=date_from, date_to=date_to, days=days)
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=[err["msg"] for err in e.errors()])

    persisted = get_record_set(request).date_range

    if params.days is not None:
        return relative_range(params.days, get_now(request))

    if params.date_from is None and params.date_to is None:
        return persisted

    start = start_of_day(params.date_from) if params.date_from else persisted.start
    end = end_of_day(params.date_to) if params.date_to else persisted.end
    if start_of_day(start) > end_of_day(end):
        raise HTTPException(status_code=422, detail="Reporting range start is after its end")
    return DateRange(start=start, end=end)
