"""Health check endpoint."""

import time

from fastapi import APIRouter, Request

from svnviz import __version__

router = APIRouter(prefix="/api", tags=["health"])

_start_time = time.time()


@router.get("/health")
async def health_check(request: Request):
    """Health check: returns status, uptime, and whether commit data is loaded."""
    uptime = int(time.time() - _start_time)

    record_set = getattr(request.app.state, "record_set", None)
    if record_set is None:
        data_status = "missing"
        commit_count = 0
    else:
        data_status = "ok"
        commit_count = len(record_set.commits)

    return {
        "status": "ok",
        "uptime_seconds": uptime,
        "data": data_status,
        "commit_count": commit_count,
        "version": __version__,
    }
