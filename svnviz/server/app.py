"""
FastAPI application factory for the svnviz dashboard.

Serves the rendered chart page at / and the aggregated statistics as JSON
under /api. Commit data is read from the JSON data file once at startup.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from svnviz import __version__
from svnviz.config.loader import load_config, get_data_path
from svnviz.errors import StorageError
from svnviz.models.schema import RecordSet, data_exists, load_data

logger = logging.getLogger("svnviz.server")


def _local_now() -> datetime:
    return datetime.now().astimezone()


def load_record_set(config: dict) -> Optional[RecordSet]:
    """Load the configured data file, or None when it is missing or unreadable."""
    data_path = get_data_path(config)
    if not data_exists(data_path):
        logger.warning("Data file %s not found; run 'svnviz gather' first", data_path)
        return None
    try:
        record_set = load_data(data_path)
    except StorageError as e:
        logger.error("Could not load %s: %s", data_path, e)
        return None
    logger.info("Loaded %d commits from %s", len(record_set.commits), data_path)
    return record_set


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load commit data before serving requests."""
    config = app.state.config if hasattr(app.state, "config") else load_config()
    app.state.config = config

    if not hasattr(app.state, "record_set"):
        app.state.record_set = load_record_set(config)

    yield


def create_app(
    config: dict = None,
    record_set: Optional[RecordSet] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="svnviz Dashboard API",
        description="Subversion commit activity statistics",
        version=__version__,
        lifespan=lifespan,
    )

    if config:
        app.state.config = config
    if record_set is not None:
        app.state.record_set = record_set
    app.state.clock = clock or _local_now

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    from svnviz.server.routes.health import router as health_router
    from svnviz.server.routes.dashboard import router as dashboard_router
    from svnviz.server.routes.activity import router as activity_router
    from svnviz.server.routes.pages import router as pages_router

    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(activity_router)
    # Page last so /api routes match first
    app.include_router(pages_router)

    return app
