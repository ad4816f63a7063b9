"""Test fixtures for server tests.

Builds the app around a deterministic in-memory record set and a fixed
clock, so rolling windows are reproducible.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from svnviz.config.loader import DEFAULT_CONFIG
from svnviz.etl.loader import compute_date_span
from svnviz.models.schema import RecordSet
from svnviz.server.app import create_app
from svnviz.tests.helpers import make_commit, utc

FIXED_NOW = utc(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def record_set():
    """Five commits by three authors over two weeks."""
    commits = [
        make_commit(1, 'alice', utc(2024, 3, 1, 10, 0)),
        make_commit(2, 'bob', utc(2024, 3, 1, 15, 0)),
        make_commit(3, 'alice', utc(2024, 3, 2, 9, 0)),
        make_commit(4, 'carol', utc(2024, 3, 11, 14, 30)),
        make_commit(5, 'alice', utc(2024, 3, 14, 23, 15)),
    ]
    return RecordSet(commits=commits, date_range=compute_date_span(commits))


@pytest_asyncio.fixture
async def client(record_set, tmp_path):
    """Create an async test client over the in-memory record set."""
    config = {**DEFAULT_CONFIG, "data_file": str(tmp_path / "svn_data.json")}
    app = create_app(config=config, record_set=record_set, clock=lambda: FIXED_NOW)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def empty_client(tmp_path):
    """Client for an app with no data file loaded."""
    config = {**DEFAULT_CONFIG, "data_file": str(tmp_path / "missing.json")}
    app = create_app(config=config, clock=lambda: FIXED_NOW)
    app.state.record_set = None

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
