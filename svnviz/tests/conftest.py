"""Shared test fixtures.

Local-time bucketing depends on the process timezone, so every test runs
with TZ pinned to UTC unless it sets its own.
"""

import time

import pytest

from svnviz.tests.helpers import restore_test_timezone, set_test_timezone


@pytest.fixture(autouse=True)
def utc_timezone():
    """Run each test in UTC."""
    if not hasattr(time, "tzset"):
        pytest.skip("timezone override not supported on this platform")
    old_tz = set_test_timezone("UTC")
    yield
    restore_test_timezone(old_tz)
