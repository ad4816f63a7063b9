"""Helpers shared across svnviz tests."""

import os
import time
from datetime import datetime, timezone

from svnviz.models.entities import Commit


def set_test_timezone(tz_name: str):
    """Set process timezone for tests when supported."""
    if not hasattr(time, "tzset"):
        return None
    old_tz = os.environ.get("TZ")
    os.environ["TZ"] = tz_name
    time.tzset()
    return old_tz


def restore_test_timezone(old_tz):
    """Restore process timezone after test."""
    if not hasattr(time, "tzset"):
        return
    if old_tz is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = old_tz
    time.tzset()


def utc(*args) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


def make_commit(revision: int, author: str, timestamp: datetime, message: str = '') -> Commit:
    return Commit(revision=revision, author=author, timestamp=timestamp, message=message)


# Three commits, newest first as `svn log` prints them
SAMPLE_LOG = """<?xml version="1.0" encoding="UTF-8"?>
<log>
<logentry revision="3">
<author>a</author>
<date>2024-03-02T09:00:00.000000Z</date>
<paths>
<path action="M" kind="file">/trunk/a.txt</path>
</paths>
<msg>third</msg>
</logentry>
<logentry revision="2">
<author>b</author>
<date>2024-03-01T15:00:00.000000Z</date>
<msg>second</msg>
</logentry>
<logentry revision="1">
<author>a</author>
<date>2024-03-01T10:00:00.000000Z</date>
<msg></msg>
</logentry>
</log>
"""
