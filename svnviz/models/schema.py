"""
Data file schema and persistence for svnviz.

The persisted record set is a single JSON document:

    {
        "commits": [{"revision": 1, "author": "a", "date": "...Z", "message": ""}],
        "dateRange": {"start": "...Z", "end": "...Z"}
    }

Timestamps are ISO-8601 strings in UTC. The document is validated with
pydantic on load so a damaged file fails loudly instead of half-loading.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Sequence

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from svnviz.errors import StorageError
from svnviz.models.entities import Commit, DateRange


class StoredCommit(BaseModel):
    """One commit as written to the data file."""
    revision: int = Field(gt=0)
    author: str
    date: datetime
    message: str = ''


class StoredDateRange(BaseModel):
    """Persisted min/max commit timestamps."""
    start: datetime
    end: datetime


class StoredData(BaseModel):
    """Top-level data file document."""
    commits: List[StoredCommit]
    date_range: StoredDateRange = Field(alias="dateRange")

    model_config = {"populate_by_name": True}


@dataclass
class RecordSet:
    """Loaded data file contents as domain entities."""
    commits: List[Commit]
    date_range: DateRange


def _as_utc(dt: datetime) -> datetime:
    """Normalize to UTC; naive values in old files are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def data_exists(path: Path) -> bool:
    """Check whether a data file is present."""
    return path.is_file()


def save_data(path: Path, commits: Sequence[Commit], date_range: DateRange) -> None:
    """
    Write the record set and its persisted date range to `path`.

    Args:
        path: Data file location (parent directories are created)
        commits: Full merged record set
        date_range: Span of the commits, from compute_date_span()
    """
    document = StoredData(
        commits=[
            StoredCommit(
                revision=c.revision,
                author=c.author,
                date=_as_utc(c.timestamp),
                message=c.message,
            )
            for c in commits
        ],
        date_range=StoredDateRange(
            start=_as_utc(date_range.start),
            end=_as_utc(date_range.end),
        ),
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = document.model_dump(mode="json", by_alias=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent='\t')
        f.write('\n')


def load_data(path: Path) -> RecordSet:
    """
    Read and validate a data file.

    Raises:
        StorageError: If the file is missing, unreadable or fails validation
    """
    try:
        raw = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise StorageError(f"Data file not found: {path}")
    except UnicodeDecodeError as e:
        raise StorageError(f"Data file {path} is not valid UTF-8: {e}")
    except OSError as e:
        raise StorageError(f"Could not read data file {path}: {e}")

    try:
        document = StoredData.model_validate_json(raw)
    except PydanticValidationError as e:
        raise StorageError(f"Invalid data file format in {path}: {e}")

    commits = [
        Commit(
            revision=c.revision,
            author=c.author,
            timestamp=_as_utc(c.date),
            message=c.message,
        )
        for c in document.commits
    ]
    date_range = DateRange(
        start=_as_utc(document.date_range.start),
        end=_as_utc(document.date_range.end),
    )
    return RecordSet(commits=commits, date_range=date_range)
