"""
Record set merging for svnviz.

Folds freshly fetched commits into the persisted record set, deduplicating
by revision number, and recomputes the persisted date span.
"""

from typing import List, Sequence

from svnviz.errors import EmptyInputError
from svnviz.models.entities import Commit, DateRange, MergeResult


def merge_commits(existing: Sequence[Commit], incoming: Sequence[Commit]) -> MergeResult:
    """
    Merge incoming commits into an existing record set.

    All of `existing` is kept. Incoming commits whose revision already
    exists are dropped; the rest are appended in their incoming order.

    Note: `incoming` is only deduplicated against `existing`, not against
    itself. The parser emits at most one record per revision.

    Args:
        existing: Commits already persisted
        incoming: Newly fetched commits

    Returns:
        MergeResult with the merged list and the count of new commits
    """
    known_revisions = {c.revision for c in existing}
    new_commits = [c for c in incoming if c.revision not in known_revisions]

    merged: List[Commit] = list(existing) + new_commits
    return MergeResult(merged=merged, new_count=len(new_commits))


def compute_date_span(commits: Sequence[Commit]) -> DateRange:
    """
    Span from the earliest to the latest commit timestamp.

    Raises:
        EmptyInputError: If `commits` is empty
    """
    if not commits:
        raise EmptyInputError("Cannot compute a date span of zero commits")

    timestamps = [c.timestamp for c in commits]
    return DateRange(start=min(timestamps), end=max(timestamps))
