"""
Validation for the svnviz ETL pipeline.

Centralizes the rules a raw svn log entry must satisfy before it becomes a Commit.
"""

from typing import Optional

from svnviz.utils.timestamps import parse_timestamp


class ValidationResult:
    """Result of validating an entry."""

    def __init__(self, valid: bool, reason: Optional[str] = None):
        self.valid = valid
        self.reason = reason

    def __bool__(self):
        return self.valid


def validate_revision(revision: Optional[str]) -> ValidationResult:
    """
    Validate a logentry revision attribute.

    Rules:
    - Must be present
    - Must be a base-10 integer
    - Must be positive
    """
    if revision is None or not revision.strip():
        return ValidationResult(False, "Missing revision")

    try:
        value = int(revision)
    except ValueError:
        return ValidationResult(False, f"Invalid revision number: {revision}")

    if value <= 0:
        return ValidationResult(False, f"Revision must be positive: {revision}")

    return ValidationResult(True)


def validate_entry(
    author: Optional[str],
    date: Optional[str],
) -> ValidationResult:
    """
    Validate the fields of a single logentry.

    Rules:
    - Must have a non-empty author
    - Must have a date
    - Date must parse as an ISO-8601 timestamp

    Args:
        author: Text of the <author> element (None if absent)
        date: Text of the <date> element (None if absent)

    Returns:
        ValidationResult with valid flag and reason if invalid
    """
    if author is None or date is None:
        return ValidationResult(False, "Missing author or date")

    if not author.strip():
        return ValidationResult(False, "Empty author")

    if not parse_timestamp(date):
        return ValidationResult(False, f"Invalid date format: {date}")

    return ValidationResult(True)
