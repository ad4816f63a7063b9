"""
Error taxonomy for svnviz.

Every error carries the pipeline stage that failed (fetch, parse, merge,
aggregate, load) and, where known, the offending revision number.
"""

from typing import Optional


class SvnVizError(Exception):
    """Base class for all svnviz errors."""

    stage: Optional[str] = None

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        revision: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage
        self.revision = revision

    def __str__(self) -> str:
        parts = []
        if self.stage:
            parts.append(f"[{self.stage}]")
        if self.revision is not None:
            parts.append(f"revision {self.revision}:")
        parts.append(self.message)
        return ' '.join(parts)


class ValidationError(SvnVizError):
    """Malformed commit record fields. Fatal for the whole run."""
    stage = 'parse'


class EmptyInputError(SvnVizError):
    """Date span requested for zero commits."""
    stage = 'merge'


class CallerContractError(SvnVizError):
    """Programming error upstream: inverted range, unknown mode, etc."""
    stage = 'aggregate'


class FetchError(SvnVizError):
    """The svn client could not be run or exited with an error."""
    stage = 'fetch'


class StorageError(SvnVizError):
    """The data file could not be read or failed schema validation."""
    stage = 'load'
