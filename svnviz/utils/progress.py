"""
Progress and status output for svnviz.

Simple status lines for CLI output.
No external dependencies - stdlib only.
"""

import sys


def print_status(message: str, end: str = '\n') -> None:
    """Print a status message."""
    print(message, end=end, flush=True)


def print_verbose(message: str, verbose: bool = False) -> None:
    """Print a message only if verbose mode is enabled."""
    if verbose:
        print(message, flush=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    print(message, file=sys.stderr, flush=True)


def plural(count: int, noun: str) -> str:
    """'1 commit', '2 commits'."""
    return f"{count} {noun}{'' if count == 1 else 's'}"
