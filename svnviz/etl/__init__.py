"""
ETL package - fetch, parse and merge svn history into the data file.

Main entry point is run_gather() which orchestrates the full pipeline:
window planning -> svn log -> XML parse -> merge/dedup -> persist.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from svnviz.config.loader import load_config
from svnviz.etl.incremental import plan_window
from svnviz.etl.loader import merge_commits, compute_date_span
from svnviz.etl.parser import parse_commits
from svnviz.etl.svn import export_svn_log
from svnviz.models.entities import DateRange, FetchPlan
from svnviz.models.schema import data_exists, load_data, save_data
from svnviz.utils.progress import plural, print_status, print_verbose
from svnviz.utils.timestamps import to_date_string

Fetcher = Callable[..., str]


def run_gather(
    url: str,
    username: str,
    password: str,
    data_path: Path,
    config: Optional[Dict[str, Any]] = None,
    window: Optional[DateRange] = None,
    now: Optional[datetime] = None,
    verbose: bool = False,
    fetcher: Fetcher = export_svn_log
) -> Dict[str, Any]:
    """
    Run the gather pipeline against one repository.

    Works incrementally when `data_path` already exists: only commits after
    the last stored one are fetched. An explicit `window` overrides planning;
    whatever it returns is still merged and deduplicated.

    Args:
        url: Repository URL
        username: svn username
        password: svn password
        data_path: Data file to read and update
        config: Configuration dict (loaded if None)
        window: Explicit fetch window, bypasses incremental planning
        now: Current instant, defaults to the wall clock
        verbose: Enable verbose output
        fetcher: Callable with export_svn_log's signature

    Returns:
        Dict with run stats: plan, fetched, new, total, date_range, saved
    """
    if config is None:
        config = load_config()
    if now is None:
        now = datetime.now(timezone.utc)

    stats: Dict[str, Any] = {
        'plan': None,
        'fetched': 0,
        'new': 0,
        'total': 0,
        'date_range': None,
        'saved': False,
    }

    existing = []
    prior_span = None
    is_incremental = data_exists(data_path)
    if is_incremental:
        print_status("Existing data file found, working incrementally...")
        record_set = load_data(data_path)
        existing = record_set.commits
        prior_span = record_set.date_range
        stats['total'] = len(existing)
        stats['date_range'] = prior_span
        print_verbose(f"Loaded {plural(len(existing), 'commit')} from {data_path}", verbose)

    if window is not None:
        plan = FetchPlan.incremental(window)
    else:
        plan = plan_window(prior_span, now)
    stats['plan'] = plan.action

    if plan.is_up_to_date:
        print_status("No new commits to fetch (data is up to date)")
        return stats

    if plan.is_fetch_all:
        print_status("Fetching all SVN logs...")
    else:
        print_status(
            f"Fetching SVN logs from {to_date_string(plan.window.start)} "
            f"to {to_date_string(plan.window.end)}..."
        )

    xml_log = fetcher(url, username, password, plan.window, config)

    print_status("Parsing commits...")
    new_commits = parse_commits(xml_log)
    stats['fetched'] = len(new_commits)

    if not new_commits:
        print_status("No new commits found" if is_incremental else "No commits found")
        return stats

    print_status(f"Found {plural(len(new_commits), 'commit')}")

    result = merge_commits(existing, new_commits)
    stats['new'] = result.new_count
    stats['total'] = len(result.merged)
    if is_incremental:
        print_status(f"Total commits after merge: {len(result.merged)} ({result.new_count} new)")

    date_range = compute_date_span(result.merged)
    stats['date_range'] = date_range

    print_verbose("Serializing data...", verbose)
    save_data(data_path, result.merged, date_range)
    stats['saved'] = True

    print_status(f"Data saved to {data_path}")
    print_status(f"Date range: {to_date_string(date_range.start)} to {to_date_string(date_range.end)}")
    print_status(f"Total commits: {len(result.merged)}")

    return stats
