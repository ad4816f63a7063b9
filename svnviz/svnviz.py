#!/usr/bin/env python3
"""
svnviz - Subversion commit activity statistics

Gathers `svn log` history into a JSON data file and renders it as an
HTML chart dashboard, a terminal summary, JSON, or a live web dashboard.

Usage:
    python -m svnviz <command> [options]
    svnviz <command> [options]
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence
from urllib.parse import urlparse

from svnviz.config.loader import load_config, get_data_path, get_output_path
from svnviz.errors import SvnVizError
from svnviz.models.schema import data_exists, load_data
from svnviz.utils.progress import print_error, print_status, print_verbose


def positive_int(value: str) -> int:
    """argparse type for --relative-days."""
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value!r}")
    if days <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value!r}")
    return days


def repository_url(value: str) -> str:
    """argparse type for --url; requires a scheme such as https:// or svn://."""
    if not urlparse(value).scheme:
        raise argparse.ArgumentTypeError(f"not a valid repository URL: {value!r}")
    return value


def _add_range_args(parser: argparse.ArgumentParser) -> None:
    ranges = parser.add_mutually_exclusive_group()
    ranges.add_argument('--date-range', metavar='START:END',
                        help='Date range as YYYY-MM-DD:YYYY-MM-DD')
    ranges.add_argument('--relative-days', metavar='N', type=positive_int,
                        help='Number of days to look back from today')


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='svnviz',
        description='Subversion commit activity statistics'
    )
    parser.add_argument('--config', metavar='PATH', type=Path,
                        help='Config file (default: ~/.svnviz/config.json)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    commands = parser.add_subparsers(dest='command', metavar='<command>')
    commands.required = True

    gather = commands.add_parser('gather', help='Fetch svn history into the data file')
    gather.add_argument('--url', required=True, type=repository_url,
                        help='SVN repository URL')
    gather.add_argument('--username', required=True, help='SVN username')
    gather.add_argument('--password', required=True, help='SVN password')
    gather.add_argument('--data-file', metavar='FILE',
                        help='Data file (default: from config)')
    _add_range_args(gather)

    generate = commands.add_parser('generate', help='Write the HTML chart dashboard')
    generate.add_argument('--data-file', metavar='FILE',
                          help='Data file (default: from config)')
    generate.add_argument('--output-dir', metavar='DIR',
                          help='Output directory (default: from config)')
    _add_range_args(generate)

    report = commands.add_parser('report', help='Print a terminal summary')
    report.add_argument('--data-file', metavar='FILE',
                        help='Data file (default: from config)')
    report.add_argument('--json', action='store_true',
                        help='Output the aggregated view as JSON')
    report.add_argument('--no-color', action='store_true',
                        help='Disable colors')
    _add_range_args(report)

    serve = commands.add_parser('serve', help='Start the web dashboard server')
    serve.add_argument('--data-file', metavar='FILE',
                       help='Data file (default: from config)')
    serve.add_argument('--host', help='Host to bind (default: from config)')
    serve.add_argument('--port', type=int, help='Port to bind (default: from config)')

    return parser


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.data_file:
        config['data_file'] = args.data_file

    handlers = {
        'gather': _run_gather,
        'generate': _run_generate,
        'report': _run_report,
        'serve': _run_serve,
    }

    try:
        handlers[args.command](config, args)
    except (SvnVizError, ValueError) as e:
        print_error(f"Error: {e}")
        sys.exit(1)


def _run_gather(config: Dict[str, Any], args) -> None:
    from svnviz.etl import run_gather
    from svnviz.reports.date_helpers import parse_date_range, relative_range

    window = None
    if args.date_range is not None:
        window = parse_date_range(args.date_range)
    elif args.relative_days is not None:
        window = relative_range(args.relative_days)

    stats = run_gather(
        url=args.url,
        username=args.username,
        password=args.password,
        data_path=get_data_path(config),
        config=config,
        window=window,
        verbose=args.verbose,
    )
    print_verbose(f"Gather complete: {stats['fetched']} fetched, {stats['new']} new", args.verbose)


def _load_view(config: Dict[str, Any], args):
    """Load the data file and aggregate it over the requested range."""
    from svnviz.reports.aggregator import aggregate_commits
    from svnviz.reports.date_helpers import resolve_reporting_range

    data_path = get_data_path(config)
    if not data_exists(data_path):
        raise SvnVizError(
            f"Data file not found at {data_path}. Run 'svnviz gather' first.",
            stage="load",
        )

    record_set = load_data(data_path)
    print_verbose(f"Loaded {len(record_set.commits)} commits from {data_path}", args.verbose)

    date_range = resolve_reporting_range(
        record_set.date_range,
        date_range=args.date_range,
        relative_days=args.relative_days,
    )
    return aggregate_commits(record_set.commits, date_range, now=datetime.now().astimezone())


def _run_generate(config: Dict[str, Any], args) -> None:
    from svnviz.output.html import write_html

    view = _load_view(config, args)
    output_dir = Path(args.output_dir).expanduser() if args.output_dir else get_output_path(config)
    index_path = write_html(view, output_dir)
    print_status(f"Generated {index_path} ({view.commit_count} commits)")


def _run_report(config: Dict[str, Any], args) -> None:
    view = _load_view(config, args)

    if args.json:
        from svnviz.output.json_export import export_json
        print(export_json(view))
        return

    from svnviz.reports.summary import generate_summary
    color_enabled = config['display'].get('color_enabled', True) and not args.no_color
    print(generate_summary(view, config, color_enabled))


def _run_serve(config: Dict[str, Any], args) -> None:
    """Start the web dashboard server."""
    import uvicorn

    from svnviz.server.app import create_app

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = args.host if args.host is not None else config['server']['host']
    port = args.port if args.port is not None else config['server']['port']

    app = create_app(config=config)

    print_status(f"\nStarting svnviz dashboard at http://{host}:{port}")
    print_status("Press Ctrl+C to stop\n")

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == '__main__':
    main()
