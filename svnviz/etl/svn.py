"""
svn client wrapper for svnviz.

Runs `svn log --xml --verbose` and returns its raw stdout.
"""

import subprocess
from typing import Any, Dict, List, Optional

from svnviz.config.loader import DEFAULT_CONFIG
from svnviz.errors import FetchError
from svnviz.models.entities import DateRange
from svnviz.utils.timestamps import to_svn_instant


def build_log_command(
    url: str,
    username: str,
    password: str,
    window: Optional[DateRange] = None,
    svn_config: Optional[Dict[str, Any]] = None
) -> List[str]:
    """
    Build the argv for `svn log`.

    Args:
        url: Repository URL
        username: svn username
        password: svn password
        window: Date window to fetch; None fetches all history
        svn_config: The 'svn' section of the config
    """
    if svn_config is None:
        svn_config = DEFAULT_CONFIG['svn']

    args = [svn_config.get('binary') or 'svn', 'log', url, '--xml', '--verbose']

    if window is not None:
        revision_range = f"{to_svn_instant(window.start)}:{to_svn_instant(window.end)}"
        args.extend(['--revision', revision_range])

    args.extend(['--username', username, '--password', password])

    if svn_config.get('non_interactive', True):
        args.append('--non-interactive')

    trust = svn_config.get('trust_server_cert_failures')
    if trust:
        args.extend(['--trust-server-cert-failures', trust])

    return args


def export_svn_log(
    url: str,
    username: str,
    password: str,
    window: Optional[DateRange] = None,
    config: Optional[Dict[str, Any]] = None
) -> str:
    """
    Execute `svn log` and return the XML output.

    Args:
        url: Repository URL
        username: svn username
        password: svn password
        window: Date window to fetch; None means no date filter
        config: Full configuration dict

    Raises:
        FetchError: If svn can't be started, times out, or exits non-zero
    """
    svn_config = (config or DEFAULT_CONFIG)['svn']
    args = build_log_command(url, username, password, window, svn_config)

    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
            timeout=svn_config.get('timeout_seconds'),
        )
    except FileNotFoundError as e:
        raise FetchError(f"Failed to spawn svn process: {e}")
    except subprocess.TimeoutExpired:
        raise FetchError(f"svn log timed out after {svn_config.get('timeout_seconds')}s")

    if result.returncode != 0:
        raise FetchError(
            f"svn command failed with code {result.returncode}: {result.stderr.strip()}"
        )

    return result.stdout
