"""
Terminal formatting for svnviz reports.

ANSI colors, counts and shares, horizontal bars for commit distributions,
and aligned text tables. Stdlib only.
"""

import os
import re
import sys
from typing import Any, Dict, List, Optional, Sequence, Union

if sys.platform == 'win32':
    os.system('')  # enables VT100 escapes in the Windows console

ANSI_PATTERN = re.compile(r'\x1B\[[0-?]*[ -/]*[@-~]')

BAR_FILLED = '█'
BAR_EMPTY = '░'
RULE_WIDTH = 60


class Colors:
    """ANSI escape codes used by the reports."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    CYAN = '\033[96m'


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in a color code when enabled."""
    return f"{color}{text}{Colors.RESET}" if enabled else text


def bold(text: str, enabled: bool = True) -> str:
    return colorize(text, Colors.BOLD, enabled)


def dim(text: str, enabled: bool = True) -> str:
    return colorize(text, Colors.DIM, enabled)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_PATTERN.sub('', text)


def visible_width(text: str) -> int:
    """Printed width of text, ignoring escape codes."""
    return len(strip_ansi(text))


def format_number(value: Union[int, float], decimals: int = 0) -> str:
    """Format number with thousands separator."""
    if decimals > 0:
        return f"{value:,.{decimals}f}"
    return f"{int(value):,}"


def format_percentage(value: float, precision: int = 1) -> str:
    return f"{value:.{precision}f}%"


def share(part: int, total: int) -> float:
    """Percentage share, 0 when total is 0."""
    return (part / total * 100) if total > 0 else 0.0


def create_bar(value: float, max_value: float, width: int = 20) -> str:
    """Bar proportional to value / max_value; blank when max_value is 0."""
    if max_value <= 0:
        return ' ' * width
    filled = int(min(1.0, value / max_value) * width)
    return BAR_FILLED * filled + BAR_EMPTY * (width - filled)


def heat_color(pct: float) -> Optional[str]:
    """Bar color for a share of all commits: green above 10%, yellow above 5%."""
    if pct > 10:
        return Colors.GREEN
    if pct > 5:
        return Colors.YELLOW
    return None


def distribution_rows(
    labels: Sequence[Any],
    counts: Dict[Any, int],
    total: int,
    width: int = 30,
    color_enabled: bool = True
) -> List[str]:
    """
    One line per label: label, count, share of `total` and a bar.

    Bars are scaled to the largest count among `labels`, so the busiest
    period always fills the full width.
    """
    peak = max((counts.get(label, 0) for label in labels), default=0)
    rows = []
    for label in labels:
        count = counts.get(label, 0)
        pct = share(count, total)
        bar = create_bar(count, peak, width)
        color = heat_color(pct)
        if color:
            bar = colorize(bar, color, color_enabled)
        rows.append(f"{str(label):10} {format_number(count):>7} {format_percentage(pct):>6} {bar}")
    return rows


def _pad(text: str, width: int, align: str) -> str:
    gap = width - visible_width(text)
    if align == 'r':
        return ' ' * gap + text
    if align == 'c':
        left = gap // 2
        return ' ' * left + text + ' ' * (gap - left)
    return text + ' ' * gap


def format_table(
    headers: List[str],
    rows: List[List[Any]],
    alignments: Optional[List[str]] = None,
    color_enabled: bool = True
) -> str:
    """
    Format rows as an aligned text table.

    Args:
        headers: Column headers
        rows: Row cells; converted with str()
        alignments: 'l', 'r' or 'c' per column (default all 'l')
        color_enabled: Bold the header line
    """
    if not rows:
        return "No data to display."

    cells = [[str(cell) for cell in row] for row in rows]
    alignments = alignments or ['l'] * len(headers)
    widths = [max(visible_width(value) for value in column) for column in zip(headers, *cells)]

    def join(row: List[str]) -> str:
        return ' │ '.join(_pad(cell, w, a) for cell, w, a in zip(row, widths, alignments))

    lines = [bold(join(headers), color_enabled), '─┼─'.join('─' * w for w in widths)]
    lines.extend(join(row) for row in cells)
    return '\n'.join(lines)


def print_header(text: str, char: str = '=') -> str:
    """Title block framed by two rules."""
    rule = char * RULE_WIDTH
    return f"{rule}\n  {text}\n{rule}"


def print_section(title: str, color_enabled: bool = True) -> str:
    """Section title underlined with dashes."""
    return f"\n{bold(title, color_enabled)}\n{'-' * len(title)}"
