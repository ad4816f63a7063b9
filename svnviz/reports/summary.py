"""
Summary report for svnviz.

Generates the terminal view of an aggregated commit set: totals, top
authors, the last 12 months, and the weekday and hour-of-day distributions.
"""

from typing import Any, Dict, Optional

from svnviz.models.entities import AggregatedView
from svnviz.output.formatter import (
    format_number, format_percentage, format_table, share, distribution_rows,
    print_header, print_section, bold, colorize, dim, Colors
)
from svnviz.output.json_export import rank_authors
from svnviz.utils.periods import WEEKDAY_ORDER
from svnviz.utils.timestamps import to_date_string


def _busiest(counts: Dict[str, int]) -> Optional[str]:
    """Label with the most commits; earliest label wins ties."""
    if not counts or max(counts.values()) == 0:
        return None
    return min(counts, key=lambda label: (-counts[label], label))


def generate_summary(
    view: AggregatedView,
    config: Dict[str, Any],
    color_enabled: bool = True
) -> str:
    """
    Generate the summary report.

    Args:
        view: Output of aggregate_commits() with mode 'all'
        config: Configuration dict
        color_enabled: Whether to apply colors
    """
    lines = []
    lines.append(print_header("SVN REPOSITORY STATISTICS"))
    lines.append(dim(f"({to_date_string(view.date_range.start)} to {to_date_string(view.date_range.end)})", color_enabled))

    total = view.commit_count
    dashboard = view.dashboard
    totals = view.range_totals

    lines.append(print_section("TOTALS", color_enabled))
    lines.append(f"Commits:         {colorize(format_number(total), Colors.CYAN, color_enabled)}")
    if dashboard is not None:
        lines.append(f"Authors:         {format_number(len(dashboard.author_totals))}")
    if totals is not None:
        days = len(totals.by_day)
        active_days = sum(1 for count in totals.by_day.values() if count)
        lines.append(f"Days in range:   {format_number(days)}")
        lines.append(f"Active days:     {format_number(active_days)} ({format_percentage(share(active_days, days))})")
        busiest_day = _busiest(totals.by_day)
        if busiest_day:
            lines.append(f"Busiest day:     {busiest_day} ({format_number(totals.by_day[busiest_day])})")
        busiest_week = _busiest(totals.by_week)
        if busiest_week:
            lines.append(f"Busiest week:    {busiest_week} ({format_number(totals.by_week[busiest_week])})")

    if total == 0:
        lines.append("")
        lines.append("No commits in this period.")
        return '\n'.join(lines)

    if dashboard is None:
        return '\n'.join(lines)

    top_n = config.get('display', {}).get('top_authors', 10)
    ranked = rank_authors(dashboard.author_totals)
    lines.append(print_section("TOP AUTHORS", color_enabled))
    rows = [
        [author, format_number(count), format_percentage(share(count, total))]
        for author, count in ranked[:top_n]
    ]
    lines.append(format_table(['Author', 'Commits', '%'], rows, ['l', 'r', 'r'], color_enabled))
    if len(ranked) > top_n:
        lines.append(dim(f"... and {len(ranked) - top_n} more", color_enabled))

    lines.append(print_section("LAST 12 MONTHS", color_enabled))
    months = sorted(dashboard.last_12_months)
    lines.extend(distribution_rows(months, dashboard.last_12_months, total, color_enabled=color_enabled))

    lines.append(print_section("BY DAY OF WEEK", color_enabled))
    lines.extend(distribution_rows(WEEKDAY_ORDER, dashboard.by_weekday, total, color_enabled=color_enabled))

    lines.append(print_section("BY HOUR OF DAY", color_enabled))
    hours = sorted(dashboard.by_hour)
    hour_counts = {f"{h:02d}:00": dashboard.by_hour[h] for h in hours}
    lines.extend(distribution_rows(list(hour_counts), hour_counts, total, color_enabled=color_enabled))

    peak = sorted(hours, key=lambda h: (-dashboard.by_hour[h], h))[:3]
    lines.append("")
    lines.append(bold("PEAK HOURS", color_enabled))
    for hour in peak:
        count = dashboard.by_hour[hour]
        lines.append(
            f"{hour:02d}:00 - {hour:02d}:59  {format_number(count):>6} commits "
            f"({format_percentage(share(count, total), 1)})"
        )

    return '\n'.join(lines)
