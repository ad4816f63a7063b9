"""
JSON export functionality for svnviz.

Turns an AggregatedView into ordered, JSON-ready structures. This is where
display order is decided: period keys sort lexicographically, weekdays run
Monday first, hours ascend, authors rank by commit count.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from svnviz.models.entities import AggregatedView, DashboardTotals, RangeTotals
from svnviz.utils.periods import WEEKDAY_ORDER


def rank_authors(totals: Dict[str, int]) -> List[Tuple[str, int]]:
    """Authors by descending commit count, ties by name."""
    return sorted(totals.items(), key=lambda item: (-item[1], item[0]))


def series(counts: Dict[str, int]) -> List[Dict[str, Any]]:
    """Period counts as a label-sorted list of points."""
    return [{'label': label, 'count': counts[label]} for label in sorted(counts)]


def range_to_dict(totals: RangeTotals) -> Dict[str, Any]:
    """Fixed-range totals; per-author series keep only touched labels."""
    authors = sorted(set(totals.author_by_day) | set(totals.author_by_week) | set(totals.author_by_month))
    return {
        'by_day': series(totals.by_day),
        'by_week': series(totals.by_week),
        'by_month': series(totals.by_month),
        'authors': {
            author: {
                'by_day': series(totals.author_by_day.get(author, {})),
                'by_week': series(totals.author_by_week.get(author, {})),
                'by_month': series(totals.author_by_month.get(author, {})),
            }
            for author in authors
        },
    }


def dashboard_to_dict(dashboard: DashboardTotals) -> Dict[str, Any]:
    """Rolling windows and distributions in display order."""
    return {
        'last_30_days': series(dashboard.last_30_days),
        'last_12_months': series(dashboard.last_12_months),
        'author_totals': [
            {'author': author, 'count': count}
            for author, count in rank_authors(dashboard.author_totals)
        ],
        'by_weekday': [
            {'label': day, 'count': dashboard.by_weekday.get(day, 0)}
            for day in WEEKDAY_ORDER
        ],
        'by_hour': [
            {'hour': hour, 'count': dashboard.by_hour[hour]}
            for hour in sorted(dashboard.by_hour)
        ],
    }


def view_to_dict(view: AggregatedView) -> Dict[str, Any]:
    """Whole view as a JSON-ready dict."""
    return {
        'date_range': {
            'start': view.date_range.start.isoformat(),
            'end': view.date_range.end.isoformat(),
        },
        'generated_at': view.generated_at.isoformat(),
        'commit_count': view.commit_count,
        'range': range_to_dict(view.range_totals) if view.range_totals is not None else None,
        'dashboard': dashboard_to_dict(view.dashboard) if view.dashboard is not None else None,
    }


def export_json(view: AggregatedView, output_path: Optional[Path] = None) -> str:
    """
    Serialize a view to JSON, optionally writing it to a file.

    Args:
        view: Aggregated view
        output_path: File to write; parent directories are created

    Returns:
        The JSON text
    """
    text = json.dumps(view_to_dict(view), indent=2)
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + '\n', encoding='utf-8')
    return text
