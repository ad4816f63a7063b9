"""
HTML dashboard rendering for svnviz.

Builds Chart.js payloads from an AggregatedView and embeds them in a single
self-contained page. Chart.js itself is loaded from a CDN.
"""

import html
import json
from pathlib import Path
from typing import Any, Dict, List

from svnviz.models.entities import AggregatedView
from svnviz.output.json_export import dashboard_to_dict, range_to_dict, rank_authors
from svnviz.utils.timestamps import to_date_string

CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js@4"

PALETTE = ['#F44336', '#9C27B0', '#3F51B5', '#009688', '#FFEB3B', '#795548', '#607D8B']


def _chart(
    chart_id: str,
    chart_type: str,
    title: str,
    labels: List[str],
    datasets: List[Dict[str, Any]],
    stacked: bool = False
) -> Dict[str, Any]:
    return {
        'id': chart_id,
        'type': chart_type,
        'title': title,
        'stacked': stacked,
        'data': {'labels': labels, 'datasets': datasets},
    }


def _single(points: List[Dict[str, Any]], color: str) -> List[Dict[str, Any]]:
    return [{
        'label': 'Commits',
        'data': [p['count'] for p in points],
        'backgroundColor': color,
    }]


def generate_chart_data(view: AggregatedView) -> List[Dict[str, Any]]:
    """
    Build one Chart.js config per chart, in page order.

    Dashboard charts come first (rolling windows, authors, weekday, hour),
    followed by the fixed-range day/week/month charts.
    """
    charts = []

    if view.dashboard is not None:
        dash = dashboard_to_dict(view.dashboard)

        charts.append(_chart(
            'chart-last-30-days', 'bar', 'Commits - Last 30 Days',
            [p['label'] for p in dash['last_30_days']],
            _single(dash['last_30_days'], '#4CAF50'),
        ))
        charts.append(_chart(
            'chart-last-12-months', 'bar', 'Commits - Last 12 Months',
            [p['label'] for p in dash['last_12_months']],
            _single(dash['last_12_months'], '#2196F3'),
        ))

        authors = dash['author_totals']
        charts.append(_chart(
            'chart-user-totals', 'pie', 'Commits by User',
            [a['author'] for a in authors],
            [{
                'label': 'Commits',
                'data': [a['count'] for a in authors],
                'backgroundColor': [PALETTE[i % len(PALETTE)] for i in range(len(authors))],
            }],
        ))
        charts.append(_chart(
            'chart-by-weekday', 'bar', 'Commits by Day of Week',
            [p['label'] for p in dash['by_weekday']],
            _single(dash['by_weekday'], '#FF9800'),
        ))
        charts.append(_chart(
            'chart-by-hour', 'bar', 'Commits by Hour of Day',
            [f"{p['hour']:02d}:00" for p in dash['by_hour']],
            _single(dash['by_hour'], '#9C27B0'),
        ))

    if view.range_totals is not None:
        totals = range_to_dict(view.range_totals)

        charts.append(_chart(
            'chart-by-day', 'line', 'Commits per Day',
            [p['label'] for p in totals['by_day']],
            [{
                'label': 'Commits',
                'data': [p['count'] for p in totals['by_day']],
                'backgroundColor': '#4CAF50',
                'borderColor': '#4CAF50',
            }],
        ))
        charts.append(_chart(
            'chart-by-week', 'bar', 'Commits per ISO Week',
            [p['label'] for p in totals['by_week']],
            _single(totals['by_week'], '#3F51B5'),
        ))

        # Per-author months stacked; authors without commits in a month are 0
        month_labels = [p['label'] for p in totals['by_month']]
        author_counts = {
            author: sum(view.range_totals.author_by_month[author].values())
            for author in view.range_totals.author_by_month
        }
        datasets = []
        for i, (author, _) in enumerate(rank_authors(author_counts)):
            months = view.range_totals.author_by_month[author]
            datasets.append({
                'label': author,
                'data': [months.get(label, 0) for label in month_labels],
                'backgroundColor': PALETTE[i % len(PALETTE)],
            })
        if not datasets:
            datasets = _single(totals['by_month'], '#009688')
        charts.append(_chart(
            'chart-by-month', 'bar', 'Commits per Month by User',
            month_labels, datasets, stacked=True,
        ))

    return charts


_PAGE_SCRIPT = """
const charts = JSON.parse(document.getElementById('chart-data').textContent);
for (const chart of charts) {
\tconst scales = chart.type === 'pie' ? {} : {
\t\tx: {stacked: chart.stacked},
\t\ty: {stacked: chart.stacked, beginAtZero: true, ticks: {precision: 0}},
\t};
\tnew Chart(document.getElementById(chart.id), {
\t\ttype: chart.type,
\t\tdata: chart.data,
\t\toptions: {
\t\t\tresponsive: true,
\t\t\tmaintainAspectRatio: false,
\t\t\tplugins: {title: {display: true, text: chart.title}},
\t\t\tscales: scales,
\t\t},
\t});
}
"""


def render_html(view: AggregatedView, title: str = "SVN Repository Statistics") -> str:
    """Render the full dashboard page as a string."""
    charts = generate_chart_data(view)
    start = to_date_string(view.date_range.start)
    end = to_date_string(view.date_range.end)

    # '<' escaped so commit data can't close the script element
    chart_json = json.dumps(charts).replace('<', '\\u003c')

    blocks = '\n'.join(
        f'\t<div class="chart{" pie" if c["type"] == "pie" else ""}">\n'
        f'\t\t<canvas id="{c["id"]}"></canvas>\n'
        f'\t</div>'
        for c in charts
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
\t<meta charset="UTF-8">
\t<meta name="viewport" content="width=device-width, initial-scale=1.0">
\t<title>{html.escape(title)}</title>
\t<style>
\t\tbody {{
\t\t\tfont-family: system-ui, -apple-system, sans-serif;
\t\t\tmargin: 0;
\t\t\tpadding: 20px;
\t\t\tbackground: #f5f5f5;
\t\t}}
\t\th1 {{
\t\t\ttext-align: center;
\t\t\tcolor: #333;
\t\t}}
\t\t.subtitle {{
\t\t\ttext-align: center;
\t\t\tcolor: #666;
\t\t\tmargin-bottom: 30px;
\t\t}}
\t\t.chart {{
\t\t\tbackground: white;
\t\t\tmargin: 20px auto;
\t\t\tpadding: 20px;
\t\t\tbox-shadow: 0 2px 4px rgba(0,0,0,0.1);
\t\t\tmax-width: 1440px;
\t\t\theight: 500px;
\t\t}}
\t\t.chart.pie {{
\t\t\theight: 600px;
\t\t}}
\t</style>
\t<script src="{CHART_JS_URL}"></script>
</head>
<body>
\t<h1>{html.escape(title)}</h1>
\t<div class="subtitle">{start} to {end} &middot; {view.commit_count} commits</div>

{blocks}

\t<script id="chart-data" type="application/json">
{chart_json}
\t</script>
\t<script>
{_PAGE_SCRIPT}
\t</script>
</body>
</html>
"""


def write_html(view: AggregatedView, output_dir: Path) -> Path:
    """Write index.html into output_dir and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / 'index.html'
    index_path.write_text(render_html(view), encoding='utf-8')
    return index_path
