from __future__ import annotations

import html
from pathlib import Path

from bond_spread.alignment.schemas import AlignmentResult
from bond_spread.analytics.schemas import ColumnStats
from bond_spread.analytics.stats import compute_summary_stats
from bond_spread.reporting.charts import build_spread_figure
from bond_spread.reporting.headline import NOT_AVAILABLE, headline_cards

HTML_TEMPLATE = """
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: Arial; margin: 40px; }}
h1 {{ color: #333; }}
table {{ border-collapse: collapse; width: 70%; margin-bottom: 40px; }}
td, th {{ border: 1px solid #ccc; padding: 8px; }}
.note {{ color: #666; }}
</style>
</head>
<body>

<h1>{title}</h1>
<p class="note">Range: {range_text}</p>

<h2>Latest Values</h2>
<table>
<tr><th>Series</th><th>Value</th><th>As of</th></tr>
{headline_rows}
</table>

<h2>Summary Statistics</h2>
<table>
<tr><th>Series</th><th>Count</th><th>Mean</th><th>Min</th><th>Max</th><th>Std</th><th>Change</th></tr>
{stats_rows}
</table>

<h2>Chart</h2>
{chart}

</body>
</html>
"""

INSUFFICIENT_TEMPLATE = """
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<h1>{title}</h1>
<p>{message}</p>
</body>
</html>
"""


def _fmt(value: float | None, digits: int = 2) -> str:
    return NOT_AVAILABLE if value is None else f"{value:.{digits}f}"


def _stats_row(label: str, stats: ColumnStats, digits: int) -> str:
    cells = [
        html.escape(label),
        str(stats.count),
        _fmt(stats.mean, digits),
        _fmt(stats.min, digits),
        _fmt(stats.max, digits),
        _fmt(stats.std, digits),
        _fmt(stats.change, digits),
    ]
    return "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def render_html_report(result: AlignmentResult, title: str = "Bond Yield Spreads") -> str:
    if not result.has_data:
        return INSUFFICIENT_TEMPLATE.format(
            title=html.escape(title),
            message=html.escape(result.message or "Insufficient data."),
        )

    headline_rows = "\n".join(
        f"<tr><td>{html.escape(c['label'])}</td><td>{html.escape(c['value'])}</td>"
        f"<td>{html.escape(c['as_of'])}</td></tr>"
        for c in headline_cards(result.latest)
    )

    stats = compute_summary_stats(result.rows)
    stats_rows = "\n".join(
        [
            _stats_row("Treasury (%)", stats.treasury, 2),
            _stats_row("Corporate (%)", stats.corporate, 2),
            _stats_row("Spread (bps)", stats.spread, 1),
        ]
    )

    fig = build_spread_figure(result.rows, title=None)
    rng = result.selected_range

    return HTML_TEMPLATE.format(
        title=html.escape(title),
        range_text=f"{rng.start.isoformat()} to {rng.end.isoformat()}",
        headline_rows=headline_rows,
        stats_rows=stats_rows,
        chart=fig.to_html(full_html=False, include_plotlyjs="cdn"),
    )


def generate_html_report(result: AlignmentResult, path: str | Path, title: str = "Bond Yield Spreads"):
    path = Path(path)
    path.write_text(render_html_report(result, title=title), encoding="utf-8")
    return path
