# src/bond_spread/reporting/charts.py
from __future__ import annotations

from typing import Optional, Sequence

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from bond_spread.alignment.assembler import rows_to_frame
from bond_spread.alignment.schemas import DayRow
from bond_spread.reporting.headline import SERIES_COLORS

SPREAD_LABEL = "Spread (Corporate - Treasury)"


def build_spread_figure(
    rows: Sequence[DayRow],
    title: Optional[str] = "Bond Yield Spreads",
) -> go.Figure:
    """
    Line chart of the aligned dataset: yields (%) on the primary axis,
    spread (bps) on the secondary axis. Null values render as gaps.
    """
    df = rows_to_frame(rows)

    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(
        go.Scatter(
            x=df.index,
            y=df["treasury_yield"],
            name="Treasury",
            mode="lines",
            line={"color": SERIES_COLORS["Treasury"]},
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=df.index,
            y=df["corporate_yield"],
            name="Corporate",
            mode="lines",
            line={"color": SERIES_COLORS["Corporate"]},
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=df.index,
            y=df["spread_yield"],
            name=SPREAD_LABEL,
            mode="lines",
            line={"color": SERIES_COLORS[SPREAD_LABEL], "dash": "dot"},
        ),
        secondary_y=True,
    )

    fig.update_layout(
        title=title,
        template="plotly_white",
        hovermode="x unified",
        legend={"orientation": "h", "y": -0.15},
    )
    fig.update_yaxes(title_text="Yield (%)", secondary_y=False)
    fig.update_yaxes(title_text="Spread (bps)", secondary_y=True)
    return fig
