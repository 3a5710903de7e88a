# src/bond_spread/reporting/headline.py
from __future__ import annotations

import datetime as _dt
from typing import Dict, List, Optional

from bond_spread.alignment.schemas import LatestValueSet

NOT_AVAILABLE = "N/A"

SERIES_COLORS: Dict[str, str] = {
    "Treasury": "#4f46e5",
    "Corporate": "#16a34a",
    "Spread (Corporate - Treasury)": "#dc2626",
}


def format_yield(value: Optional[float]) -> str:
    return NOT_AVAILABLE if value is None else f"{value:.2f}%"


def format_spread(value: Optional[float]) -> str:
    return NOT_AVAILABLE if value is None else f"{value:.0f} bps"


def format_display_date(day: Optional[_dt.date]) -> str:
    """'Jan 3, 2023' style, without platform-specific strftime flags."""
    if day is None:
        return NOT_AVAILABLE
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def headline_cards(latest: LatestValueSet) -> List[Dict[str, str]]:
    """Three headline cards (label, value, as-of date) for the dashboard."""
    return [
        {
            "label": "Treasury Yield",
            "value": format_yield(latest.treasury_yield),
            "as_of": format_display_date(latest.treasury_date),
            "color": SERIES_COLORS["Treasury"],
        },
        {
            "label": "Corporate Yield",
            "value": format_yield(latest.corporate_yield),
            "as_of": format_display_date(latest.corporate_date),
            "color": SERIES_COLORS["Corporate"],
        },
        {
            "label": "Spread",
            "value": format_spread(latest.spread_yield),
            "as_of": format_display_date(latest.spread_date),
            "color": SERIES_COLORS["Spread (Corporate - Treasury)"],
        },
    ]
