# src/bond_spread/analytics/stats.py
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from bond_spread.alignment.schemas import DayRow
from bond_spread.analytics.schemas import ColumnStats, SpreadSummaryStats


def column_stats(values: Sequence[Optional[float]]) -> ColumnStats:
    arr = np.asarray([v for v in values if v is not None], dtype=float)
    if arr.size == 0:
        return ColumnStats()

    std = float(np.std(arr, ddof=1)) if arr.size > 1 else None
    return ColumnStats(
        count=int(arr.size),
        mean=float(arr.mean()),
        min=float(arr.min()),
        max=float(arr.max()),
        std=std,
        first=float(arr[0]),
        last=float(arr[-1]),
        change=float(arr[-1] - arr[0]),
    )


def compute_summary_stats(rows: Sequence[DayRow]) -> SpreadSummaryStats:
    """
    Summary statistics over the aligned (forward-filled) rows shown on the chart.
    """
    spread = column_stats([r.spread_yield for r in rows])

    zscore = None
    if spread.std and spread.last is not None and spread.mean is not None:
        zscore = (spread.last - spread.mean) / spread.std

    return SpreadSummaryStats(
        n_days=len(rows),
        treasury=column_stats([r.treasury_yield for r in rows]),
        corporate=column_stats([r.corporate_yield for r in rows]),
        spread=spread,
        spread_zscore=zscore,
    )
