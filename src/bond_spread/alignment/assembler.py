# src/bond_spread/alignment/assembler.py
from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from bond_spread.alignment.schemas import DayRow
from bond_spread.alignment.spread import spread_bps

ROW_COLUMNS = ["treasury_yield", "corporate_yield", "spread_yield"]


def assemble(
    axis: Sequence[_dt.date],
    treasury_filled: Mapping[_dt.date, Optional[float]],
    corporate_filled: Mapping[_dt.date, Optional[float]],
) -> List[DayRow]:
    """
    Zip the business-day axis with both filled series.

    One row per axis day; the spread is computed from same-day values and
    is None unless both legs are present.
    """
    rows = []
    for day in axis:
        treasury = treasury_filled.get(day)
        corporate = corporate_filled.get(day)
        rows.append(
            DayRow(
                date=day,
                treasury_yield=treasury,
                corporate_yield=corporate,
                spread_yield=spread_bps(corporate, treasury),
            )
        )
    return sorted(rows, key=lambda r: r.date)


def rows_to_records(rows: Sequence[DayRow]) -> List[Dict[str, Any]]:
    return [r.model_dump(mode="json") for r in rows]


def rows_to_frame(rows: Sequence[DayRow]) -> pd.DataFrame:
    """DataFrame indexed by DatetimeIndex 'date' with the three value columns."""
    if not rows:
        empty = pd.DataFrame(columns=ROW_COLUMNS, dtype=float)
        empty.index = pd.DatetimeIndex([], name="date")
        return empty

    df = pd.DataFrame([r.model_dump() for r in rows])
    df["date"] = pd.to_datetime(df["date"])
    df = df.set_index("date").sort_index()
    return df[ROW_COLUMNS].astype(float)
