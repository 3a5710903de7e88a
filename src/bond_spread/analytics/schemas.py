# src/bond_spread/analytics/schemas.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ColumnStats(BaseModel):
    """
    Descriptive statistics of one aligned column (non-null values only).
    """

    count: int = Field(0, ge=0)
    mean: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    std: Optional[float] = Field(None, description="Sample std (ddof=1).")
    first: Optional[float] = None
    last: Optional[float] = None
    change: Optional[float] = Field(None, description="last - first")


class SpreadSummaryStats(BaseModel):
    n_days: int = 0
    treasury: ColumnStats = Field(default_factory=ColumnStats)
    corporate: ColumnStats = Field(default_factory=ColumnStats)
    spread: ColumnStats = Field(default_factory=ColumnStats)
    spread_zscore: Optional[float] = Field(
        None, description="(last spread - mean) / std over the window."
    )
