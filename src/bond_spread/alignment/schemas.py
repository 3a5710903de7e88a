# src/bond_spread/alignment/schemas.py
from __future__ import annotations

import datetime as _dt
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bond_spread.alignment.calendar import parse_calendar_date


class SeriesSource(str, Enum):
    TREASURY = "Treasury"
    CORPORATE = "Corporate"


class Observation(BaseModel):
    """
    Single (date, yield) sample for one instrument series.

    - date: calendar day of the observation
    - yield: yield in percent (e.g. 4.25 means 4.25%), None when the feed
      reported no data
    - source: which series the sample belongs to
    """

    obs_date: _dt.date = Field(..., alias="date", description="Observation date")
    yield_pct: Optional[float] = Field(
        None, alias="yield", description="Yield percentage (e.g., 4.25)"
    )
    source: SeriesSource

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("obs_date", mode="before")
    @classmethod
    def _normalize_date(cls, v: Any) -> _dt.date:
        return parse_calendar_date(v)

    @field_validator("yield_pct", mode="before")
    @classmethod
    def _sentinel_to_none(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return None
        # FRED reports missing values as "." or "ND"
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                return None
        return v


class SelectedRange(BaseModel):
    """
    Window used to build the business-day axis.

    Inverted bounds are swapped on construction, so start <= end always holds.
    """

    start: _dt.date
    end: _dt.date

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _order_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            start = data.get("start")
            end = data.get("end")
            if start is not None and end is not None:
                start = parse_calendar_date(start)
                end = parse_calendar_date(end)
                if end < start:
                    start, end = end, start
                data = {**data, "start": start, "end": end}
        return data

    def contains(self, day: _dt.date) -> bool:
        return self.start <= day <= self.end

    def clamp(self, day: _dt.date) -> _dt.date:
        if day < self.start:
            return self.start
        if day > self.end:
            return self.end
        return day


class DayRow(BaseModel):
    """One chart row per business day; spread is same-day, in basis points."""

    date: _dt.date
    treasury_yield: Optional[float] = None
    corporate_yield: Optional[float] = None
    spread_yield: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class LatestValueSet(BaseModel):
    """
    Headline values. Treasury and corporate points are picked independently
    and may come from different days; spread_date is the later of the two.
    """

    treasury_yield: Optional[float] = None
    treasury_date: Optional[_dt.date] = None
    corporate_yield: Optional[float] = None
    corporate_date: Optional[_dt.date] = None
    spread_yield: Optional[float] = None
    spread_date: Optional[_dt.date] = None

    model_config = ConfigDict(frozen=True)


class AlignmentResult(BaseModel):
    status: Literal["ok", "insufficient_data"] = "ok"
    message: Optional[str] = None
    selected_range: Optional[SelectedRange] = None
    rows: List[DayRow] = Field(default_factory=list)
    latest: LatestValueSet = Field(default_factory=LatestValueSet)

    @property
    def has_data(self) -> bool:
        return self.status == "ok"

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows as plain dicts with ISO date strings (chart input)."""
        return [row.model_dump(mode="json") for row in self.rows]
