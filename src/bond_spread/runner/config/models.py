from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from bond_spread.alignment.schemas import SeriesSource
from bond_spread.data.ingestion.fred import FRED_BASE_URL
from bond_spread.data.series_catalog import (
    DEFAULT_CORPORATE_SERIES,
    DEFAULT_TREASURY_SERIES,
    lookup_series,
)


# ============================================================
# FRED access
# ============================================================


class FredSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    api_key: Optional[str] = Field(
        default=None,
        description="FRED API key. Falls back to the FRED_API_KEY env var.",
    )
    base_url: str = FRED_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0)


# ============================================================
# Series selection
# ============================================================


class SeriesSelection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    treasury: str = DEFAULT_TREASURY_SERIES
    corporate: str = DEFAULT_CORPORATE_SERIES

    @field_validator("treasury", "corporate")
    @classmethod
    def _known_series(cls, v: str, info: ValidationInfo) -> str:
        try:
            series = lookup_series(v)
        except KeyError as e:
            raise ValueError(e.args[0]) from e

        expected = (
            SeriesSource.TREASURY if info.field_name == "treasury" else SeriesSource.CORPORATE
        )
        if series.source != expected:
            raise ValueError(
                f"{series.series_id} is a {series.source.value} series, "
                f"expected a {expected.value} series"
            )
        return series.series_id


# ============================================================
# Date window
# ============================================================


class DateWindow(BaseModel):
    """
    Requested window. Bounds are ISO strings; missing bounds default to
    the last ``lookback_days`` ending today.
    """

    model_config = ConfigDict(extra="forbid")

    start: Optional[str] = None
    end: Optional[str] = None
    lookback_days: int = Field(default=365, ge=1)
    disable_date_filter: bool = True
    include_absolute_latest: bool = True


# ============================================================
# Save Settings
# ============================================================


class SaveSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: Optional[str] = None
    save_rows_csv: bool = True
    save_html_report: bool = True


# ============================================================
# Top-level config
# ============================================================


class SpreadConfig(BaseModel):
    """
    Global configuration for a spread run.
    """

    model_config = ConfigDict(extra="allow")

    name: str = "bond_spread"

    fred: FredSettings = Field(default_factory=FredSettings)
    series: SeriesSelection = Field(default_factory=SeriesSelection)
    window: DateWindow = Field(default_factory=DateWindow)
    save: SaveSettings = Field(default_factory=SaveSettings)
