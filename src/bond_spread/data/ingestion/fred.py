# src/bond_spread/data/ingestion/fred.py
from __future__ import annotations

import asyncio
import datetime as _dt
import logging
from typing import Any, Dict, List, Optional

import requests

from bond_spread.alignment.schemas import Observation, SeriesSource
from bond_spread.data.ingestion.base import BaseIngestor

LOGGER = logging.getLogger(__name__)

FRED_BASE_URL = "https://api.stlouisfed.org/fred"


class ConfigurationError(Exception):
    """Raised when required settings (e.g. the FRED API key) are missing."""

    pass


class FredAPIError(Exception):
    """HTTP or payload error returned by the FRED API."""

    pass


def parse_fred_value(raw: Any) -> Optional[float]:
    """FRED encodes missing values as '.', 'ND' or ''; those become None."""
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


class FredClient:
    """
    Thin wrapper around the FRED ``series/observations`` endpoint.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = FRED_BASE_URL,
        timeout: float = 30.0,
    ):
        if not api_key:
            raise ConfigurationError("FRED API key is not configured")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        url = f"{self.base_url}/series/observations"
        query = {"api_key": self.api_key, "file_type": "json", **params}
        LOGGER.info("FRED request: %s", params)

        try:
            resp = requests.get(url, params=query, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            raise FredAPIError(f"FRED request failed: {e}") from e
        except ValueError as e:
            raise FredAPIError(f"FRED returned invalid JSON: {e}") from e

        obs = payload.get("observations") if isinstance(payload, dict) else None
        if obs is None:
            raise FredAPIError(
                f"No observations found in FRED response for {params.get('series_id')}"
            )
        return obs

    def get_observations(
        self,
        series_id: str,
        start: _dt.date,
        end: _dt.date,
    ) -> List[Dict[str, Any]]:
        """Raw ``{date, value}`` rows in ascending date order."""
        return self._request(
            {
                "series_id": series_id,
                "sort_order": "asc",
                "observation_start": start.isoformat(),
                "observation_end": end.isoformat(),
            }
        )

    def get_latest_observation(self, series_id: str) -> Optional[Dict[str, Any]]:
        """Absolute latest row of a series, regardless of any window."""
        rows = self._request({"series_id": series_id, "sort_order": "desc", "limit": 1})
        return rows[0] if rows else None


def to_observations(rows: List[Dict[str, Any]], source: SeriesSource) -> List[Observation]:
    """
    Convert FRED rows to Observations, dropping rows without a numeric value.
    """
    out = []
    for row in rows:
        value = parse_fred_value(row.get("value"))
        if value is None:
            continue
        try:
            out.append(
                Observation(obs_date=row.get("date"), yield_pct=value, source=source)
            )
        except ValueError:
            LOGGER.warning("Skipping FRED row with bad date: %s", row)
    return sorted(out, key=lambda o: o.obs_date)


class FredSeriesIngestor(BaseIngestor):
    """
    Async ingestor for one FRED series over a date window.
    """

    def __init__(
        self,
        client: FredClient,
        series_id: str,
        source: SeriesSource,
        start: _dt.date,
        end: _dt.date,
    ):
        self.client = client
        self.series_id = series_id
        self.source = source
        self.start = start
        self.end = end

    async def fetch_data(self) -> List[Dict[str, Any]]:
        rows = self.client.get_observations(self.series_id, self.start, self.end)
        await asyncio.sleep(0)  # async placeholder
        return rows

    async def transform(self, raw_data: List[Dict[str, Any]]) -> List[Observation]:
        return to_observations(raw_data, self.source)
