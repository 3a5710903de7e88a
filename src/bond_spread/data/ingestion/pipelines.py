# src/bond_spread/data/ingestion/pipelines.py
import datetime as _dt
import logging
from typing import List

from bond_spread.alignment.pipeline import align_bond_series
from bond_spread.alignment.schemas import Observation, SeriesSource
from bond_spread.data.ingestion.fred import FredAPIError, FredClient, FredSeriesIngestor, to_observations
from bond_spread.data.schemas.dataset import BondDataset
from bond_spread.data.validation.validators import diagnose_observations

LOGGER = logging.getLogger(__name__)


class BondDataPipeline:
    """
    Fetch a Treasury and a corporate series from FRED and align them.

    The absolute latest point of each series is appended when it falls
    outside the requested window; the range resolver trims it back off
    the chart while the headline can still fall back to it.
    """

    def __init__(
        self,
        client: FredClient,
        treasury_series: str,
        corporate_series: str,
        start: _dt.date,
        end: _dt.date,
        today: _dt.date,
        include_absolute_latest: bool = True,
        disable_date_filter: bool = True,
    ):
        self.client = client
        self.treasury_series = treasury_series
        self.corporate_series = corporate_series
        self.start = start
        self.end = end
        self.today = today
        self.include_absolute_latest = include_absolute_latest
        self.disable_date_filter = disable_date_filter

    def _append_absolute_latest(
        self,
        series_id: str,
        source: SeriesSource,
        observations: List[Observation],
        warnings: List[str],
    ) -> List[Observation]:
        try:
            row = self.client.get_latest_observation(series_id)
        except FredAPIError as e:
            LOGGER.warning("Latest point for %s unavailable: %s", series_id, e)
            warnings.append(f"Latest {source.value} value unavailable: {e}")
            return observations

        latest = to_observations([row], source) if row else []
        if not latest:
            return observations

        point = latest[0]
        if self.start <= point.obs_date <= self.end:
            return observations
        if any(o.obs_date == point.obs_date for o in observations):
            return observations

        LOGGER.info("Appending latest %s point %s", series_id, point.obs_date)
        return sorted(observations + [point], key=lambda o: o.obs_date)

    async def run(self) -> BondDataset:
        LOGGER.info(
            "Starting bond data pipeline: %s vs %s, %s to %s",
            self.treasury_series,
            self.corporate_series,
            self.start,
            self.end,
        )

        treasury = await FredSeriesIngestor(
            self.client, self.treasury_series, SeriesSource.TREASURY, self.start, self.end
        ).run()
        corporate = await FredSeriesIngestor(
            self.client, self.corporate_series, SeriesSource.CORPORATE, self.start, self.end
        ).run()
        LOGGER.info("Fetched %d Treasury / %d corporate points", len(treasury), len(corporate))

        warnings: List[str] = []
        if self.include_absolute_latest:
            treasury = self._append_absolute_latest(
                self.treasury_series, SeriesSource.TREASURY, treasury, warnings
            )
            corporate = self._append_absolute_latest(
                self.corporate_series, SeriesSource.CORPORATE, corporate, warnings
            )

        warnings.extend(diagnose_observations(treasury + corporate).warnings)

        result = align_bond_series(
            treasury,
            corporate,
            self.start,
            self.end,
            disable_date_filter=self.disable_date_filter,
            today=self.today,
            fallback_to_unfiltered=True,
        )
        LOGGER.info("Alignment stage completed (%s).", result.status)

        return BondDataset(
            treasury_series=self.treasury_series,
            corporate_series=self.corporate_series,
            requested_start=self.start,
            requested_end=self.end,
            treasury=treasury,
            corporate=corporate,
            result=result,
            warnings=warnings,
            fetched_at=self.today,
        )
