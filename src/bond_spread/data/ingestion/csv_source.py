# src/bond_spread/data/ingestion/csv_source.py
import asyncio
import logging
from typing import List

import polars as pl

from bond_spread.alignment.schemas import Observation, SeriesSource
from bond_spread.data.ingestion.base import BaseIngestor
from bond_spread.data.validation.validators import ValidationError

LOGGER = logging.getLogger(__name__)

VALUE_COLUMNS = ("value", "yield", "yield_pct")


class CsvObservationIngestor(BaseIngestor):
    """
    Async ingestor for a saved series CSV with a ``date`` column and one of
    ``value`` / ``yield`` / ``yield_pct``. Non-numeric values (FRED '.')
    become null.
    """

    def __init__(self, source_path: str, source: SeriesSource):
        self.source_path = source_path
        self.source = source

    async def fetch_data(self) -> pl.DataFrame:
        df = pl.read_csv(self.source_path, infer_schema_length=0)  # all Utf8
        await asyncio.sleep(0)  # async placeholder
        return df

    async def transform(self, raw_df: pl.DataFrame) -> List[Observation]:
        cols = {c.lower(): c for c in raw_df.columns}
        if "date" not in cols:
            raise ValidationError(f"{self.source_path}: missing 'date' column")
        value_col = next((cols[c] for c in VALUE_COLUMNS if c in cols), None)
        if value_col is None:
            raise ValidationError(
                f"{self.source_path}: expected one of {', '.join(VALUE_COLUMNS)}"
            )

        df = raw_df.select(
            pl.col(cols["date"]).str.strip_chars().alias("date"),
            pl.col(value_col).cast(pl.Float64, strict=False).alias("yield"),
        )

        records = []
        for r in df.to_dicts():
            try:
                records.append(
                    Observation(obs_date=r["date"], yield_pct=r["yield"], source=self.source)
                )
            except ValueError:
                LOGGER.warning("Skipping row with bad date in %s: %s", self.source_path, r)
        return records
