# tests/data/test_csv_ingestion.py
from datetime import date

import polars as pl
import pytest

from bond_spread.alignment.schemas import SeriesSource
from bond_spread.data.ingestion.csv_source import CsvObservationIngestor
from bond_spread.data.validation.validators import ValidationError


@pytest.mark.asyncio
async def test_csv_ingestor_reads_fred_export(tmp_path):
    csv_file = tmp_path / "dgs10.csv"
    csv_file.write_text("DATE,VALUE\n2023-01-02,3.79\n2023-01-03,.\n2023-01-04,3.69\n")

    obs = await CsvObservationIngestor(str(csv_file), SeriesSource.TREASURY).run()

    assert [o.obs_date for o in obs] == [date(2023, 1, 2), date(2023, 1, 3), date(2023, 1, 4)]
    assert obs[0].yield_pct == 3.79
    assert obs[1].yield_pct is None
    assert all(o.source == SeriesSource.TREASURY for o in obs)


@pytest.mark.asyncio
async def test_csv_ingestor_accepts_yield_column_and_skips_bad_dates(tmp_path):
    csv_file = tmp_path / "aaa.csv"
    pl.DataFrame(
        {
            "date": ["2023-01-02", "01/03/2023", "2023-01-04"],
            "yield": ["4.50", "4.55", "4.70"],
        }
    ).write_csv(csv_file)

    obs = await CsvObservationIngestor(str(csv_file), SeriesSource.CORPORATE).run()

    assert [o.obs_date for o in obs] == [date(2023, 1, 2), date(2023, 1, 4)]
    assert [o.yield_pct for o in obs] == [4.5, 4.7]


@pytest.mark.asyncio
async def test_csv_ingestor_requires_value_column(tmp_path):
    csv_file = tmp_path / "bad.csv"
    csv_file.write_text("date,close\n2023-01-02,3.79\n")

    with pytest.raises(ValidationError):
        await CsvObservationIngestor(str(csv_file), SeriesSource.TREASURY).run()


@pytest.mark.asyncio
async def test_csv_ingestor_requires_date_column(tmp_path):
    csv_file = tmp_path / "bad.csv"
    csv_file.write_text("day,value\n2023-01-02,3.79\n")

    with pytest.raises(ValidationError, match="missing 'date' column"):
        await CsvObservationIngestor(str(csv_file), SeriesSource.TREASURY).run()
