# src/bond_spread/data/series_catalog.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from bond_spread.alignment.schemas import SeriesSource


@dataclass(frozen=True)
class SeriesInfo:
    series_id: str
    name: str
    source: SeriesSource


def _catalog(source: SeriesSource, entries: Dict[str, str]) -> Dict[str, SeriesInfo]:
    return {sid: SeriesInfo(sid, name, source) for sid, name in entries.items()}


_CMT = "Market Yield on U.S. Treasury Securities at {} Constant Maturity, Quoted on an Investment Basis"

TREASURY_SERIES: Dict[str, SeriesInfo] = _catalog(
    SeriesSource.TREASURY,
    {
        "DGS10": _CMT.format("10-Year"),
        "DFII10": _CMT.format("10-Year") + ", Inflation-Indexed",
        "DGS1": _CMT.format("1-Year"),
        "DGS2": _CMT.format("2-Year"),
        "DGS5": _CMT.format("5-Year"),
        "DGS30": _CMT.format("30-Year"),
        "DGS20": _CMT.format("20-Year"),
        "DGS3MO": _CMT.format("3-Month"),
        "DGS1MO": _CMT.format("1-Month"),
        "DFII5": _CMT.format("5-Year") + ", Inflation-Indexed",
        "DGS3": _CMT.format("3-Year"),
        "DGS6MO": _CMT.format("6-Month"),
        "DGS7": _CMT.format("7-Year"),
    },
)

CORPORATE_SERIES: Dict[str, SeriesInfo] = _catalog(
    SeriesSource.CORPORATE,
    {
        "AAA": "Moody's Seasoned Aaa Corporate Bond Yield",
        "DBAA": "Moody's Seasoned Baa Corporate Bond Yield",
        "BAMLC0A0CMEY": "ICE BofA US Corporate Index Effective Yield",
        "BAMLC0A1CAAAEY": "ICE BofA AAA US Corporate Index Effective Yield",
        "BAMLC0A2CAAEY": "ICE BofA AA US Corporate Index Effective Yield",
        "BAMLC0A3CAEY": "ICE BofA Single-A US Corporate Index Effective Yield",
        "BAMLC0A4CBBBEY": "ICE BofA BBB US Corporate Index Effective Yield",
        "BAMLC1A0C13YEY": "ICE BofA 1-3 Year US Corporate Index Effective Yield",
        "BAMLC2A0C35YEY": "ICE BofA 3-5 Year US Corporate Index Effective Yield",
        "BAMLC3A0C57YEY": "ICE BofA 5-7 Year US Corporate Index Effective Yield",
        "BAMLC4A0C710YEY": "ICE BofA 7-10 Year US Corporate Index Effective Yield",
        "BAMLC7A0C1015YEY": "ICE BofA 10-15 Year US Corporate Index Effective Yield",
        "BAMLC8A0C15PYEY": "ICE BofA 15+ Year US Corporate Index Effective Yield",
        "BAMLEMCBPIEY": "ICE BofA Emerging Markets Corporate Plus Index Effective Yield",
        "BAMLC0A0CM": "ICE BofA US Corporate Index Option-Adjusted Spread",
        "BAMLC0A4CBBB": "ICE BofA BBB US Corporate Index Option-Adjusted Spread",
        "HQMCB1YR": "1-Year High Quality Market (HQM) Corporate Bond Spot Rate",
        "HQMCB2YRP": "2-Year High Quality Market (HQM) Corporate Bond Par Yield",
        "HQMCB5YR": "5-Year High Quality Market (HQM) Corporate Bond Spot Rate",
        "HQMCB10YR": "10-Year High Quality Market (HQM) Corporate Bond Spot Rate",
        "HQMCB10YRP": "10-Year High Quality Market (HQM) Corporate Bond Par Yield",
        "HQMCB30YR": "30-Year High Quality Market (HQM) Corporate Bond Spot Rate",
    },
)

DEFAULT_TREASURY_SERIES = "DGS10"
DEFAULT_CORPORATE_SERIES = "AAA"


def lookup_series(series_id: str) -> SeriesInfo:
    """Find a series in either catalogue. Raises KeyError for unknown ids."""
    key = series_id.strip().upper()
    if key in TREASURY_SERIES:
        return TREASURY_SERIES[key]
    if key in CORPORATE_SERIES:
        return CORPORATE_SERIES[key]
    raise KeyError(f"Unknown FRED series: {series_id}")
