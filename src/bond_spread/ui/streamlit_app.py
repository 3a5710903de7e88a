from __future__ import annotations

import asyncio
import datetime as _dt
from typing import Tuple

import pandas as pd
import streamlit as st

from bond_spread.alignment.assembler import rows_to_frame
from bond_spread.analytics.stats import compute_summary_stats
from bond_spread.data.ingestion.fred import ConfigurationError, FredAPIError, FredClient
from bond_spread.data.ingestion.pipelines import BondDataPipeline
from bond_spread.data.schemas.dataset import BondDataset
from bond_spread.data.series_catalog import (
    CORPORATE_SERIES,
    DEFAULT_CORPORATE_SERIES,
    DEFAULT_TREASURY_SERIES,
    TREASURY_SERIES,
)
from bond_spread.data.validation.validators import validate_date_window
from bond_spread.reporting.charts import build_spread_figure
from bond_spread.reporting.headline import headline_cards
from bond_spread.runner.config.loader import default_window, resolve_api_key
from bond_spread.runner.config.models import SpreadConfig

SPREAD_EXPLAINER = """
The spread between corporate and Treasury yields is the credit risk premium
investors demand to hold corporate bonds over 'risk-free' government bonds.
A widening spread typically signals rising concern about corporate
creditworthiness; a narrowing spread suggests improving confidence.
"""


# ============================================================
# Sidebar — series + date window
# ============================================================


def sidebar_controls(today: _dt.date) -> Tuple[str, str, _dt.date, _dt.date]:
    st.sidebar.header("⚙️ Series & Window")

    treasury_ids = list(TREASURY_SERIES)
    corporate_ids = list(CORPORATE_SERIES)

    treasury = st.sidebar.selectbox(
        "Treasury Series",
        options=treasury_ids,
        index=treasury_ids.index(DEFAULT_TREASURY_SERIES),
        format_func=lambda sid: f"{sid} — {TREASURY_SERIES[sid].name}",
    )
    corporate = st.sidebar.selectbox(
        "Corporate Series",
        options=corporate_ids,
        index=corporate_ids.index(DEFAULT_CORPORATE_SERIES),
        format_func=lambda sid: f"{sid} — {CORPORATE_SERIES[sid].name}",
    )

    default_start, default_end = default_window(today)
    start = st.sidebar.date_input("Start Date", value=default_start, max_value=today)
    end = st.sidebar.date_input("End Date", value=default_end, max_value=today)
    return treasury, corporate, start, end


@st.cache_data(ttl=3600, show_spinner=False)
def load_dataset(
    api_key: str,
    treasury: str,
    corporate: str,
    start: _dt.date,
    end: _dt.date,
    today: _dt.date,
) -> BondDataset:
    pipeline = BondDataPipeline(
        FredClient(api_key),
        treasury_series=treasury,
        corporate_series=corporate,
        start=start,
        end=end,
        today=today,
    )
    return asyncio.run(pipeline.run())


# ============================================================
# Main dashboard
# ============================================================


def main() -> None:
    st.set_page_config(page_title="Bond Yield Spreads", layout="wide")
    st.title("📈 Bond Yield Spreads")
    st.markdown("Comparing Treasury and Corporate Yields")
    with st.expander("What is the spread?"):
        st.markdown(SPREAD_EXPLAINER)

    today = _dt.date.today()
    treasury, corporate, start, end = sidebar_controls(today)

    check = validate_date_window(start, end, today)
    if not check.ok:
        for err in check.errors:
            st.error(err)
        return

    try:
        api_key = resolve_api_key(SpreadConfig())
    except ConfigurationError as e:
        st.error(str(e))
        return

    try:
        with st.spinner("Fetching FRED data…"):
            dataset = load_dataset(api_key, treasury, corporate, start, end, today)
    except FredAPIError as e:
        st.error(f"Error: {e}")
        return

    for w in dataset.warnings:
        st.warning(w)

    result = dataset.result
    if not result.has_data:
        st.info(result.message)
        return

    # ---------------------
    # Headline values
    # ---------------------
    cols = st.columns(3)
    for col, card in zip(cols, headline_cards(result.latest)):
        col.metric(card["label"], card["value"])
        col.caption(f"as of {card['as_of']}")

    # ---------------------
    # Chart
    # ---------------------
    st.plotly_chart(build_spread_figure(result.rows), use_container_width=True)

    # ---------------------
    # Summary statistics
    # ---------------------
    st.subheader("📊 Summary Statistics")
    stats = compute_summary_stats(result.rows)
    stats_df = pd.DataFrame(
        {
            "Treasury (%)": stats.treasury.model_dump(),
            "Corporate (%)": stats.corporate.model_dump(),
            "Spread (bps)": stats.spread.model_dump(),
        }
    )
    st.dataframe(stats_df, use_container_width=True)
    if stats.spread_zscore is not None:
        st.caption(f"Spread z-score vs window: {stats.spread_zscore:.2f}")

    with st.expander("📝 Aligned rows"):
        st.dataframe(rows_to_frame(result.rows), use_container_width=True)


if __name__ == "__main__":
    main()
