# tests/alignment/test_alignment_pipeline.py
from __future__ import annotations

from datetime import date

import pytest

from bond_spread.alignment.pipeline import INSUFFICIENT_DATA_MESSAGE, align_bond_series, coerce_observations
from bond_spread.alignment.schemas import Observation, SeriesSource

TODAY = date(2024, 3, 15)


def rec(d, y):
    return {"date": d, "yield": y}


def row_for(result, day):
    return next(r for r in result.rows if r.date == day)


def test_corporate_gap_forward_filled_into_spread():
    treasury = [rec("2023-01-02", 3.5), rec("2023-01-03", 3.6), rec("2023-01-04", 3.7)]
    corporate = [rec("2023-01-02", 4.5), rec("2023-01-04", 4.7)]

    result = align_bond_series(treasury, corporate, disable_date_filter=True, today=TODAY)

    assert result.status == "ok"
    assert result.selected_range.start == date(2023, 1, 2)
    assert result.selected_range.end == date(2023, 1, 4)
    row = row_for(result, date(2023, 1, 3))
    assert row.treasury_yield == 3.6
    assert row.corporate_yield == 4.5
    assert row.spread_yield == pytest.approx(90.0, abs=1e-9)


def test_weekend_days_are_not_rows():
    treasury = [rec("2023-01-05", 3.5)]
    result = align_bond_series(treasury, [], "2023-01-06", "2023-01-09", today=TODAY)

    assert [r.date for r in result.rows] == [date(2023, 1, 6), date(2023, 1, 9)]


def test_negative_corporate_yield_excluded():
    treasury = [rec(d, 3.5) for d in ("2023-01-02", "2023-01-03", "2023-01-04", "2023-01-05")]
    corporate = [rec("2023-01-02", -1), rec("2023-01-04", 4.6)]

    result = align_bond_series(treasury, corporate, "2023-01-02", "2023-01-05", today=TODAY)

    corp = [r.corporate_yield for r in result.rows]
    assert corp == [None, None, 4.6, 4.6]
    assert result.rows[0].spread_yield is None
    assert result.latest.corporate_date == date(2023, 1, 4)


def test_stale_latest_treasury_point_trimmed_from_range():
    treasury = [
        rec("2023-05-30", 3.7),
        rec("2023-05-31", 3.6),
        rec("2023-06-01", 3.6),
        rec("2023-06-25", 3.8),
    ]
    corporate = [rec("2023-05-30", 4.6), rec("2023-06-01", 4.7)]

    result = align_bond_series(treasury, corporate, disable_date_filter=True, today=TODAY)

    assert result.selected_range.end == date(2023, 6, 1)
    assert result.rows[-1].date == date(2023, 6, 1)
    assert result.rows[-1].treasury_yield == 3.6
    # the trimmed point is out of range and never leaks into the rows
    assert all(r.treasury_yield != 3.8 for r in result.rows)


def test_empty_treasury_uses_corporate_bounds():
    corporate = [rec("2023-01-02", 4.5), rec("2023-01-06", 4.6)]

    result = align_bond_series([], corporate, disable_date_filter=True, today=TODAY)

    assert result.selected_range.start == date(2023, 1, 2)
    assert result.selected_range.end == date(2023, 1, 6)
    assert len(result.rows) == 5
    assert all(r.treasury_yield is None for r in result.rows)
    assert all(r.spread_yield is None for r in result.rows)
    assert result.latest.treasury_yield is None
    assert result.latest.corporate_yield == 4.6


def test_user_window_seeded_from_prior_observations():
    treasury = [rec("2022-12-30", 3.9), rec("2023-01-04", 3.7)]
    corporate = [rec("2022-12-30", 4.8)]

    result = align_bond_series(treasury, corporate, "2023-01-02", "2023-01-04", today=TODAY)

    first = result.rows[0]
    assert first.date == date(2023, 1, 2)
    assert first.treasury_yield == 3.9
    assert first.corporate_yield == 4.8
    assert first.spread_yield == pytest.approx(90.0, abs=1e-9)

    # headline only looks at in-range observations
    assert result.latest.treasury_yield == 3.7
    assert result.latest.corporate_yield is None
    assert result.latest.spread_yield is None
    assert result.latest.spread_date == date(2023, 1, 4)


def test_spread_matches_legs_on_every_row():
    treasury = [rec("2023-02-01", 3.4), rec("2023-02-08", 3.6), rec("2023-02-15", 3.8)]
    corporate = [rec("2023-02-01", 4.4), rec("2023-02-13", 4.9)]

    result = align_bond_series(treasury, corporate, disable_date_filter=True, today=TODAY)

    for r in result.rows:
        if r.treasury_yield is None or r.corporate_yield is None:
            assert r.spread_yield is None
        else:
            assert r.spread_yield == pytest.approx(
                (r.corporate_yield - r.treasury_yield) * 100, abs=1e-9
            )


def test_rows_are_strictly_increasing_weekdays():
    treasury = [rec("2023-03-01", 3.9), rec("2023-03-06", 3.7), rec("2023-03-13", 3.5)]
    result = align_bond_series(treasury, [], disable_date_filter=True, today=TODAY)

    dates = [r.date for r in result.rows]
    assert dates == sorted(set(dates))
    assert all(d.weekday() < 5 for d in dates)
    assert dates[0] == date(2023, 3, 1)


def test_same_inputs_give_identical_output():
    treasury = [rec("2023-01-02", 3.5), rec("2023-01-05", 3.6)]
    corporate = [rec("2023-01-03", 4.5)]

    a = align_bond_series(treasury, corporate, "2023-01-02", "2023-01-06", today=TODAY)
    b = align_bond_series(treasury, corporate, "2023-01-02", "2023-01-06", today=TODAY)

    assert a.model_dump_json() == b.model_dump_json()


def test_no_data_and_no_range_is_insufficient():
    result = align_bond_series([], [], disable_date_filter=True, today=TODAY)

    assert result.status == "insufficient_data"
    assert not result.has_data
    assert result.message == INSUFFICIENT_DATA_MESSAGE
    assert result.rows == []
    assert result.selected_range is None


def test_only_invalid_values_is_insufficient():
    result = align_bond_series(
        [rec("2023-01-02", None)],
        [rec("2023-01-02", 0.0)],
        disable_date_filter=True,
        today=TODAY,
    )

    assert result.status == "insufficient_data"


def test_user_range_without_data_yields_null_rows():
    result = align_bond_series([], [], "2023-01-02", "2023-01-03", today=TODAY)

    assert result.status == "ok"
    assert len(result.rows) == 2
    assert all(r.treasury_yield is None and r.corporate_yield is None for r in result.rows)
    assert result.latest.spread_date == date(2023, 1, 3)


def test_to_records_is_chart_ready():
    result = align_bond_series(
        [rec("2023-01-02", 3.5)], [rec("2023-01-02", 4.0)], disable_date_filter=True, today=TODAY
    )

    assert result.to_records()[0]["date"] == "2023-01-02"


def test_unparseable_records_are_dropped():
    records = [
        rec("not-a-date", 3.5),
        rec("2023-02-30", 3.6),
        rec("2023-01-02", "3.5"),
        rec("2023-01-03", "."),
    ]

    obs = coerce_observations(records, SeriesSource.TREASURY)

    assert [o.obs_date for o in obs] == [date(2023, 1, 2), date(2023, 1, 3)]
    assert obs[0].yield_pct == 3.5
    assert obs[1].yield_pct is None
    assert all(o.source == SeriesSource.TREASURY for o in obs)


def test_source_is_taken_from_the_argument():
    obs = coerce_observations(
        [{"date": "2023-01-02", "yield": 4.0, "source": "Treasury"}], SeriesSource.CORPORATE
    )
    assert obs[0].source == SeriesSource.CORPORATE


def test_observation_instances_are_retagged_to_their_series():
    mislabeled = Observation(obs_date="2023-01-02", yield_pct=-1.0, source=SeriesSource.TREASURY)

    obs = coerce_observations([mislabeled], SeriesSource.CORPORATE)
    assert obs[0].source == SeriesSource.CORPORATE
    assert obs[0].yield_pct == -1.0

    result = align_bond_series([], [mislabeled], "2023-01-02", "2023-01-03", today=TODAY)

    assert [r.corporate_yield for r in result.rows] == [None, None]
    assert result.latest.corporate_yield is None


def test_corporate_tagged_instance_in_treasury_input_uses_treasury_rule():
    negative = Observation(obs_date="2023-01-02", yield_pct=-0.1, source=SeriesSource.CORPORATE)

    result = align_bond_series([negative], [], "2023-01-02", "2023-01-02", today=TODAY)

    assert result.rows[0].treasury_yield == -0.1
    assert result.latest.treasury_yield == -0.1


def test_boolean_yield_is_treated_as_missing():
    obs = coerce_observations([rec("2023-01-02", True)], SeriesSource.TREASURY)
    assert obs[0].yield_pct is None

    result = align_bond_series(
        [rec("2023-01-02", True)], [], "2023-01-02", "2023-01-02", today=TODAY
    )
    assert result.rows[0].treasury_yield is None
