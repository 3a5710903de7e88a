# tests/alignment/test_forward_fill.py
from __future__ import annotations

from datetime import date

from bond_spread.alignment.calendar import business_days
from bond_spread.alignment.forward_fill import fill_series
from bond_spread.alignment.schemas import Observation, SeriesSource


def tsy(d, y):
    return Observation(obs_date=d, yield_pct=y, source=SeriesSource.TREASURY)


def corp(d, y):
    return Observation(obs_date=d, yield_pct=y, source=SeriesSource.CORPORATE)


def test_gap_is_forward_filled():
    axis = business_days("2023-01-02", "2023-01-04")
    filled = fill_series([corp("2023-01-02", 4.5), corp("2023-01-04", 4.7)], axis)

    assert filled == {
        date(2023, 1, 2): 4.5,
        date(2023, 1, 3): 4.5,
        date(2023, 1, 4): 4.7,
    }


def test_lookback_fills_start_of_window():
    axis = business_days("2023-01-02", "2023-01-04")
    filled = fill_series([tsy("2022-12-29", 3.8), tsy("2022-12-30", 3.9)], axis)

    assert list(filled.values()) == [3.9, 3.9, 3.9]


def test_days_before_first_observation_have_no_value():
    axis = business_days("2023-01-02", "2023-01-06")
    filled = fill_series([tsy("2023-01-04", 3.7)], axis)

    assert filled[date(2023, 1, 2)] is None
    assert filled[date(2023, 1, 3)] is None
    assert filled[date(2023, 1, 4)] == 3.7
    assert filled[date(2023, 1, 6)] == 3.7


def test_negative_corporate_value_is_treated_as_missing():
    axis = business_days("2023-01-02", "2023-01-05")
    filled = fill_series([corp("2023-01-02", -1.0), corp("2023-01-04", 4.6)], axis)

    assert [filled[d] for d in axis] == [None, None, 4.6, 4.6]


def test_zero_corporate_value_does_not_overwrite_last_known():
    axis = business_days("2023-01-02", "2023-01-04")
    filled = fill_series([corp("2023-01-02", 4.5), corp("2023-01-03", 0.0)], axis)

    assert [filled[d] for d in axis] == [4.5, 4.5, 4.5]


def test_documented_asymmetry_treasury_keeps_zero_and_negative_yields():
    # Treasury is only required to be numeric; sign is not checked.
    axis = business_days("2023-01-02", "2023-01-03")
    filled = fill_series([tsy("2023-01-02", 0.0), tsy("2023-01-03", -0.25)], axis)

    assert [filled[d] for d in axis] == [0.0, -0.25]


def test_null_and_nan_treasury_values_are_skipped():
    axis = business_days("2023-01-02", "2023-01-04")
    filled = fill_series(
        [tsy("2023-01-02", 3.5), tsy("2023-01-03", None), tsy("2023-01-04", float("nan"))],
        axis,
    )

    assert [filled[d] for d in axis] == [3.5, 3.5, 3.5]


def test_observations_after_lookback_end_are_ignored():
    axis = business_days("2023-01-02", "2023-01-04")
    filled = fill_series([tsy("2023-01-03", 3.6)], axis, lookback_end=date(2023, 1, 2))

    assert all(v is None for v in filled.values())


def test_weekend_stamped_observation_is_carried_forward():
    # monthly series are stamped on the 1st, which can be a Sunday
    axis = business_days("2023-01-02", "2023-01-03")
    filled = fill_series([corp("2023-01-01", 4.02)], axis)

    assert list(filled.values()) == [4.02, 4.02]


def test_duplicate_dates_first_occurrence_wins():
    axis = business_days("2023-01-02", "2023-01-02")
    filled = fill_series([tsy("2023-01-02", 3.5), tsy("2023-01-02", 3.9)], axis)

    assert filled[date(2023, 1, 2)] == 3.5


def test_unsorted_input():
    axis = business_days("2023-01-02", "2023-01-05")
    filled = fill_series([tsy("2023-01-04", 3.7), tsy("2023-01-02", 3.5)], axis)

    assert [filled[d] for d in axis] == [3.5, 3.5, 3.7, 3.7]


def test_empty_axis():
    assert fill_series([tsy("2023-01-02", 3.5)], []) == {}


def test_completeness_after_first_observation():
    axis = business_days("2023-01-02", "2023-03-31")
    observations = [
        tsy("2023-01-10", 3.5),
        tsy("2023-02-14", 3.7),
        tsy("2023-03-01", 3.9),
    ]
    filled = fill_series(observations, axis)

    assert list(filled.keys()) == axis
    for d in axis:
        if d >= date(2023, 1, 10):
            assert filled[d] is not None
        else:
            assert filled[d] is None
