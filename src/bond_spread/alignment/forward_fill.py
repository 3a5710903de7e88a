# src/bond_spread/alignment/forward_fill.py
from __future__ import annotations

import datetime as _dt
from typing import Dict, List, Optional, Sequence

from bond_spread.alignment.schemas import Observation
from bond_spread.data.validation.validators import is_valid_observation

AlignedSeries = Dict[_dt.date, Optional[float]]


def _first_value_per_day(
    observations: Sequence[Observation],
    lookback_end: _dt.date,
) -> List[tuple[_dt.date, float]]:
    """Valid observations up to lookback_end, one per day (first wins), sorted."""
    by_day: Dict[_dt.date, float] = {}
    for obs in observations:
        if obs.obs_date > lookback_end or not is_valid_observation(obs):
            continue
        by_day.setdefault(obs.obs_date, float(obs.yield_pct))
    return sorted(by_day.items())


def fill_series(
    observations: Sequence[Observation],
    axis: Sequence[_dt.date],
    lookback_end: Optional[_dt.date] = None,
) -> AlignedSeries:
    """
    Map every axis day to its effective yield, carrying the last known
    value forward across gaps.

    Observations dated before the first axis day seed the carried value, so
    the start of a user-selected window is filled from prior data. Values
    dated between axis days (e.g. a monthly print stamped on a weekend) are
    carried forward as well. A day is None only if no valid observation
    exists on or before it.
    """
    if not axis:
        return {}

    cutoff = lookback_end if lookback_end is not None else axis[-1]
    points = _first_value_per_day(observations, cutoff)

    filled: AlignedSeries = {}
    last_known: Optional[float] = None
    i = 0
    for day in axis:
        while i < len(points) and points[i][0] <= day:
            last_known = points[i][1]
            i += 1
        filled[day] = last_known
    return filled
