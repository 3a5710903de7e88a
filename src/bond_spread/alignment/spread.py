# src/bond_spread/alignment/spread.py
from __future__ import annotations

import datetime as _dt
from typing import Optional, Sequence

from bond_spread.alignment.schemas import LatestValueSet, Observation, SelectedRange
from bond_spread.data.validation.validators import is_valid_observation

BPS_PER_PERCENT = 100.0


def spread_bps(
    corporate_yield: Optional[float],
    treasury_yield: Optional[float],
) -> Optional[float]:
    """
    Credit spread in basis points:

        spread = (corporate - treasury) * 100

    None when either leg is missing.
    """
    if corporate_yield is None or treasury_yield is None:
        return None
    return (float(corporate_yield) - float(treasury_yield)) * BPS_PER_PERCENT


def _latest(observations: Sequence[Observation]) -> Optional[Observation]:
    # max() keeps the first of equal dates, same as the fill rule
    if not observations:
        return None
    return max(observations, key=lambda o: o.obs_date)


def _latest_point(
    observations: Sequence[Observation],
    selected_range: SelectedRange,
    fallback_to_unfiltered: bool,
) -> tuple[Optional[float], Optional[_dt.date]]:
    valid = [o for o in observations if is_valid_observation(o)]
    point = _latest([o for o in valid if selected_range.contains(o.obs_date)])

    if point is None and fallback_to_unfiltered:
        point = _latest(valid)

    if point is None:
        return None, None
    return float(point.yield_pct), selected_range.clamp(point.obs_date)


def select_latest_values(
    treasury: Sequence[Observation],
    corporate: Sequence[Observation],
    selected_range: SelectedRange,
    fallback_to_unfiltered: bool = False,
) -> LatestValueSet:
    """
    Headline values: the most recent actual (not forward-filled) in-range
    observation of each series, and the spread between them.

    The two legs are picked independently, so the spread is not tied to a
    single trading day. With ``fallback_to_unfiltered`` a series with no
    in-range data uses its overall latest point, with the displayed date
    clamped to the window.
    """
    t_yield, t_date = _latest_point(treasury, selected_range, fallback_to_unfiltered)
    c_yield, c_date = _latest_point(corporate, selected_range, fallback_to_unfiltered)

    if t_date is not None and c_date is not None:
        s_date = max(t_date, c_date)
    else:
        s_date = t_date or c_date or selected_range.end

    return LatestValueSet(
        treasury_yield=t_yield,
        treasury_date=t_date,
        corporate_yield=c_yield,
        corporate_date=c_date,
        spread_yield=spread_bps(c_yield, t_yield),
        spread_date=s_date,
    )
