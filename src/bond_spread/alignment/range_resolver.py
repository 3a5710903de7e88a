# src/bond_spread/alignment/range_resolver.py
from __future__ import annotations

import datetime as _dt
import logging
from typing import Any, List, Optional, Sequence

from bond_spread.alignment.calendar import try_parse_calendar_date
from bond_spread.alignment.schemas import Observation, SelectedRange

LOGGER = logging.getLogger(__name__)

# A last point this many days past its predecessor is treated as an
# "absolute latest" snapshot appended outside the requested window.
SNAPSHOT_GAP_DAYS = 7
# Smaller trailing gap that still counts when the gap before it is large.
NEAR_SNAPSHOT_GAP_DAYS = 3


def _sorted_dates(observations: Sequence[Observation]) -> List[_dt.date]:
    return sorted({o.obs_date for o in observations})


def trim_snapshot_outliers(dates: Sequence[_dt.date]) -> Optional[_dt.date]:
    """
    Pick the effective end date of a sorted, de-duplicated date list.

        gap1 = last - 2nd-last, gap2 = 2nd-last - 3rd-last

        gap1 > 7 and gap2 > 7  -> 3rd-last
        gap1 > 7               -> 2nd-last
        gap1 > 3 and gap2 > 7  -> 3rd-last
        otherwise              -> last
    """
    if not dates:
        return None
    if len(dates) == 1:
        return dates[0]

    last, second = dates[-1], dates[-2]
    gap1 = (last - second).days
    gap2 = (second - dates[-3]).days if len(dates) >= 3 else None

    if gap1 > SNAPSHOT_GAP_DAYS:
        if gap2 is not None and gap2 > SNAPSHOT_GAP_DAYS:
            LOGGER.debug("Two trailing snapshot gaps; end trimmed to %s", dates[-3])
            return dates[-3]
        LOGGER.debug("Trailing snapshot gap of %d days; end trimmed to %s", gap1, second)
        return second

    if gap2 is not None and gap1 > NEAR_SNAPSHOT_GAP_DAYS and gap2 > SNAPSHOT_GAP_DAYS:
        LOGGER.debug("Trailing gaps %d/%d days; end trimmed to %s", gap1, gap2, dates[-3])
        return dates[-3]

    return last


def _range_from_data(
    treasury: Sequence[Observation],
    corporate: Sequence[Observation],
    today: _dt.date,
) -> SelectedRange:
    treasury_dates = _sorted_dates(treasury)
    if treasury_dates:
        end = trim_snapshot_outliers(treasury_dates)
        return SelectedRange(start=treasury_dates[0], end=end)

    all_dates = _sorted_dates(list(treasury) + list(corporate))
    if all_dates:
        LOGGER.debug(
            "No Treasury data, using combined range %s to %s",
            all_dates[0],
            all_dates[-1],
        )
        return SelectedRange(start=all_dates[0], end=all_dates[-1])

    return SelectedRange(start=today, end=today)


def resolve_range(
    treasury: Sequence[Observation],
    corporate: Sequence[Observation],
    start: Any = None,
    end: Any = None,
    disable_date_filter: bool = False,
    *,
    today: _dt.date,
) -> SelectedRange:
    """
    Decide the [start, end] window used for alignment. Never raises.

    Resolution order:
        1. date filter disabled -> derive from data (Treasury bounds with
           snapshot trimming, else both series, else today)
        2. both user bounds parse -> use them
        3. per bound fallback -> earliest / trimmed latest Treasury date,
           else today
        4. inverted bounds are swapped by SelectedRange
    """
    if disable_date_filter:
        selected = _range_from_data(treasury, corporate, today)
    else:
        start_day = try_parse_calendar_date(start)
        end_day = try_parse_calendar_date(end)

        if start_day is None or end_day is None:
            treasury_dates = _sorted_dates(treasury)
            if start_day is None:
                start_day = treasury_dates[0] if treasury_dates else today
            if end_day is None:
                end_day = trim_snapshot_outliers(treasury_dates) if treasury_dates else today

        selected = SelectedRange(start=start_day, end=end_day)

    LOGGER.debug("Selected range: %s to %s", selected.start, selected.end)
    return selected
