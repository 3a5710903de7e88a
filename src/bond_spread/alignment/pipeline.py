# src/bond_spread/alignment/pipeline.py
from __future__ import annotations

import datetime as _dt
import logging
from typing import Any, Iterable, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from bond_spread.alignment.assembler import assemble
from bond_spread.alignment.calendar import business_days, try_parse_calendar_date
from bond_spread.alignment.forward_fill import fill_series
from bond_spread.alignment.range_resolver import resolve_range
from bond_spread.alignment.schemas import AlignmentResult, Observation, SeriesSource
from bond_spread.alignment.spread import select_latest_values
from bond_spread.data.validation.validators import filter_valid_observations

LOGGER = logging.getLogger(__name__)

ObservationLike = Union[Observation, Mapping[str, Any]]

INSUFFICIENT_DATA_MESSAGE = "No Treasury or corporate data available for the selected range."


def coerce_observations(
    records: Iterable[ObservationLike],
    source: SeriesSource,
) -> List[Observation]:
    """
    Build Observations for one series from model instances or plain dicts
    ``{date, yield[, source]}``. Every record is tagged with ``source`` so the
    series' own validity rule applies. Records that cannot be parsed are
    dropped.
    """
    out: List[Observation] = []
    dropped = 0
    for rec in records:
        if isinstance(rec, Observation):
            if rec.source != source:
                rec = rec.model_copy(update={"source": source})
            out.append(rec)
            continue
        try:
            out.append(Observation.model_validate({**rec, "source": source}))
        except (PydanticValidationError, TypeError):
            dropped += 1
    if dropped:
        LOGGER.warning("Dropped %d unparseable %s records", dropped, source.value)
    return out


def align_bond_series(
    treasury: Iterable[ObservationLike],
    corporate: Iterable[ObservationLike],
    start: Any = None,
    end: Any = None,
    disable_date_filter: bool = False,
    *,
    today: _dt.date,
    fallback_to_unfiltered: bool = False,
) -> AlignmentResult:
    """
    Full alignment run:

        Range Resolver -> Calendar -> Forward-Fill x2 -> Assembler
                       +-> Latest-Value Selector

    Pure function of its arguments; re-run it on every input change.
    """
    treasury_obs = coerce_observations(treasury, SeriesSource.TREASURY)
    corporate_obs = coerce_observations(corporate, SeriesSource.CORPORATE)

    user_range_given = (
        not disable_date_filter
        and try_parse_calendar_date(start) is not None
        and try_parse_calendar_date(end) is not None
    )
    if (
        not filter_valid_observations(treasury_obs)
        and not filter_valid_observations(corporate_obs)
        and not user_range_given
    ):
        LOGGER.info("Alignment skipped: no usable observations")
        return AlignmentResult(
            status="insufficient_data", message=INSUFFICIENT_DATA_MESSAGE
        )

    selected = resolve_range(
        treasury_obs,
        corporate_obs,
        start,
        end,
        disable_date_filter,
        today=today,
    )
    axis = business_days(selected.start, selected.end)

    treasury_filled = fill_series(treasury_obs, axis, selected.end)
    corporate_filled = fill_series(corporate_obs, axis, selected.end)
    rows = assemble(axis, treasury_filled, corporate_filled)

    latest = select_latest_values(
        treasury_obs,
        corporate_obs,
        selected,
        fallback_to_unfiltered=fallback_to_unfiltered,
    )

    LOGGER.info(
        "Aligned %d business days (%s to %s)", len(rows), selected.start, selected.end
    )
    return AlignmentResult(selected_range=selected, rows=rows, latest=latest)
