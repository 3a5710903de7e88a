"""
Validity rules and data-quality checks for bond yield observations.

Per-series validity (used by the alignment engine):
    - Treasury: yield must be a finite number (zero / negative accepted)
    - Corporate: yield must be a finite number strictly above zero
      (non-positive values are the upstream "no data" sentinel)

Date-window checks (hard errors):
    - Unparseable start / end
    - Bounds outside [min_date, today]
    - Start after end

Diagnostics (soft warnings):
    - Duplicate dates per series
    - Null / non-positive values
    - Trailing snapshot gap at the end of a series
"""

from __future__ import annotations

import datetime as _dt
import math
from collections import Counter
from typing import Any, Iterable, List, Optional, Sequence

from bond_spread.alignment.calendar import try_parse_calendar_date
from bond_spread.alignment.schemas import Observation, SeriesSource

MIN_ALLOWED_DATE = _dt.date(1600, 1, 1)


class ValidationError(Exception):
    """Custom validation exception."""

    pass


class ValidationResult:
    """
    Container for validation results:
    - errors: fatal issues (raise)
    - warnings: soft issues (display but do not stop execution)
    """

    def __init__(self) -> None:
        self.errors: List[str] = []
        self.warnings: List[str] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_if_errors(self) -> None:
        if self.errors:
            raise ValidationError("\n".join(self.errors))


# ============================================================
# Per-series validity predicates
# ============================================================


def _is_finite_number(value: Any) -> bool:
    if value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def is_valid_treasury_observation(obs: Observation) -> bool:
    return _is_finite_number(obs.yield_pct)


def is_valid_corporate_observation(obs: Observation) -> bool:
    return _is_finite_number(obs.yield_pct) and float(obs.yield_pct) > 0.0


def is_valid_observation(obs: Observation) -> bool:
    """Dispatch to the validity rule of the observation's own series."""
    if obs.source == SeriesSource.CORPORATE:
        return is_valid_corporate_observation(obs)
    return is_valid_treasury_observation(obs)


def filter_valid_observations(observations: Iterable[Observation]) -> List[Observation]:
    return [o for o in observations if is_valid_observation(o)]


# ============================================================
# Date window validation
# ============================================================


def validate_date_window(
    start: Any,
    end: Any,
    today: _dt.date,
    min_date: _dt.date = MIN_ALLOWED_DATE,
) -> ValidationResult:
    """
    Validate a user-entered [start, end] window.

    Only the first failing rule is reported, matching the order in which a
    user would fix them.
    """
    result = ValidationResult()

    start_day = try_parse_calendar_date(start)
    end_day = try_parse_calendar_date(end)

    if start_day is None:
        result.errors.append(
            "Start date is invalid. Please enter a valid date (YYYY-MM-DD)."
        )
    elif end_day is None:
        result.errors.append(
            "End date is invalid. Please enter a valid date (YYYY-MM-DD)."
        )
    elif not (min_date <= start_day <= today):
        result.errors.append(
            f"Start date must be between {min_date.isoformat()} and {today.isoformat()}."
        )
    elif not (min_date <= end_day <= today):
        result.errors.append(
            f"End date must be between {min_date.isoformat()} and {today.isoformat()}."
        )
    elif start_day > end_day:
        result.errors.append("Start date must be before end date.")

    return result


# ============================================================
# Soft diagnostics
# ============================================================


def diagnose_observations(
    observations: Sequence[Observation],
    result: Optional[ValidationResult] = None,
) -> ValidationResult:
    """
    Collect non-fatal data-quality warnings. Never raises.
    """
    # imported here: the range resolver owns the gap threshold
    from bond_spread.alignment.range_resolver import SNAPSHOT_GAP_DAYS

    result = result if result is not None else ValidationResult()

    by_source: dict[SeriesSource, List[Observation]] = {}
    for o in observations:
        by_source.setdefault(o.source, []).append(o)

    for source, obs in by_source.items():
        name = source.value

        dup = [d for d, n in Counter(o.obs_date for o in obs).items() if n > 1]
        if dup:
            result.warnings.append(
                f"⚠️ {name}: {len(dup)} duplicate dates; the first occurrence is used."
            )

        nulls = sum(1 for o in obs if not _is_finite_number(o.yield_pct))
        if nulls:
            result.warnings.append(f"⚠️ {name}: {nulls} observations without a value.")

        if source == SeriesSource.CORPORATE:
            non_positive = sum(
                1
                for o in obs
                if _is_finite_number(o.yield_pct) and float(o.yield_pct) <= 0.0
            )
            if non_positive:
                result.warnings.append(
                    f"⚠️ {name}: {non_positive} non-positive yields treated as missing."
                )

        dates = sorted({o.obs_date for o in obs})
        if len(dates) >= 2:
            gap = (dates[-1] - dates[-2]).days
            if gap > SNAPSHOT_GAP_DAYS:
                result.warnings.append(
                    f"⚠️ {name}: last observation {dates[-1].isoformat()} is {gap} days "
                    "after the previous one (latest snapshot outside the window?)."
                )

    return result
