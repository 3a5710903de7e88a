# src/bond_spread/alignment/calendar.py
from __future__ import annotations

import datetime as _dt
import re
from typing import Any, List, Optional

import pandas as pd

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Monday=0 ... Friday=4
_WEEKEND = {5, 6}


class InvalidDate(ValueError):
    """Raised when a value cannot be interpreted as a calendar day."""

    pass


def parse_calendar_date(value: Any) -> _dt.date:
    """
    Normalize ``value`` to a calendar day (``datetime.date``).

    Accepted inputs:
        - ``datetime.date``
        - ``datetime.datetime`` / ``pandas.Timestamp`` (time-of-day dropped)
        - strict ISO strings ``YYYY-MM-DD``

    Anything else, including impossible days such as ``2023-02-30``,
    raises InvalidDate.
    """
    if value is None:
        raise InvalidDate("date is missing")

    # NaT is a datetime subclass instance, check it first
    if value is pd.NaT:
        raise InvalidDate("date is NaT")

    if isinstance(value, _dt.datetime):
        return value.date()

    if isinstance(value, _dt.date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not _ISO_DATE.match(text):
            raise InvalidDate(f"expected YYYY-MM-DD, got {value!r}")
        try:
            return _dt.date.fromisoformat(text)
        except ValueError as e:
            raise InvalidDate(f"not a calendar date: {value!r}") from e

    raise InvalidDate(f"unsupported date type: {type(value).__name__}")


def try_parse_calendar_date(value: Any) -> Optional[_dt.date]:
    """Like parse_calendar_date but returns None instead of raising."""
    try:
        return parse_calendar_date(value)
    except InvalidDate:
        return None


def is_business_day(day: _dt.date) -> bool:
    return day.weekday() not in _WEEKEND


def business_days(start: Any, end: Any) -> List[_dt.date]:
    """
    Weekdays in the closed interval [start, end].

    Holidays are not excluded. An inverted or unparseable range yields an
    empty list; callers treat that as "no usable range".
    """
    first = try_parse_calendar_date(start)
    last = try_parse_calendar_date(end)
    if first is None or last is None or first > last:
        return []

    one_day = _dt.timedelta(days=1)
    days: List[_dt.date] = []
    current = first
    while current <= last:
        if is_business_day(current):
            days.append(current)
        current += one_day
    return days
