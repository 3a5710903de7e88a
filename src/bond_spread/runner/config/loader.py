from __future__ import annotations

import datetime as _dt
import json
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from bond_spread.alignment.calendar import InvalidDate, parse_calendar_date
from bond_spread.data.ingestion.fred import ConfigurationError
from bond_spread.runner.config.models import SpreadConfig

API_KEY_ENV_VAR = "FRED_API_KEY"


def load_config(path: str | Path) -> SpreadConfig:
    """
    Load a SpreadConfig from YAML or JSON.

    Automatically validates using Pydantic v2.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    text = path.read_text()

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw = yaml.safe_load(text)
        elif path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raise ValueError("Config path must be YAML or JSON.")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to parse config: {e}") from e

    try:
        return SpreadConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ValueError(f"Invalid SpreadConfig: {e}") from e


def resolve_api_key(
    cfg: SpreadConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Priority:
        1. fred.api_key in the config
        2. FRED_API_KEY environment variable
    """
    if cfg.fred.api_key:
        return cfg.fred.api_key

    env = os.environ if environ is None else environ
    key = (env.get(API_KEY_ENV_VAR) or "").strip()
    if not key:
        raise ConfigurationError(
            f"FRED API key is not configured. Set {API_KEY_ENV_VAR} or fred.api_key."
        )
    return key


def default_window(today: _dt.date, lookback_days: int = 365) -> Tuple[_dt.date, _dt.date]:
    return today - _dt.timedelta(days=lookback_days), today


def resolve_window(cfg: SpreadConfig, today: _dt.date) -> Tuple[_dt.date, _dt.date]:
    """
    Requested fetch window. Unparseable bounds fall back to the default
    window; an inverted window is swapped.
    """
    default_start, default_end = default_window(today, cfg.window.lookback_days)

    def _parse(value: Optional[str], fallback: _dt.date) -> _dt.date:
        if value is None:
            return fallback
        try:
            return parse_calendar_date(value)
        except InvalidDate:
            return fallback

    start = _parse(cfg.window.start, default_start)
    end = _parse(cfg.window.end, default_end)
    if end < start:
        start, end = end, start
    return start, end
