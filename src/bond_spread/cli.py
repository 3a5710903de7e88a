from __future__ import annotations

import argparse
import asyncio
import datetime as _dt
import logging
import sys
from pathlib import Path

from bond_spread import __version__
from bond_spread.alignment.assembler import rows_to_frame
from bond_spread.alignment.calendar import InvalidDate, parse_calendar_date
from bond_spread.alignment.pipeline import align_bond_series
from bond_spread.alignment.schemas import AlignmentResult, SeriesSource
from bond_spread.analytics.stats import compute_summary_stats
from bond_spread.data.ingestion.csv_source import CsvObservationIngestor
from bond_spread.data.ingestion.fred import ConfigurationError, FredAPIError, FredClient
from bond_spread.data.ingestion.pipelines import BondDataPipeline
from bond_spread.data.series_catalog import CORPORATE_SERIES, TREASURY_SERIES
from bond_spread.data.validation.validators import ValidationError
from bond_spread.reporting.headline import headline_cards
from bond_spread.reporting.html_report import generate_html_report
from bond_spread.runner.config.loader import load_config, resolve_api_key, resolve_window

LOGGER = logging.getLogger(__name__)


def _today(args) -> _dt.date:
    if getattr(args, "today", None):
        return parse_calendar_date(args.today)
    return _dt.date.today()


# ============================================================
# Output helpers
# ============================================================


def _print_result(result: AlignmentResult) -> None:
    if not result.has_data:
        print(f"[bspread] {result.message}")
        return

    rng = result.selected_range
    print(f"\n========== Bond Spread ({rng.start} to {rng.end}) ==========")
    for card in headline_cards(result.latest):
        print(f"{card['label']:<16} {card['value']:>10}   as of {card['as_of']}")

    stats = compute_summary_stats(result.rows)
    print(f"Business days:   {stats.n_days}")
    if stats.spread.mean is not None:
        print(
            f"Spread mean/min/max: {stats.spread.mean:.1f} / "
            f"{stats.spread.min:.1f} / {stats.spread.max:.1f} bps"
        )
    print("=" * 60 + "\n")


def _save_outputs(
    result: AlignmentResult,
    save_dir: str | Path,
    title: str,
    save_rows_csv: bool = True,
    save_html_report: bool = True,
) -> None:
    out_dir = Path(save_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Saving results to: %s", out_dir)

    (out_dir / "alignment.json").write_text(result.model_dump_json(indent=2))
    if save_rows_csv:
        rows_to_frame(result.rows).to_csv(out_dir / "aligned_rows.csv")
    if save_html_report:
        generate_html_report(result, out_dir / "report.html", title=title)
    print(f"[bspread] Saved outputs to {out_dir}")


# ============================================================
# Command: fetch
# ============================================================


def cmd_fetch(args):
    cfg = load_config(args.config)
    today = _today(args)
    start, end = resolve_window(cfg, today)

    client = FredClient(
        api_key=resolve_api_key(cfg),
        base_url=cfg.fred.base_url,
        timeout=cfg.fred.timeout_seconds,
    )
    pipeline = BondDataPipeline(
        client,
        treasury_series=cfg.series.treasury,
        corporate_series=cfg.series.corporate,
        start=start,
        end=end,
        today=today,
        include_absolute_latest=cfg.window.include_absolute_latest,
        disable_date_filter=cfg.window.disable_date_filter,
    )

    print(f"[bspread] Fetching {cfg.series.treasury} vs {cfg.series.corporate}: {start} to {end}")
    dataset = asyncio.run(pipeline.run())

    for w in dataset.warnings:
        print(f"[bspread] {w}")
    _print_result(dataset.result)

    save_dir = args.save_dir or cfg.save.directory
    if save_dir:
        _save_outputs(
            dataset.result,
            save_dir,
            title=cfg.name,
            save_rows_csv=cfg.save.save_rows_csv,
            save_html_report=cfg.save.save_html_report,
        )


# ============================================================
# Command: align (offline CSVs)
# ============================================================


async def _load_csv_pair(treasury_path: str, corporate_path: str):
    treasury = await CsvObservationIngestor(treasury_path, SeriesSource.TREASURY).run()
    corporate = await CsvObservationIngestor(corporate_path, SeriesSource.CORPORATE).run()
    return treasury, corporate


def cmd_align(args):
    for p in (args.treasury, args.corporate):
        if not Path(p).exists():
            raise FileNotFoundError(f"CSV not found: {p}")

    treasury, corporate = asyncio.run(_load_csv_pair(args.treasury, args.corporate))

    result = align_bond_series(
        treasury,
        corporate,
        args.start,
        args.end,
        disable_date_filter=not args.filter_dates,
        today=_today(args),
    )

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        _print_result(result)

    if args.save_dir:
        _save_outputs(result, args.save_dir, title="Bond Yield Spreads")


# ============================================================
# Command: series list
# ============================================================


def cmd_series_list(args):
    print("[bspread] Treasury series:")
    for info in TREASURY_SERIES.values():
        print(f"  - {info.series_id:<18} {info.name}")
    print("[bspread] Corporate series:")
    for info in CORPORATE_SERIES.values():
        print(f"  - {info.series_id:<18} {info.name}")


# ============================================================
# Command: version
# ============================================================


def cmd_version(args):
    print(__version__)


# ============================================================
# Main CLI
# ============================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bspread")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # fetch
    # ------------------------------------------------------------------
    p_fetch = sub.add_parser("fetch", help="Fetch series from FRED and align them")
    p_fetch.add_argument("--config", required=True, help="Path to config JSON/YAML")
    p_fetch.add_argument("--save-dir", default=None, help="Directory to save results")
    p_fetch.add_argument("--today", default=None, help="Override today (YYYY-MM-DD)")
    p_fetch.set_defaults(func=cmd_fetch)

    # ------------------------------------------------------------------
    # align
    # ------------------------------------------------------------------
    p_align = sub.add_parser("align", help="Align two saved series CSVs")
    p_align.add_argument("--treasury", required=True, help="Treasury CSV (date,value)")
    p_align.add_argument("--corporate", required=True, help="Corporate CSV (date,value)")
    p_align.add_argument("--start", default=None)
    p_align.add_argument("--end", default=None)
    p_align.add_argument(
        "--filter-dates",
        action="store_true",
        help="Honor --start/--end instead of deriving the range from the data",
    )
    p_align.add_argument("--today", default=None, help="Override today (YYYY-MM-DD)")
    p_align.add_argument("--json", action="store_true", help="Print JSON result")
    p_align.add_argument("--save-dir", default=None)
    p_align.set_defaults(func=cmd_align)

    # ------------------------------------------------------------------
    # series
    # ------------------------------------------------------------------
    p_series = sub.add_parser("series", help="Series catalogue")
    series_sub = p_series.add_subparsers(dest="series_cmd", required=True)
    p_list = series_sub.add_parser("list", help="List known FRED series")
    p_list.set_defaults(func=cmd_series_list)

    # ------------------------------------------------------------------
    # version
    # ------------------------------------------------------------------
    p_ver = sub.add_parser("version", help="Show version")
    p_ver.set_defaults(func=cmd_version)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    try:
        args.func(args)
    except (
        ConfigurationError,
        FredAPIError,
        ValidationError,
        InvalidDate,
        FileNotFoundError,
        ValueError,
    ) as e:
        print(f"[bspread] Error: {e}", file=sys.stderr)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
