"""Command-line interface for the housing data pipeline.

Provides subcommands: `clean`, `gold`, and `all`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from housing_equity.config import EXPORT_FORMATS, Settings, get_settings
from housing_equity.logging_config import configure_logging

# INGEST
from housing_equity.ingest.load_csv import read_clean_csv, read_raw_csv

# CLEAN
from housing_equity.clean.transform import clean_applications_ddf
from housing_equity.clean.load_clean import write_clean_csv

# GOLD
from housing_equity.aggregate.build_gold import (
    gold_applications_by_race,
    gold_applications_by_race_income,
    gold_denial_rates_by_race,
    gold_denial_rates_by_income,
    gold_denial_rates_by_race_income,
    gold_risk_ratios,
)
from housing_equity.aggregate.export_gold import export_gold
from housing_equity.models import DenialRateByIncomeRow, DenialRateRow, RiskRatioRow

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _input_path(args: argparse.Namespace, s: Settings) -> Path:
    """Resolve `--input` against the configured data directory when relative and missing."""
    path = Path(args.input)
    if not path.is_absolute() and not path.exists():
        return s.data_dir / path
    return path


def export_all_gold(
    ddf: Any,
    output_dir: Path,
    fmt: str = "csv",
    reference_group: str = "White",
) -> list[Path]:
    """Compute every Gold table from cleaned applications and export it.

    Returns:
        Paths of the files written (empty tables are skipped).
    """
    if "income_bracket" not in ddf.columns:
        raise ValueError("Cleaned input has no 'income_bracket' column. Run clean first.")

    written = [
        export_gold(gold_applications_by_race(ddf), output_dir, "applications_by_race", fmt),
        export_gold(gold_applications_by_race_income(ddf), output_dir, "applications_by_race_income", fmt),
        export_gold(gold_denial_rates_by_race(ddf), output_dir, "denial_rates_by_race", fmt, DenialRateRow),
        export_gold(gold_denial_rates_by_income(ddf), output_dir, "denial_rates_by_income", fmt),
        export_gold(
            gold_denial_rates_by_race_income(ddf),
            output_dir,
            "denial_rates_by_race_income",
            fmt,
            DenialRateByIncomeRow,
        ),
        export_gold(
            gold_risk_ratios(ddf, reference_group),
            output_dir,
            "risk_ratios",
            fmt,
            RiskRatioRow,
        ),
    ]
    return [p for p in written if p is not None]


# --------------------------------------------------
# CLEAN
# --------------------------------------------------
def cmd_clean(args: argparse.Namespace) -> None:
    """Clean a raw HMDA CSV and write validated rows to `--output`.

    Args:
        args: argparse namespace with `input` and `output`.
    """
    s = get_settings()
    ddf = read_raw_csv(_input_path(args, s))

    good, bad = write_clean_csv(clean_applications_ddf(ddf), Path(args.output))
    if good == 0:
        raise RuntimeError("No valid applications after cleaning. Check the input columns.")

    log.info("clean_applications count=%d (bad=%d)", good, bad)


# --------------------------------------------------
# GOLD
# --------------------------------------------------
def cmd_gold(args: argparse.Namespace) -> None:
    """Compute Gold tables from a cleaned CSV and export them.

    Args:
        args: argparse namespace with `input`, `output_dir`, `format`, `reference`.
    """
    s = get_settings()
    ddf = read_clean_csv(_input_path(args, s))

    if ddf.shape[0].compute() == 0:
        raise RuntimeError("Cleaned input is empty. Run clean first.")

    paths = export_all_gold(
        ddf,
        Path(args.output_dir) if args.output_dir else s.output_dir,
        args.format or s.export_format,
        args.reference or s.reference_group,
    )
    log.info("Gold layer successfully generated (%d files).", len(paths))


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(args: argparse.Namespace) -> None:
    """Convenience: run clean -> gold with the provided args."""
    cmd_clean(args)
    args.input = args.output
    cmd_gold(args)


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `clean`, `gold`, and `all`.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="housing-equity")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_clean = sub.add_parser("clean")
    p_clean.add_argument("--input", required=True)
    p_clean.add_argument("--output", default="data/clean/applications.csv")

    p_gold = sub.add_parser("gold")
    p_gold.add_argument("--input", default="data/clean/applications.csv")
    p_gold.add_argument("--output-dir", default=None)
    p_gold.add_argument("--format", choices=EXPORT_FORMATS, default=None)
    p_gold.add_argument("--reference", default=None)

    p_all = sub.add_parser("all")
    p_all.add_argument("--input", required=True)
    p_all.add_argument("--output", default="data/clean/applications.csv")
    p_all.add_argument("--output-dir", default=None)
    p_all.add_argument("--format", choices=EXPORT_FORMATS, default=None)
    p_all.add_argument("--reference", default=None)

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(Path("logs/pipeline.log"), get_settings().log_level)

    if args.cmd == "clean":
        cmd_clean(args)
    elif args.cmd == "gold":
        cmd_gold(args)
    elif args.cmd == "all":
        cmd_all(args)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
