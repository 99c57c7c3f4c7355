"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the pipeline's environment variables (input/output directories, the
risk-ratio reference group, export format and log level).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

EXPORT_FORMATS = ("csv", "json")


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        data_dir: Directory holding raw input CSVs.
        output_dir: Dashboard data directory where Gold tables are written.
        reference_group: Group whose denial rate is the risk-ratio denominator.
        export_format: Gold file format, "csv" or "json".
        log_level: Numeric logging level.
    """
    data_dir: Path
    output_dir: Path
    reference_group: str
    export_format: str
    log_level: int


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `HOUSING_EXPORT_FORMAT` or `HOUSING_LOG_LEVEL` holds
            an unsupported value.
    """
    data_dir = Path(os.getenv("HOUSING_DATA_DIR", "data/raw"))
    output_dir = Path(os.getenv("HOUSING_OUTPUT_DIR", "src/data"))
    reference_group = os.getenv("HOUSING_REFERENCE_GROUP", "White").strip() or "White"
    export_format = os.getenv("HOUSING_EXPORT_FORMAT", "csv").strip().lower()
    level_name = os.getenv("HOUSING_LOG_LEVEL", "INFO").strip().upper()

    if export_format not in EXPORT_FORMATS:
        raise RuntimeError(
            f"HOUSING_EXPORT_FORMAT must be one of {', '.join(EXPORT_FORMATS)} "
            f"(got {export_format!r})."
        )

    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise RuntimeError(f"HOUSING_LOG_LEVEL {level_name!r} is not a logging level.")

    return Settings(
        data_dir=data_dir,
        output_dir=output_dir,
        reference_group=reference_group,
        export_format=export_format,
        log_level=log_level,
    )
