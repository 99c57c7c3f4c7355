"""Utilities for exporting Gold DataFrames to the dashboard data directory.

Gold datasets are small (aggregated) and are materialized to pandas before
being written as one CSV or JSON records file per table. This module
centralizes the missing-value handling, row validation and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import logging

import pandas as pd
from pydantic import BaseModel

from housing_equity.config import EXPORT_FORMATS

log = logging.getLogger(__name__)


def _to_records(pdf: pd.DataFrame) -> list[dict[str, Any]]:
    """Return the frame's rows as dicts with missing values replaced by ``None``."""
    clean = pdf.astype(object).where(pdf.notna(), None)
    return clean.to_dict("records")


def export_gold(
    ddf: Any,
    output_dir: Path,
    table_name: str,
    fmt: str = "csv",
    model: type[BaseModel] | None = None,
) -> Path | None:
    """Materialize a Gold table and write it to `output_dir`.

    Strategy:
    - Compute Dask DF -> pandas (gold is small)
    - Validate every row against `model` when given
    - Write `<table_name>.csv` or `<table_name>.json`

    Args:
        ddf: Dask (or pandas) DataFrame representing the gold table.
        output_dir: Directory to write into; created if missing.
        table_name: File stem for the output.
        fmt: "csv" or "json" (records orientation).
        model: Optional pydantic model each row must satisfy.

    Returns:
        Path of the written file, or ``None`` when the table was empty.

    Raises:
        ValueError: if `fmt` is not a supported export format.
        pydantic.ValidationError: if a row does not satisfy `model`.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format {fmt!r}; expected one of {EXPORT_FORMATS}")

    log.info("Generating gold table: %s", table_name)

    # -------------------------
    # Materialize (SAFE)
    # -------------------------
    pdf = ddf.compute() if hasattr(ddf, "compute") else ddf

    if pdf.empty:
        log.warning("No rows to export for %s", table_name)
        return None

    records = _to_records(pdf)

    # -------------------------
    # Validate
    # -------------------------
    if model is not None:
        for row in records:
            model.model_validate(row)

    # -------------------------
    # Write
    # -------------------------
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{table_name}.{fmt}"
    out = pd.DataFrame.from_records(records, columns=list(pdf.columns))
    if fmt == "csv":
        out.to_csv(path, index=False)
    else:
        out.to_json(path, orient="records", indent=2)

    log.info("Gold export complete for %s: %d rows -> %s", table_name, len(records), path)
    return path
