"""Write cleaned loan applications to the Clean-layer CSV.

Module notes:
- Each Dask partition is validated independently as a delayed task.
- Only rows passing `MortgageApplication` validation are written.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import pandas as pd
from dask import delayed, compute  # type: ignore[attr-defined]

from housing_equity.clean.transform import CLEAN_COLUMNS
from housing_equity.clean.validate import validate_partition

log = logging.getLogger(__name__)


def validate_clean_ddf(ddf: Any) -> tuple[pd.DataFrame, int]:
    """Validate every partition and gather the good rows into one frame.

    Uses `to_delayed()` so each partition is validated as plain pandas.

    Returns:
        Tuple of (validated pandas DataFrame, bad row count).
    """
    tasks = [delayed(validate_partition)(part) for part in ddf.to_delayed()]

    # `compute` is untyped in our environment; cast to Any before calling
    results = cast(Any, compute)(*tasks)

    records = [rec for good, _ in results for rec in good]
    bad_total = sum(b for _, b in results)
    pdf = pd.DataFrame.from_records(records, columns=CLEAN_COLUMNS)
    return pdf, int(bad_total)


def write_clean_csv(ddf: Any, path: Path) -> tuple[int, int]:
    """Validate cleaned applications and write the good rows to `path`.

    Returns:
        Tuple of (good_rows, bad_rows).
    """
    log.info("Writing clean applications to %s", path)

    pdf, bad = validate_clean_ddf(ddf)
    path.parent.mkdir(parents=True, exist_ok=True)
    pdf.to_csv(path, index=False)

    log.info("Clean write complete: good=%d bad=%d", len(pdf), bad)
    return len(pdf), bad
