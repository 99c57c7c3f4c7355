"""Read loan application CSVs into Dask DataFrames.

Raw HMDA files mix codes, numbers and "NA"/"Exempt" markers in the same
column, so they are read as text and typed during cleaning. Cleaned files
have a known schema and are read with explicit dtypes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast
import logging

import dask.dataframe as dd

log = logging.getLogger(__name__)

CLEAN_DTYPES = {
    "race_ethnicity": "object",
    "denied": "float64",
    "income_1000s": "float64",
    "income_bracket": "object",
    "activity_year": "float64",
    "county_code": "object",
}


def _require(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")


def read_raw_csv(path: Path, blocksize: str = "64MB") -> Any:
    """Read a raw HMDA loan application CSV with every column as text.

    Args:
        path: CSV file path.
        blocksize: Dask partition size.

    Raises:
        FileNotFoundError: if `path` does not exist.
    """
    _require(path)
    dd_mod = cast(Any, dd)
    ddf = dd_mod.read_csv(str(path), dtype=object, blocksize=blocksize)
    log.info("Reading %s in %d partitions", path, ddf.npartitions)
    return ddf


def read_clean_csv(path: Path, blocksize: str = "64MB") -> Any:
    """Read a Clean-layer CSV written by `write_clean_csv`.

    Raises:
        FileNotFoundError: if `path` does not exist.
    """
    _require(path)
    dd_mod = cast(Any, dd)
    ddf = dd_mod.read_csv(str(path), dtype=CLEAN_DTYPES, blocksize=blocksize)
    log.info("Reading %s in %d partitions", path, ddf.npartitions)
    return ddf
