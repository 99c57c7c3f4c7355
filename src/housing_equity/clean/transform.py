"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. Raw HMDA loan application rows are reduced to the record contract the
aggregation helpers expect (`race_ethnicity`, `denied`, `income_1000s`,
`income_bracket`) plus optional `activity_year` and `county_code`.
"""
from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from housing_equity.aggregate.metrics import (
    BRACKET_KEY,
    DENIED_KEY,
    INCOME_KEY,
    RACE_KEY,
    as_number,
    get_income_bracket,
)

log = logging.getLogger(__name__)

# HMDA action_taken code for "Application denied"
ACTION_DENIED = 3
HISPANIC = "Hispanic or Latino"
CLEAN_COLUMNS = [RACE_KEY, DENIED_KEY, INCOME_KEY, BRACKET_KEY, "activity_year", "county_code"]
_FLAG_WORDS = {"true": 1.0, "false": 0.0}


def _clean_label(value: Any) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = " ".join(str(value).split())
    return text or None


def _parse_flag(value: Any) -> float:
    if isinstance(value, str) and value.strip().lower() in _FLAG_WORDS:
        return _FLAG_WORDS[value.strip().lower()]
    number = as_number(value)
    return float("nan") if number is None else float(number)


def _race_ethnicity(pdf: pd.DataFrame) -> pd.Series:
    """Combine HMDA derived race and ethnicity into one label.

    Hispanic or Latino applicants are labelled by ethnicity regardless of
    race; everyone else by their derived race.
    """
    race = pdf["derived_race"].map(_clean_label)
    if "derived_ethnicity" not in pdf.columns:
        return race
    ethnicity = pdf["derived_ethnicity"].map(_clean_label)
    return race.where(ethnicity != HISPANIC, HISPANIC)


def _clean_partition(pdf: pd.DataFrame) -> pd.DataFrame:
    """Partition-level cleaning function applied via map_partitions.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        Cleaned Pandas DataFrame with the columns of `CLEAN_COLUMNS` that
        could be derived, in that order.
    """
    pdf = pdf.copy()

    # -----------------------------
    # Race / ethnicity label
    # -----------------------------
    if RACE_KEY in pdf.columns:
        pdf[RACE_KEY] = pdf[RACE_KEY].map(_clean_label)
    else:
        pdf[RACE_KEY] = _race_ethnicity(pdf)

    # -----------------------------
    # Denial flag (drop rows without one)
    # -----------------------------
    if DENIED_KEY in pdf.columns:
        pdf[DENIED_KEY] = pdf[DENIED_KEY].map(_parse_flag).astype(float)
    else:
        action = pd.to_numeric(pdf["action_taken"], errors="coerce")
        pdf[DENIED_KEY] = (action == ACTION_DENIED).astype(float).where(action.notna())
    pdf = pdf[pdf[DENIED_KEY].isin([0, 1])].copy()
    pdf[DENIED_KEY] = pdf[DENIED_KEY].astype(int)

    # -----------------------------
    # Income (thousands) + bracket
    # -----------------------------
    if INCOME_KEY not in pdf.columns:
        pdf[INCOME_KEY] = pdf["income"] if "income" in pdf.columns else None
    pdf[INCOME_KEY] = pd.to_numeric(pdf[INCOME_KEY], errors="coerce").astype(float)
    pdf[BRACKET_KEY] = pdf[INCOME_KEY].map(get_income_bracket).astype(object)

    # -----------------------------
    # Optional passthrough columns
    # -----------------------------
    if "activity_year" in pdf.columns:
        pdf["activity_year"] = pd.to_numeric(pdf["activity_year"], errors="coerce").astype("Int64")
    if "county_code" in pdf.columns:
        pdf["county_code"] = pdf["county_code"].map(_clean_label).astype(object)

    return pdf[[c for c in CLEAN_COLUMNS if c in pdf.columns]]


def clean_applications_ddf(ddf: Any) -> Any:
    """Clean raw (or pre-processed) loan application rows.

    Derives `race_ethnicity` from `derived_race`/`derived_ethnicity`,
    `denied` from `action_taken` and `income_1000s` from `income` when those
    contract columns are not already present. Rows without a usable denial
    flag are dropped.

    Raises:
        ValueError: if the frame has no race or no denial source column.

    Returns:
        Transformed Dask DataFrame with a stable schema for validation.
    """
    columns = set(ddf.columns)
    if RACE_KEY not in columns and "derived_race" not in columns:
        raise ValueError(f"Input needs a {RACE_KEY!r} or 'derived_race' column")
    if DENIED_KEY not in columns and "action_taken" not in columns:
        raise ValueError(f"Input needs a {DENIED_KEY!r} or 'action_taken' column")

    log.info("Starting clean_applications_ddf transformation")

    # Schema of the output is whatever cleaning an empty partition yields
    meta = _clean_partition(ddf._meta)
    return ddf.map_partitions(_clean_partition, meta=meta)
