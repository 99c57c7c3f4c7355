"""Validation utilities for the Clean layer.

This module validates partition data against the Pydantic
`MortgageApplication` model after converting pandas missing values to
``None``.
"""
from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import ValidationError

from housing_equity.models import MortgageApplication


def _native(value: Any) -> Any:
    """Return ``None`` for pandas/numpy missing values, else the value unchanged."""
    if value is None:
        return None
    try:
        return None if pd.isna(value) else value
    except (TypeError, ValueError):
        return value


def validate_partition(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate a pandas partition of cleaned records using Pydantic.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        rec = {k: _native(v) for k, v in rec.items()}
        try:
            m = MortgageApplication.model_validate(rec)
            good.append(m.model_dump(mode="python"))
        except ValidationError:
            bad += 1

    return good, bad
