"""Gold aggregation functions.

Functions in this module build Gold tables from the cleaned loan application
layer. Gold tables are small, Dask-safe outputs that are computed to pandas
and exported for the mortgage disparity dashboard.

Expectations:
- Input: a Dask DataFrame with cleaned columns `race_ethnicity`, `denied`,
  `income_1000s` and `income_bracket`
- Outputs: DataFrames with the columns documented on each function
  docstring. Missing group keys form their own group, as in the list-based
  rollups.
"""
from __future__ import annotations

from typing import Any, Sequence, cast

import pandas as pd
import dask.dataframe as dd

from housing_equity.aggregate.metrics import (
    BRACKET_KEY,
    DENIED_KEY,
    RACE_KEY,
    calculate_risk_ratio,
)


# =========================================================
# GENERIC ROLLUPS
# =========================================================

def frame_rollup_count(ddf: Any, keys: Sequence[str], count_key: str = "count") -> Any:
    """Return row counts per observed combination of `keys`.

    Args:
        ddf: Dask (or pandas) DataFrame containing every column in `keys`.
        keys: Columns to group by.
        count_key: Name of the output count column.

    Returns:
        DataFrame with columns `*keys`, `count_key`.
    """
    return (
        ddf.groupby(list(keys), dropna=False)
        .size()
        .reset_index()
        .rename(columns={0: count_key})
    )


def frame_denial_rates(ddf: Any, keys: Sequence[str]) -> Any:
    """Return denial summaries per observed combination of `keys`.

    Args:
        ddf: DataFrame with a numeric `denied` column and the `keys` columns.
        keys: Columns to group by.

    Returns:
        DataFrame with columns `*keys`, `total`, `denied`, `denial_rate`.
        `total` counts rows; `denied` and `denial_rate` skip missing flags.
    """
    return (
        ddf.groupby(list(keys), dropna=False)[DENIED_KEY]
        .agg(["size", "sum", "mean"])
        .reset_index()
        .rename(columns={"size": "total", "sum": "denied", "mean": "denial_rate"})
    )


# =========================================================
# MORTGAGE DISPARITY GOLD LAYER
# =========================================================

def gold_applications_by_race(ddf: Any) -> Any:
    """Return application counts per race/ethnicity.

    Returns:
        DataFrame with columns: `race_ethnicity`, `applications`.
    """
    return frame_rollup_count(ddf, [RACE_KEY], "applications")


def gold_applications_by_race_income(ddf: Any) -> Any:
    """Return application counts per race/ethnicity and income bracket.

    Returns:
        DataFrame with columns: `race_ethnicity`, `income_bracket`, `applications`.
    """
    return frame_rollup_count(ddf, [RACE_KEY, BRACKET_KEY], "applications")


def gold_denial_rates_by_race(ddf: Any) -> Any:
    """Return denial summaries per race/ethnicity.

    Returns:
        DataFrame with columns: `race_ethnicity`, `total`, `denied`, `denial_rate`.
    """
    return frame_denial_rates(ddf, [RACE_KEY])


def gold_denial_rates_by_income(ddf: Any) -> Any:
    """Return denial summaries per income bracket.

    Returns:
        DataFrame with columns: `income_bracket`, `total`, `denied`, `denial_rate`.
    """
    return frame_denial_rates(ddf, [BRACKET_KEY])


def gold_denial_rates_by_race_income(ddf: Any) -> Any:
    """Return denial summaries per race/ethnicity and income bracket.

    Used for the "denials persist at every income level" chart.

    Returns:
        DataFrame with columns: `race_ethnicity`, `income_bracket`, `total`,
        `denied`, `denial_rate`.
    """
    return frame_denial_rates(ddf, [RACE_KEY, BRACKET_KEY])


def gold_risk_ratios(ddf: Any, reference_group: str = "White") -> Any:
    """Compare each group's denial rate with the reference group's.

    Args:
        ddf: Dask DataFrame of cleaned applications.
        reference_group: `race_ethnicity` value used as the denominator.

    Returns:
        Small Dask DataFrame (converted from pandas) with columns
        `race_ethnicity`, `reference_group`, `denial_rate`, `risk_ratio`.
        `risk_ratio` is a 2-decimal string, or "N/A" when the reference
        group is absent or never denied.
    """
    # rates table is tiny -> compute safely as pandas
    rates = gold_denial_rates_by_race(ddf)
    pdf = rates.compute() if hasattr(rates, "compute") else rates

    reference = pdf.loc[pdf[RACE_KEY] == reference_group, "denial_rate"]
    reference_rate = float(reference.iloc[0]) if not reference.empty else None

    out = pd.DataFrame(
        {
            RACE_KEY: pdf[RACE_KEY],
            "reference_group": reference_group,
            "denial_rate": pdf["denial_rate"],
            "risk_ratio": [calculate_risk_ratio(rate, reference_rate) for rate in pdf["denial_rate"]],
        }
    )
    dd_mod = cast(Any, dd)
    return dd_mod.from_pandas(out.reset_index(drop=True), npartitions=1)
