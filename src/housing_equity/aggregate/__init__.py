"""Aggregation helpers.

This package contains the record-level rollups and housing metrics the
dashboards are built on, plus routines that compute the same aggregates as
Gold DataFrames and export them as small, chart-ready files.
"""

from .metrics import (
    INCOME_BRACKETS,
    add_income_brackets,
    calculate_denial_rate,
    calculate_risk_ratio,
    denial_rate_table,
    denial_rates_by,
    denial_rates_by_race,
    denial_rates_by_race_and_income,
    get_income_bracket,
    risk_ratios,
    summarize_denials,
)
from .rollup import (
    flatten_rollup,
    group_records,
    rollup,
    rollup_count,
    rollup_count1,
    rollup_count2,
    rollup_count3,
)

__all__ = [
    "INCOME_BRACKETS",
    "add_income_brackets",
    "calculate_denial_rate",
    "calculate_risk_ratio",
    "denial_rate_table",
    "denial_rates_by",
    "denial_rates_by_race",
    "denial_rates_by_race_and_income",
    "flatten_rollup",
    "get_income_bracket",
    "group_records",
    "risk_ratios",
    "rollup",
    "rollup_count",
    "rollup_count1",
    "rollup_count2",
    "rollup_count3",
    "summarize_denials",
]
