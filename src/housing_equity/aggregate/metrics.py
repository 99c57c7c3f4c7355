"""Housing-specific reductions built on the rollup primitives.

Functions in this module compute mortgage denial rates, risk ratios and
income brackets from lists of loan application records. Field names follow
the cleaned HMDA record contract:

- `race_ethnicity`: applicant race/ethnicity label
- `denied`: 1/0 (or True/False) denial flag
- `income_1000s`: annual income in thousands of dollars

Nothing here validates input. Non-numeric metric values are skipped by the
reductions and a reduction over no values yields ``None``.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterable, Mapping, Sequence

from housing_equity.aggregate.rollup import Record, flatten_rollup, rollup
from housing_equity.formatting import NOT_AVAILABLE, to_fixed

RACE_KEY = "race_ethnicity"
DENIED_KEY = "denied"
INCOME_KEY = "income_1000s"
BRACKET_KEY = "income_bracket"

INCOME_BRACKETS = ("<$50K", "$50-75K", "$75-100K", "$100-150K", "$150K+")
_BRACKET_UPPER_BOUNDS = (50, 75, 100, 150)


def as_number(value: Any) -> int | float | None:
    """Coerce a scalar to a number, or ``None`` when it has no numeric value."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _numbers(values: Iterable[Any]) -> list[int | float]:
    return [n for n in map(as_number, values) if n is not None]


def total(values: Iterable[Any]) -> int | float:
    """Sum of the numeric values; booleans count as 0/1 and others are skipped."""
    return sum(_numbers(values))


def mean(values: Iterable[Any]) -> float | None:
    """Mean of the numeric values, or ``None`` when there are none."""
    nums = _numbers(values)
    if not nums:
        return None
    return sum(nums) / len(nums)


def calculate_denial_rate(
    data: Iterable[Record],
    filter_key: str,
    filter_value: Any,
    value_key: str = DENIED_KEY,
) -> float | None:
    """Return the mean denial flag over records where `filter_key` equals `filter_value`.

    Returns ``None`` when no record matches, so display helpers render it
    as "N/A" instead of a misleading 0%.
    """
    return mean(r.get(value_key) for r in data if r.get(filter_key) == filter_value)


def get_income_bracket(income: Any) -> str | None:
    """Map income (in thousands) to its bracket label.

    Each threshold is exclusive on the upper side: 50 falls in "$50-75K" and
    150 in "$150K+". Missing or non-numeric income yields ``None``; the
    JavaScript dashboards put null in "<$50K" and undefined or non-numeric
    values in "$150K+", which would inflate those brackets.
    """
    number = as_number(income)
    if number is None:
        return None
    for upper, label in zip(_BRACKET_UPPER_BOUNDS, INCOME_BRACKETS):
        if number < upper:
            return label
    return INCOME_BRACKETS[-1]


def add_income_brackets(
    data: Iterable[Record],
    income_key: str = INCOME_KEY,
) -> list[dict[str, Any]]:
    """Return copies of the records with an `income_bracket` field added.

    Input records are left untouched.
    """
    return [{**record, BRACKET_KEY: get_income_bracket(record.get(income_key))} for record in data]


def calculate_risk_ratio(rate1: Any, rate2: Any) -> str:
    """Return ``rate1 / rate2`` as a 2-decimal display string.

    Ties round away from zero ("1.125" -> "1.13"). "N/A" is returned when
    `rate2` is zero or either rate is missing; the JavaScript dashboards
    rendered a missing `rate1` as "0.00" and a missing `rate2` as "Infinity".
    """
    numerator = as_number(rate1)
    denominator = as_number(rate2)
    if numerator is None or denominator is None or denominator == 0:
        return NOT_AVAILABLE
    return to_fixed(numerator / denominator, 2)


def summarize_denials(records: Sequence[Record], value_key: str = DENIED_KEY) -> dict[str, Any]:
    """Return ``{"total", "denied", "denial_rate"}`` for one group of records."""
    values = [r.get(value_key) for r in records]
    return {
        "total": len(records),
        "denied": total(values),
        "denial_rate": mean(values),
    }


def denial_rates_by(data: Iterable[Record], keys: Sequence[str]) -> Any:
    """Return denial summaries as a nested mapping keyed by each grouping field."""
    return rollup(data, summarize_denials, keys)


def denial_rates_by_race(data: Iterable[Record]) -> dict[Any, dict[str, Any]]:
    """Return ``{race_ethnicity: {"total", "denied", "denial_rate"}}``."""
    return denial_rates_by(data, [RACE_KEY])


def denial_rates_by_race_and_income(data: Iterable[Record]) -> dict[Any, dict[Any, dict[str, Any]]]:
    """Return ``{race_ethnicity: {income_bracket: summary}}``.

    Income brackets are derived from `income_1000s` first.
    """
    return denial_rates_by(add_income_brackets(data), [RACE_KEY, BRACKET_KEY])


def denial_rate_table(data: Iterable[Record], keys: Sequence[str]) -> list[dict[str, Any]]:
    """Return the denial summaries as flat records, one per observed key tuple."""
    return flatten_rollup(denial_rates_by(data, keys), keys)


def risk_ratios(rates: Mapping[Any, Mapping[str, Any]], reference: Any) -> dict[Any, str]:
    """Return each group's risk ratio against the `reference` group's denial rate.

    Args:
        rates: Mapping as returned by `denial_rates_by_race`.
        reference: Key of the reference group. When it is absent every
            ratio is "N/A".
    """
    reference_rate = rates.get(reference, {}).get("denial_rate")
    return {
        group: calculate_risk_ratio(summary.get("denial_rate"), reference_rate)
        for group, summary in rates.items()
    }
