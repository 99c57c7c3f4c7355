"""Display formatting for dashboard tables and chart labels.

Rounding matches the dashboard's JavaScript output: the exact binary value
is rounded with ties going away from zero, so 0.125 at 2 places is "0.13"
rather than Python's half-to-even "0.12".
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

import pandas as pd

NOT_AVAILABLE = "N/A"


def _missing(value: Any) -> bool:
    return value is None or bool(pd.isna(value))


def round_half_up(value: float, decimals: int) -> Decimal:
    """Round the exact value of `value` to `decimals` places, ties away from zero."""
    exact = Decimal(value) if isinstance(value, int) else Decimal(float(value))
    # enough precision for any finite double
    return exact.quantize(Decimal(10) ** -decimals, rounding=ROUND_HALF_UP, context=Context(prec=800))


def to_fixed(value: float, decimals: int) -> str:
    """Fixed-point string with `decimals` places, e.g. to_fixed(1.125, 2) -> "1.13"."""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return f"{round_half_up(value, decimals):f}"


def format_percent(value: float | None, decimals: int = 1) -> str:
    """Render a 0-1 fraction as a percentage, e.g. 0.255 -> "25.5%"."""
    if _missing(value):
        return NOT_AVAILABLE
    return to_fixed(value * 100, decimals) + "%"


def format_currency(value: float | None) -> str:
    """Render a dollar amount with thousands separators, e.g. 1234.5 -> "$1,234.5".

    Up to three fraction digits are kept and trailing zeros are dropped.
    Infinite amounts render as "$∞" / "$-∞".
    """
    if _missing(value):
        return NOT_AVAILABLE
    if math.isinf(value):
        return "$∞" if value > 0 else "$-∞"
    text = f"{round_half_up(value, 3):,f}"
    return "$" + text.rstrip("0").rstrip(".")
