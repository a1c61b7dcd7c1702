"""
Utility helpers for formatting numeric values, naira amounts, and percentages.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Tuple

NAIRA = "₦"

SCALE_FACTORS = [
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if numeric != numeric:
        return None
    return numeric


def format_number(value: Any, decimals: int = 0) -> str:
    numeric = _to_float(value)
    if numeric is None:
        return "–"
    return f"{numeric:,.{decimals}f}"


def _scale_value(value: float) -> Tuple[float, str]:
    for factor, suffix in SCALE_FACTORS:
        if abs(value) >= factor:
            return value / factor, suffix
    return value, ""


def format_naira(value: Any, decimals: int = 0, compact: bool = True) -> str:
    """₦ amount; compact mode scales to K/M/B/T with one decimal once scaled."""
    if isinstance(value, Decimal) and not value.is_finite():
        return "–"
    numeric = _to_float(value)
    if numeric is None:
        return "–"

    suffix = ""
    display_value = numeric
    if compact:
        display_value, suffix = _scale_value(numeric)
        if suffix:
            decimals = max(decimals, 1)
    return f"{NAIRA}{display_value:,.{decimals}f}{suffix}"


def format_percent(value: Any, decimals: int = 0) -> str:
    numeric = _to_float(value)
    if numeric is None:
        return "–"
    return f"{numeric:.{decimals}f}%"
