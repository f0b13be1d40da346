#!/usr/bin/env python3
"""
Utility functions and helpers used across the estimator.
Numeric coercion for loosely-typed settings plus display formatting.
"""

import math
from typing import Any


def ensure_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce a settings value to a finite float.

    Args:
        value: Raw value from a configuration snapshot
        default: Value used when ``value`` is missing, not numeric, or NaN

    Returns:
        Float value or default
    """
    if value is None:
        return float(default)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)
    if math.isnan(number) or math.isinf(number):
        return float(default)
    return number


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if division by zero.

    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Default value if division by zero

    Returns:
        Division result or default
    """
    try:
        if denominator == 0:
            return default
        return numerator / denominator
    except (TypeError, ValueError):
        return default


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between minimum and maximum bounds."""
    return max(min_val, min(max_val, value))


def round_cents(amount: float) -> float:
    """Round a dollar amount to two decimals, half away from zero."""
    if not math.isfinite(amount):
        return amount
    if amount >= 0:
        return math.floor(amount * 100 + 0.5) / 100
    return -math.floor(-amount * 100 + 0.5) / 100


def round_up_to(value: float, increment: float) -> float:
    """Round value up to the next multiple of increment."""
    if increment <= 0 or not math.isfinite(value):
        return value
    return math.ceil(value / increment) * increment


def format_currency(amount: float, cents: bool = True) -> str:
    """
    Format amount as currency string.

    Args:
        amount: Amount to format
        cents: Whether to show two decimals

    Returns:
        Formatted currency string, e.g. ``-$1,234.50``
    """
    sign = "-" if amount < 0 else ""
    if cents:
        return f"{sign}${abs(amount):,.2f}"
    return f"{sign}${abs(amount):,.0f}"


def format_percentage(value: float, decimal_places: int = 1) -> str:
    """
    Format value as percentage string.

    Args:
        value: Value to format (0.15 = 15%)
        decimal_places: Number of decimal places

    Returns:
        Formatted percentage string
    """
    return f"{value*100:.{decimal_places}f}%"
