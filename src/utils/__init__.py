"""Blob Cost Projection - Shared utilities."""

import math
from typing import Any

# Upper bound for coerced amounts; a product of six of them stays finite
MAX_AMOUNT = 1e40


def coerce_number(
    value: Any, default: float, minimum: float = 0.0, maximum: float = MAX_AMOUNT
) -> float:
    """Coerce a loosely typed value into a finite number.

    Missing, non-numeric and non-finite values fall back to ``default``;
    values outside ``minimum``..``maximum`` are clamped into that range.

    Args:
        value: Raw value (number, numeric string, None, ...)
        default: Value used when ``value`` cannot be read as a finite number
        minimum: Lower bound of the result
        maximum: Upper bound of the result

    Returns:
        Finite number between ``minimum`` and ``maximum``
    """
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return min(maximum, max(minimum, number))


def coerce_whole_number(value: Any, default: int, minimum: int = 0) -> int:
    """Coerce a loosely typed value into a floored integer.

    Args:
        value: Raw value
        default: Value used when ``value`` cannot be read as a finite number
        minimum: Lower bound of the result

    Returns:
        Integer no smaller than ``minimum`` and no larger than ``MAX_AMOUNT``
    """
    number = coerce_number(value, default=float(default), minimum=float(minimum))
    return max(minimum, math.floor(number))
