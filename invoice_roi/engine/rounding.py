"""Rounding helpers for reported figures.

Values are rounded half up toward positive infinity, so -2.5 becomes -2.
Non-finite values (inf, nan) pass through unchanged.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int | float:
    """Round to the nearest whole number, ties toward +infinity."""
    if not math.isfinite(value):
        return value
    floor = math.floor(value)
    if value - floor >= 0.5:
        floor += 1
    return floor


def round_whole(value: float) -> int | float:
    """Round a currency amount to whole units.

    Returns an int for finite values and the original float otherwise.
    """
    rounded = round_half_up(value)
    if not math.isfinite(rounded):
        return rounded
    return int(rounded)


def round_to(value: float, places: int) -> float:
    """Round to ``places`` decimals by scaling, rounding, and scaling back."""
    scale = 10**places
    return round_half_up(value * scale) / scale


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE 754 semantics instead of raising on zero."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        # sign of zero matters: x / -0.0 flips the result
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator
