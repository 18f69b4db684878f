"""Display formatting for report values.

Non-finite or missing numbers render as N/A; a zero implementation cost
legitimately produces an infinite ROI and that must not break a report.
"""

from __future__ import annotations

import math
from typing import Optional, Union

NOT_AVAILABLE = "N/A"

Number = Union[int, float]


def _is_displayable(value: Optional[Number]) -> bool:
    return value is not None and math.isfinite(value)


def _trim_fraction(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_currency(value: Optional[Number]) -> str:
    """USD with thousands separators and at most two decimals: $34,100, -$1,200.5."""
    if not _is_displayable(value):
        return NOT_AVAILABLE
    text = _trim_fraction(f"{abs(value):,.2f}")
    sign = "-" if value < 0 and text != "0" else ""
    return f"{sign}${text}"


def format_count(value: Optional[Number]) -> str:
    """Group digits of a count: 2000 -> 2,000."""
    if not _is_displayable(value):
        return NOT_AVAILABLE
    return _trim_fraction(f"{value:,.3f}")


def format_number(value: Optional[Number]) -> str:
    """Plain number without a trailing .0 for whole values."""
    if not _is_displayable(value):
        return NOT_AVAILABLE
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_percent(value: Optional[Number]) -> str:
    if not _is_displayable(value):
        return NOT_AVAILABLE
    return f"{format_number(value)}%"
