"""Immutable result structures returned by the ROI calculator."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class CostBreakdown:
    """Monthly cost components, each rounded to whole currency units."""

    manual_labor_cost: Number
    automation_cost: Number
    monthly_net_savings: Number


@dataclass(frozen=True)
class CalculationResult:
    """Rounded financial projection for one input set.

    payback_months and roi_percentage may be inf, -inf or nan when the
    monthly savings or the implementation cost are zero. Those values are
    results, not errors.
    """

    monthly_savings: Number
    payback_months: float
    roi_percentage: float
    cumulative_savings: Number
    net_savings: Number
    labor_cost_saved: Number
    error_savings: Number
    breakdown: CostBreakdown

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON. Non-finite numbers become None."""
        return finite_or_none(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalculationResult:
        """Rebuild from a serialized payload. None is read back as nan."""
        breakdown = data["breakdown"]
        return cls(
            monthly_savings=_number(data["monthly_savings"]),
            payback_months=_number(data["payback_months"]),
            roi_percentage=_number(data["roi_percentage"]),
            cumulative_savings=_number(data["cumulative_savings"]),
            net_savings=_number(data["net_savings"]),
            labor_cost_saved=_number(data["labor_cost_saved"]),
            error_savings=_number(data["error_savings"]),
            breakdown=CostBreakdown(
                manual_labor_cost=_number(breakdown["manual_labor_cost"]),
                automation_cost=_number(breakdown["automation_cost"]),
                monthly_net_savings=_number(breakdown["monthly_net_savings"]),
            ),
        )


def _number(value: Optional[Number]) -> Number:
    return math.nan if value is None else value


def finite_or_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: finite_or_none(v) for k, v in value.items()}
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value
