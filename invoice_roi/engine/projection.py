"""Month-by-month cumulative net savings, used by the savings chart."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from invoice_roi.engine.result import CalculationResult, finite_or_none
from invoice_roi.models.inputs import CalculationInput


@dataclass(frozen=True)
class MonthProjection:
    """Net position at the end of a given month (month 0 = go-live)."""

    month: int
    savings: float

    def to_dict(self) -> dict[str, Any]:
        return finite_or_none(asdict(self))


def project_cumulative_savings(
    inputs: CalculationInput,
    result: CalculationResult,
) -> list[MonthProjection]:
    """Project net savings over the horizon from the reported monthly figure.

    Uses the rounded monthly_savings of the result, so the series lines up
    with what the user sees rather than re-running the cost model.
    """
    monthly = float(result.monthly_savings)
    return [
        MonthProjection(
            month=month,
            savings=monthly * month - inputs.one_time_implementation_cost,
        )
        for month in range(int(inputs.time_horizon_months) + 1)
    ]
