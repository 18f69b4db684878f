from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

# Every field the engine reads. scenario_name is a label only.
REQUIRED_FIELDS: tuple[str, ...] = (
    "monthly_invoice_volume",
    "num_ap_staff",
    "avg_hours_per_invoice",
    "hourly_wage",
    "error_rate_manual",
    "error_cost",
    "time_horizon_months",
    "one_time_implementation_cost",
)


@dataclass(frozen=True)
class CalculationInput:
    """Business parameters describing the current manual AP process."""

    monthly_invoice_volume: float
    num_ap_staff: float
    avg_hours_per_invoice: float
    hourly_wage: float
    error_rate_manual: float  # percent, 0-100
    error_cost: float
    time_horizon_months: float
    one_time_implementation_cost: float
    scenario_name: Optional[str] = None

    def __post_init__(self) -> None:
        # all arithmetic is double precision, ints included
        for name in REQUIRED_FIELDS:
            object.__setattr__(self, name, float(getattr(self, name)))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["scenario_name"] is None:
            del data["scenario_name"]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalculationInput:
        """Build from a mapping, ignoring keys that are not input fields."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
