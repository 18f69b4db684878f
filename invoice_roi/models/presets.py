"""Sample input sets offered as starting points in the calculator form."""

from enum import Enum

from .inputs import CalculationInput


class PresetName(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    ENTERPRISE = "enterprise"


PRESET_SCENARIOS: dict[PresetName, CalculationInput] = {
    PresetName.SMALL: CalculationInput(
        scenario_name="Small Business",
        monthly_invoice_volume=500,
        num_ap_staff=1,
        avg_hours_per_invoice=0.25,
        hourly_wage=25,
        error_rate_manual=0.5,
        error_cost=100,
        time_horizon_months=36,
        one_time_implementation_cost=20_000,
    ),
    PresetName.MEDIUM: CalculationInput(
        scenario_name="Medium Business",
        monthly_invoice_volume=2000,
        num_ap_staff=3,
        avg_hours_per_invoice=0.17,
        hourly_wage=30,
        error_rate_manual=0.5,
        error_cost=100,
        time_horizon_months=36,
        one_time_implementation_cost=50_000,
    ),
    PresetName.ENTERPRISE: CalculationInput(
        scenario_name="Enterprise",
        monthly_invoice_volume=10_000,
        num_ap_staff=10,
        avg_hours_per_invoice=0.1,
        hourly_wage=35,
        error_rate_manual=0.5,
        error_cost=100,
        time_horizon_months=36,
        one_time_implementation_cost=100_000,
    ),
}
