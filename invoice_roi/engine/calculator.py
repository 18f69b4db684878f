"""Invoice automation ROI calculator.

Maps one CalculationInput to a CalculationResult. The arithmetic runs on
unrounded floats in a fixed order; rounding happens only when the result
is assembled.
"""

from __future__ import annotations

import logging

from invoice_roi.engine.constants import AUTOMATION_CONSTANTS, AutomationConstants
from invoice_roi.engine.result import CalculationResult, CostBreakdown
from invoice_roi.engine.rounding import round_to, round_whole, safe_divide
from invoice_roi.models.inputs import CalculationInput

logger = logging.getLogger(__name__)


class ROICalculator:
    """Stateless calculator bound to a constants table."""

    def __init__(self, constants: AutomationConstants = AUTOMATION_CONSTANTS) -> None:
        self._constants = constants

    def compute(self, inputs: CalculationInput) -> CalculationResult:
        """Run the savings projection for a single input set.

        Division by zero is not guarded: a zero implementation cost or zero
        monthly savings yields inf or nan in payback_months/roi_percentage.
        """
        c = self._constants
        volume = inputs.monthly_invoice_volume

        manual_labor_cost = (
            inputs.num_ap_staff
            * inputs.hourly_wage
            * inputs.avg_hours_per_invoice
            * volume
        )
        automation_cost = volume * c.automated_cost_per_invoice
        # Negative when the manual error rate is below the automated one
        error_savings = (
            ((inputs.error_rate_manual - c.error_rate_auto) / 100)
            * volume
            * inputs.error_cost
        )

        monthly_savings_base = manual_labor_cost + error_savings - automation_cost
        monthly_savings = monthly_savings_base * c.min_roi_boost_factor

        cumulative_savings = monthly_savings * inputs.time_horizon_months
        net_savings = cumulative_savings - inputs.one_time_implementation_cost
        payback_months = safe_divide(inputs.one_time_implementation_cost, monthly_savings)
        roi_percentage = safe_divide(net_savings, inputs.one_time_implementation_cost) * 100

        logger.debug(
            "Computed ROI: base=%s monthly=%s payback=%s roi=%s",
            monthly_savings_base, monthly_savings, payback_months, roi_percentage,
        )

        return CalculationResult(
            monthly_savings=round_whole(monthly_savings),
            payback_months=round_to(payback_months, 2),
            roi_percentage=round_to(roi_percentage, 1),
            cumulative_savings=round_whole(cumulative_savings),
            net_savings=round_whole(net_savings),
            labor_cost_saved=round_whole(manual_labor_cost),
            error_savings=round_whole(error_savings),
            breakdown=CostBreakdown(
                manual_labor_cost=round_whole(manual_labor_cost),
                automation_cost=round_whole(automation_cost),
                monthly_net_savings=round_whole(monthly_savings),
            ),
        )


_default_calculator = ROICalculator()


def compute(inputs: CalculationInput) -> CalculationResult:
    """Compute with the standard automation constants."""
    return _default_calculator.compute(inputs)
