from .result import CalculationResult, CostBreakdown
from .calculator import ROICalculator, compute
from .projection import MonthProjection, project_cumulative_savings

__all__ = [
    "CalculationResult",
    "CostBreakdown",
    "ROICalculator",
    "compute",
    "MonthProjection",
    "project_cumulative_savings",
]
