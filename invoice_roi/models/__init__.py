from .inputs import CalculationInput, REQUIRED_FIELDS
from .presets import PRESET_SCENARIOS, PresetName
from .scenario import EmailCapture, Scenario

__all__ = [
    "CalculationInput",
    "REQUIRED_FIELDS",
    "PRESET_SCENARIOS",
    "PresetName",
    "Scenario",
    "EmailCapture",
]
