"""Automation cost model constants.

These values are applied server-side only. They must never be serialized
into a response payload or rendered into a report.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AutomationConstants(BaseModel):
    """Fixed parameters of the automated invoice process."""

    model_config = ConfigDict(frozen=True)

    automated_cost_per_invoice: float = Field(default=0.20, ge=0)  # currency units per invoice
    error_rate_auto: float = Field(default=0.1, ge=0, le=100)  # percent, same unit as error_rate_manual
    min_roi_boost_factor: float = Field(default=1.1, gt=0)  # multiplier applied to monthly savings


AUTOMATION_CONSTANTS = AutomationConstants()
