"""Audit hooks: one log entry per calculation served."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from invoice_roi.engine.result import CalculationResult
from invoice_roi.models.inputs import CalculationInput

logger = logging.getLogger(__name__)


def log_calculation(
    request_id: str,
    endpoint: str,
    inputs: CalculationInput,
    result: CalculationResult | None = None,
) -> dict[str, Any]:
    """Record a calculation in the audit log.

    Only caller-visible values are recorded. The entry is returned for
    callers and tests that inspect it; the HTTP handlers only log it.
    """
    entry = {
        "request_id": request_id,
        "endpoint": endpoint,
        "scenario_name": inputs.scenario_name,
        "monthly_invoice_volume": inputs.monthly_invoice_volume,
        "time_horizon_months": inputs.time_horizon_months,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "monthly_savings": result.monthly_savings if result is not None else None,
        "roi_percentage": result.roi_percentage if result is not None else None,
    }
    logger.info("Calculation audit: %s → %s", endpoint, request_id)
    return entry
