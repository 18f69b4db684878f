"""FastAPI application for the invoice automation ROI simulator."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers

from invoice_roi import __version__
from invoice_roi.config.settings import get_settings
from invoice_roi.engine import compute, project_cumulative_savings
from invoice_roi.hooks.audit_hooks import log_calculation
from invoice_roi.models import PRESET_SCENARIOS, EmailCapture, Scenario
from invoice_roi.reports import build_report_pdf, report_filename
from invoice_roi.storage import (
    ScenarioNotFoundError,
    ScenarioStore,
    ScenarioStoreError,
    build_scenario_store,
)
from invoice_roi.validation import (
    CalculationRequest,
    InvalidRequestError,
    ProjectionRequest,
    ReportRequest,
    RequestT,
    parse_request,
)

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_JSON_MESSAGE = "Invalid JSON body"


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware that answers preflight requests without a body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            k: v
            for k, v in response.headers.items()
            if k not in ("content-length", "content-type")
        }
        return Response(status_code=response.status_code, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.scenario_store.close()


app = FastAPI(title="Invoice ROI API", version=__version__, lifespan=lifespan)

app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.scenario_store = build_scenario_store(settings)


def _success(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse({"success": True, "data": data}, status_code=status_code)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


def _store(request: Request) -> ScenarioStore:
    return request.app.state.scenario_store


async def _read_body(request: Request, model: type[RequestT]) -> RequestT:
    try:
        payload = await request.json()
    except ValueError as e:
        logger.info("Rejected malformed JSON body: %s", e)
        raise InvalidRequestError(INVALID_JSON_MESSAGE, []) from e
    try:
        return parse_request(model, payload)
    except InvalidRequestError as e:
        logger.info("Rejected %s body (%s): %s", request.url.path, e, e.fields)
        raise


@app.post("/api/calculate-roi")
async def calculate_roi(request: Request):
    """Compute the savings projection for one input set."""
    try:
        inputs = (await _read_body(request, CalculationRequest)).to_input()
        result = compute(inputs)
        log_calculation(str(uuid4()), "calculate-roi", inputs, result)
        return _success(result.to_dict())
    except InvalidRequestError as e:
        return _error(str(e), e.status_code)
    except Exception:
        logger.exception("Error in calculate-roi")
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@app.post("/api/projection")
async def projection(request: Request):
    """Cumulative net savings per month over the time horizon."""
    try:
        inputs = (await _read_body(request, ProjectionRequest)).to_input()
        result = compute(inputs)
        series = project_cumulative_savings(inputs, result)
        return _success([p.to_dict() for p in series])
    except InvalidRequestError as e:
        return _error(str(e), e.status_code)
    except Exception:
        logger.exception("Error in projection")
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@app.get("/api/presets")
async def presets():
    """Sample input sets for the calculator form."""
    return _success({name.value: preset.to_dict() for name, preset in PRESET_SCENARIOS.items()})


@app.post("/api/scenarios", status_code=201)
async def save_scenario(request: Request):
    """Compute and persist a named scenario."""
    try:
        inputs = (await _read_body(request, CalculationRequest)).to_input()
        result = compute(inputs)
        name = (inputs.scenario_name or "").strip() or (
            f"Scenario {datetime.now(tz=timezone.utc).date().isoformat()}"
        )
        scenario = await _store(request).insert(
            Scenario(name=name, inputs=inputs, results=result)
        )
        log_calculation(scenario.id, "scenarios", inputs, result)
        logger.info("Saved scenario %s (%s)", scenario.id, scenario.name)
        return _success(scenario.to_dict(), status_code=201)
    except InvalidRequestError as e:
        return _error(str(e), e.status_code)
    except ScenarioStoreError as e:
        logger.warning("Failed to save scenario: %s", e)
        return _error(f"Failed to save scenario: {e}", 502)
    except Exception:
        logger.exception("Error saving scenario")
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@app.get("/api/scenarios")
async def list_scenarios(request: Request):
    """All saved scenarios, newest first."""
    try:
        scenarios = await _store(request).list()
        return _success([s.to_dict() for s in scenarios])
    except ScenarioStoreError as e:
        logger.warning("Failed to load scenarios: %s", e)
        return _error(f"Failed to load scenarios: {e}", 502)
    except Exception:
        logger.exception("Error listing scenarios")
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@app.delete("/api/scenarios/{scenario_id}")
async def delete_scenario(scenario_id: str, request: Request):
    try:
        await _store(request).delete(scenario_id)
    except ScenarioNotFoundError as e:
        return _error(str(e), 404)
    except ScenarioStoreError as e:
        logger.warning("Failed to delete scenario %s: %s", scenario_id, e)
        return _error(f"Failed to delete scenario: {e}", 502)
    except Exception:
        logger.exception("Error deleting scenario %s", scenario_id)
        return _error(INTERNAL_ERROR_MESSAGE, 500)
    logger.info("Deleted scenario %s", scenario_id)
    return _success({"id": scenario_id})


@app.post("/api/reports")
async def download_report(request: Request):
    """Record the contact email and return the PDF report."""
    try:
        body = await _read_body(request, ReportRequest)
        inputs = body.inputs.to_input()

        await _store(request).record_email_capture(
            EmailCapture(email=body.email, scenario_name=inputs.scenario_name)
        )
        result = compute(inputs)
        log_calculation(str(uuid4()), "reports", inputs, result)
        pdf_bytes = build_report_pdf(inputs, result, email=body.email, brand=settings.report_brand)
    except InvalidRequestError as e:
        return _error(str(e), e.status_code)
    except ScenarioStoreError as e:
        logger.warning("Failed to record email capture: %s", e)
        return _error(f"Failed to generate report: {e}", 502)
    except Exception:
        logger.exception("Error generating report")
        return _error(INTERNAL_ERROR_MESSAGE, 500)

    # header values must be latin-1
    filename = report_filename(inputs.scenario_name).encode("ascii", "replace").decode("ascii")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
