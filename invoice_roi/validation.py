"""Request bodies for the calculator endpoints.

The engine assumes every field is present and numeric; these models run
before it is invoked so that no partial computation ever happens.
"""

from __future__ import annotations

import math
from typing import Any, Optional, TypeVar, Union

from pydantic import (
    BaseModel,
    EmailStr,
    StrictInt,
    ValidationError,
    confloat,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from invoice_roi.models.inputs import REQUIRED_FIELDS, CalculationInput

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_EMAIL_MESSAGE = "Please enter a valid email address"

# Longest horizon the calculator form offers; bounds the projection series.
MAX_PROJECTION_MONTHS = 120
HORIZON_MESSAGE = (
    f"time_horizon_months must be a whole number of months between 1 and {MAX_PROJECTION_MONTHS}"
)

# Zero is a legitimate value for these two; every other field must be truthy.
ZERO_ALLOWED_FIELDS = frozenset({"error_rate_manual", "one_time_implementation_cost"})

FiniteNumber = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]


class InvalidRequestError(ValueError):
    """A request body was rejected before reaching the engine."""

    def __init__(self, message: str, fields: list[str], status_code: int = 400):
        super().__init__(message)
        self.fields = fields
        self.status_code = status_code


def _is_absent(name: str, value: Any) -> bool:
    if value is None:
        return True
    return not value and name not in ZERO_ALLOWED_FIELDS


class CalculationRequest(BaseModel):
    """Body of a calculation: the business parameters of the manual process."""

    monthly_invoice_volume: FiniteNumber
    num_ap_staff: FiniteNumber
    avg_hours_per_invoice: FiniteNumber
    hourly_wage: FiniteNumber
    error_rate_manual: FiniteNumber
    error_cost: FiniteNumber
    time_horizon_months: FiniteNumber
    one_time_implementation_cost: FiniteNumber
    scenario_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def required_fields_present(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise PydanticCustomError(
                "missing_fields", MISSING_FIELDS_MESSAGE, {"missing": list(REQUIRED_FIELDS)}
            )
        missing = [name for name in REQUIRED_FIELDS if _is_absent(name, data.get(name))]
        if missing:
            raise PydanticCustomError("missing_fields", MISSING_FIELDS_MESSAGE, {"missing": missing})
        return data

    @field_validator("scenario_name", mode="before")
    @classmethod
    def label_must_be_text(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator(*REQUIRED_FIELDS)
    @classmethod
    def as_double(cls, v: Union[int, float]) -> float:
        # the engine works on IEEE doubles; exact big ints would overflow mid-formula
        try:
            return float(v)
        except OverflowError:
            raise PydanticCustomError("number_too_large", "Number is too large") from None

    def to_input(self) -> CalculationInput:
        return CalculationInput(**self.model_dump())


class ProjectionRequest(CalculationRequest):
    """Calculation body whose horizon is also the length of a monthly series."""

    @field_validator("time_horizon_months")
    @classmethod
    def whole_months_within_limit(cls, v: Union[int, float]) -> Union[int, float]:
        if v <= 0 or v > MAX_PROJECTION_MONTHS or v != math.floor(v):
            raise PydanticCustomError("projection_horizon", HORIZON_MESSAGE)
        return v


class ReportRequest(BaseModel):
    email: EmailStr
    inputs: CalculationRequest


RequestT = TypeVar("RequestT", bound=BaseModel)


def _to_invalid_request(error: ValidationError) -> InvalidRequestError:
    details = error.errors()
    for detail in details:
        if detail["loc"][:1] == ("email",):
            return InvalidRequestError(INVALID_EMAIL_MESSAGE, ["email"], status_code=422)
    for detail in details:
        if detail["type"] == "projection_horizon":
            return InvalidRequestError(HORIZON_MESSAGE, ["time_horizon_months"])

    fields: list[str] = []
    for detail in details:
        # union members append their own tag, e.g. ("hourly_wage", "int")
        loc = detail["loc"][1:] if detail["loc"][:1] == ("inputs",) else detail["loc"]
        if detail["type"] == "missing_fields":
            fields.extend(detail["ctx"]["missing"])
        elif detail["type"] == "missing" and not loc:
            fields.extend(REQUIRED_FIELDS)
        elif loc:
            fields.append(str(loc[0]))
    return InvalidRequestError(MISSING_FIELDS_MESSAGE, list(dict.fromkeys(fields)))


def parse_request(model: type[RequestT], payload: Any) -> RequestT:
    """Validate a decoded JSON body against ``model``.

    Raises:
        InvalidRequestError: carrying the client-facing message, the
            offending field names and the HTTP status to answer with.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise _to_invalid_request(e) from e


def parse_calculation_input(payload: Any) -> CalculationInput:
    """Validate a calculation body and build the engine input."""
    return parse_request(CalculationRequest, payload).to_input()
