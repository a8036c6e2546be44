from __future__ import annotations

from bestsellers.domain.filters import ValidationError
from bestsellers.schemas.best_sellers import ErrorOut, ValidationErrorOut
from bestsellers.services.nyt.types import UpstreamError, UpstreamResult
from fastapi.responses import JSONResponse

Outcome = UpstreamResult | UpstreamError | ValidationError


def validation_response(errors: dict[str, list[str]]) -> JSONResponse:
    body = ValidationErrorOut(errors=errors)
    return JSONResponse(status_code=422, content=body.model_dump())


def to_response(outcome: Outcome) -> JSONResponse:
    if isinstance(outcome, UpstreamResult):
        return JSONResponse(status_code=200, content=outcome.payload)
    if isinstance(outcome, ValidationError):
        return validation_response(outcome.as_dict())
    if isinstance(outcome, UpstreamError):
        return JSONResponse(
            status_code=outcome.status_code,
            content=ErrorOut(error=outcome.message).model_dump(),
        )
    raise TypeError(f"Unsupported outcome: {type(outcome).__name__}")
