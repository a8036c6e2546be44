from __future__ import annotations

import logging
from typing import Any

from bestsellers.api.deps import get_bestsellers_client
from bestsellers.api.responses import to_response, validation_response
from bestsellers.domain.filters import ValidationError, validate_filters
from bestsellers.schemas.best_sellers import (
    BestSellersFiltersIn,
    BestSellersHistoryOut,
    ErrorOut,
    ValidationErrorOut,
)
from bestsellers.services.nyt.provider import BestSellersSource
from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import QueryParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["best-sellers"])

_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"model": BestSellersHistoryOut, "description": "Upstream payload, unchanged"},
    422: {"model": ValidationErrorOut, "description": "Invalid filters"},
    500: {"model": ErrorOut, "description": "Upstream failure (status mirrors upstream)"},
}


def raw_filters_from_query(params: QueryParams) -> dict[str, Any]:
    """Flatten query params; only isbn keeps repeats (``isbn=a&isbn=b`` or ``isbn[]=a``).

    ``isbn`` and ``isbn[]`` values are merged in the order they appear.
    """
    raw: dict[str, Any] = {}
    isbns: list[str] = []
    bracketed = False
    for key, value in params.multi_items():
        if key in ("isbn", "isbn[]"):
            isbns.append(value)
            bracketed = bracketed or key == "isbn[]"
        else:
            raw[key] = value

    if len(isbns) == 1 and not bracketed:
        raw["isbn"] = isbns[0]
    elif isbns:
        raw["isbn"] = isbns
    return raw


def _history(raw: dict[str, Any], client: BestSellersSource) -> JSONResponse:
    filters = validate_filters(raw)
    if isinstance(filters, ValidationError):
        logger.debug("rejected best-sellers filters: %s", sorted(filters.errors))
        return to_response(filters)
    return to_response(client.get_history(filters))


@router.get("/best-sellers", responses=_RESPONSES)
def best_sellers_history(
    request: Request,
    client: BestSellersSource = Depends(get_bestsellers_client),
):
    return _history(raw_filters_from_query(request.query_params), client)


@router.post(
    "/best-sellers",
    responses=_RESPONSES,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": BestSellersFiltersIn.model_json_schema()}
            }
        }
    },
)
def best_sellers_history_post(
    payload: Any = Body(default=None),
    client: BestSellersSource = Depends(get_bestsellers_client),
):
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return validation_response({"body": ["The request body must be a JSON object."]})
    return _history(payload, client)
