from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from bestsellers.domain.filters import FilterSet
from bestsellers.services.nyt.types import UNKNOWN_ERROR, UpstreamError, UpstreamResult

logger = logging.getLogger(__name__)

HISTORY_PATH = "/lists/best-sellers/history.json"


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return UNKNOWN_ERROR
    if not isinstance(body, dict):
        return UNKNOWN_ERROR

    err = body.get("error")
    if isinstance(err, str) and err.strip():
        return err

    # The NYT gateway reports auth/quota problems as {"fault": {"faultstring": ...}}
    fault = body.get("fault")
    if isinstance(fault, dict):
        fs = fault.get("faultstring")
        if isinstance(fs, str) and fs.strip():
            return fs

    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], str):
        return errors[0]

    return UNKNOWN_ERROR


class BestSellersClient:
    """Thin client for the NYT best-sellers history endpoint.

    Holds no per-request state, so the same FilterSet against the same
    upstream data always produces the same outcome.
    """

    name = "nyt"

    def __init__(self, *, api_key: str | None, base_url: str, http: httpx.Client):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.http = http

    def query_params(self, filters: FilterSet) -> list[tuple[str, str]]:
        offset = filters.offset if filters.offset is not None else 0
        candidates: list[tuple[str, Any]] = [
            ("api-key", self.api_key),
            ("author", filters.author),
            ("title", filters.title),
            ("offset", offset),
            ("isbn", filters.isbn_param),
        ]
        return [(k, str(v)) for k, v in candidates if v is not None and v != ""]

    def build_query(self, filters: FilterSet) -> str:
        # The isbn list separator has to reach the API as a literal ';'.
        parts = []
        for key, value in self.query_params(filters):
            safe = ";" if key == "isbn" else ""
            parts.append(f"{quote(key, safe='')}={quote(value, safe=safe)}")
        return "&".join(parts)

    def history_url(self, filters: FilterSet) -> str:
        return f"{self.base_url}{HISTORY_PATH}?{self.build_query(filters)}"

    def get_history(self, filters: FilterSet) -> UpstreamResult | UpstreamError:
        url = self.history_url(filters)
        logger.debug(
            "NYT history request",
            extra={"params": [k for k, _ in self.query_params(filters) if k != "api-key"]},
        )

        try:
            resp = self.http.get(url)
        except httpx.HTTPError as exc:
            logger.warning("NYT history request failed: %s", exc.__class__.__name__)
            return UpstreamError(message=str(exc) or UNKNOWN_ERROR, status_code=500)

        if not resp.is_success:
            message = _error_message(resp)
            status_code = resp.status_code if resp.status_code >= 400 else 500
            logger.warning(
                "NYT history request returned %s: %s", resp.status_code, message
            )
            return UpstreamError(message=message, status_code=status_code)

        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            logger.warning("NYT history response was not a JSON object")
            return UpstreamError(
                message="Invalid JSON response from upstream", status_code=500
            )

        return UpstreamResult(payload=payload)
