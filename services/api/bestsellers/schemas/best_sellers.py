from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BestSellersFiltersIn(BaseModel):
    """Documented request shape. Validation itself happens in domain.filters."""

    author: str | None = None
    title: str | None = None
    isbn: str | list[str] | None = Field(
        default=None,
        description="One ISBN, several joined by ';' or ',', or an array of ISBNs",
        examples=["9780593135204;0593135202"],
    )
    offset: int | None = Field(
        default=None, ge=0, multiple_of=20, description="Page offset, steps of 20"
    )


class BestSellersHistoryOut(BaseModel):
    """Upstream body, relayed as-is; unknown keys are allowed."""

    model_config = ConfigDict(extra="allow")

    status: str
    copyright: str | None = None
    num_results: int
    results: list[dict[str, Any]]


class ValidationErrorOut(BaseModel):
    message: str = "The given data was invalid."
    errors: dict[str, list[str]]


class ErrorOut(BaseModel):
    error: str


class HealthOut(BaseModel):
    status: str
