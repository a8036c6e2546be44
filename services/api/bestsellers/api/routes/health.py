from __future__ import annotations

from bestsellers.schemas.best_sellers import HealthOut
from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut(status="ok")
