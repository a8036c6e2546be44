from __future__ import annotations

from bestsellers.services.nyt.provider import BestSellersSource
from fastapi import HTTPException, Request, status


def get_bestsellers_client(request: Request) -> BestSellersSource:
    client = getattr(request.app.state, "bestsellers_client", None)
    if client is None:
        # Only happens when the app is used without running its lifespan.
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Best-sellers client not initialised",
        )
    return client
