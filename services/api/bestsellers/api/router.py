from __future__ import annotations

from bestsellers.api.routes.best_sellers import router as best_sellers_router
from bestsellers.api.routes.health import router as health_router
from fastapi import APIRouter

api_router = APIRouter()

# Keep this list in the order you want routes registered.
for _router in (health_router, best_sellers_router):
    api_router.include_router(_router)
