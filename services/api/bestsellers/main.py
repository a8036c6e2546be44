from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from bestsellers.api.responses import validation_response
from bestsellers.api.router import api_router
from bestsellers.core.config import Settings, get_settings
from bestsellers.core.logging import configure_logging
from bestsellers.core.otel import init_otel
from bestsellers.middleware.request_id import RequestIdMiddleware
from bestsellers.services.nyt.client import BestSellersClient
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


def _body_error_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON bodies get the same 422 envelope as filter errors.
    messages = [str(e.get("msg", "Invalid request body")) for e in exc.errors()]
    return validation_response({"body": messages or ["Invalid request body"]})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if not settings.nyt_api_key:
        logger.warning("NYT_API_KEY is not set; upstream requests will be rejected")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http = httpx.Client(headers={"User-Agent": settings.user_agent})
        app.state.bestsellers_client = BestSellersClient(
            api_key=settings.nyt_api_key,
            base_url=settings.nyt_base_url,
            http=http,
        )
        try:
            yield
        finally:
            http.close()

    app = FastAPI(title=settings.api_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_exception_handler(RequestValidationError, _body_error_handler)

    app.include_router(api_router)

    init_otel(app, settings)
    return app


app = create_app()
