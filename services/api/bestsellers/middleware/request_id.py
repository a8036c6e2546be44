import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, echo it back and log one access line."""

    header = "X-Request-Id"

    async def dispatch(self, request, call_next):
        req_id = request.headers.get(self.header) or uuid.uuid4().hex
        request.state.request_id = req_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[self.header] = req_id
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={"request_id": req_id},
        )
        return response
