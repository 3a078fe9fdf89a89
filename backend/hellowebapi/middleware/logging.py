"""
HelloWebAPI Backend — Access Log Middleware
============================================

What:  One access-log line per request on the `hellowebapi.access` logger.
How:   After the response is produced, logs the matched route template,
       the concrete path, status, negotiated Content-Type and duration.

Example line:
    GET /api/Products/{product_id:signed_int} (/api/Products/999) → 404 application/json 0.8ms [1f0c2a9b]

Levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    /health is not logged. Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hellowebapi.middleware.request_id import current_request_id

logger = logging.getLogger("hellowebapi.access")

SKIPPED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """Path template of the route that handled the request; "-" when none matched."""
    route = request.scope.get("route")
    return getattr(route, "path", "-")


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        template = route_template(request)
        media_type = response.headers.get("content-type", "-").split(";", 1)[0]
        rid = current_request_id(request)

        logger.log(
            level_for_status(response.status_code),
            "%s %s (%s) → %d %s %.1fms [%s]",
            request.method,
            template,
            request.url.path,
            response.status_code,
            media_type,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": template,
                "path": request.url.path,
                "status": response.status_code,
                "media_type": media_type,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
