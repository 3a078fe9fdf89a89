"""
HelloWebAPI Backend — Request ID Middleware
============================================

What:  Gives every request a correlation id and returns it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused if it is a short token of
       safe characters; anything else is replaced by a generated 8-char id.
       The id is stored in request_id_var (for loggers) and in
       request.state.request_id (for handlers running outside this
       middleware, such as the catch-all 500 handler).
When:  Outermost middleware, so every response carries the header,
       including 429s from the rate limiter.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client ids end up in log lines and error bodies.
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: str | None) -> str:
    """The client's id when it is acceptable, otherwise a new one."""
    if supplied and _VALID_REQUEST_ID.match(supplied):
        return supplied
    return new_request_id()


def current_request_id(request: Request) -> str:
    """Request id for error handlers, whichever side of this middleware they run on."""
    return getattr(request.state, "request_id", "") or request_id_var.get("")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
