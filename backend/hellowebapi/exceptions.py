"""
HelloWebAPI Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the few error scenarios the API has.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the product service, the body binder, and middleware.

Exception Hierarchy:
    HelloWebAPIError (base)
    ├── NotFoundError            → 404 Not Found
    ├── BindingError             → 400 Bad Request
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, Optional, Sequence

from starlette.requests import Request
from starlette.responses import JSONResponse

from hellowebapi.middleware.request_id import current_request_id


class HelloWebAPIError(Exception):
    """
    Base exception for all HelloWebAPI application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional detail, returned as `details` where the handler allows
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(HelloWebAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/Products/{id} with an id absent from the catalog.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class BindingError(HelloWebAPIError):
    """
    Raised when request data cannot be bound to a handler's parameters.

    When:    A route declares more than one whole-body parameter, or a simple
             parameter (query/route) cannot be converted to its declared type.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "binding_error",
            "message": "Can't bind multiple parameters ('productId' and 'name') "
                       "to the request's content.",
            "details": {"parameters": ["productId", "name"]}
        }
    """

    def __init__(
        self,
        message: str = "The request could not be bound to the action parameters",
        parameters: Optional[Sequence[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if parameters:
            ctx["parameters"] = list(parameters)
        super().__init__(message=message, context=ctx)
        self.parameters = list(parameters or [])


class RateLimitExceededError(HelloWebAPIError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Uniform error body: {error, message, details?, request_id}.

    Used by the exception handlers in main.py and by middleware that must
    answer before the routes (and their handlers) are reached.
    """
    content: Dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    content["request_id"] = current_request_id(request)
    return JSONResponse(status_code=status_code, content=content, headers=headers)
