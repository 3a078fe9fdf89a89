"""
HelloWebAPI Backend — Route Table Registration
===============================================

What:  Registers an explicit table of (method, path, handler) entries on an
       APIRouter, in table order.
How:   Each RouteEntry becomes one `router.add_api_route(...)` call. Before
       registering, the handler's signature is checked for whole-body
       parameters; a handler with more than one gets a route-level dependency
       that fails binding with 400 on every request.

Ordering:
    Starlette matches routes in registration order, so literal paths
    (`/Products/getall`) are listed before parameterized ones
    (`/Products/{product_id:signed_int}`). The `signed_int` convertor only
    matches an optional minus sign followed by digits, so other segments
    never reach the id routes.

Case:
    Resource paths match case-insensitively (`/api/products` is
    `/api/Products`). ignore_path_case() is applied to the app's routes after
    include_router(), which rebuilds each route's regex from its path.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Type

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from fastapi.routing import APIRoute
from starlette.convertors import Convertor, register_url_convertor

from hellowebapi.binding import body_parameter_guard

logger = logging.getLogger(__name__)


class SignedIntegerConvertor(Convertor[int]):
    """Like Starlette's `int`, but accepts negative values (`/Products/-1`)."""

    regex = "-?[0-9]+"

    def convert(self, value: str) -> int:
        return int(value)

    def to_string(self, value: int) -> str:
        return str(int(value))


register_url_convertor("signed_int", SignedIntegerConvertor())


@dataclass(frozen=True)
class RouteEntry:
    method: str
    path: str
    endpoint: Callable[..., Any]
    status_code: Optional[int] = None
    summary: Optional[str] = None
    response_model: Any = None
    response_class: Optional[Type[Response]] = None
    responses: Dict[int, Dict[str, Any]] = field(default_factory=dict)


def register_routes(router: APIRouter, table: Iterable[RouteEntry]) -> None:
    for entry in table:
        dependencies = []
        guard = body_parameter_guard(entry.endpoint)
        if guard is not None:
            dependencies.append(Depends(guard))

        options: Dict[str, Any] = {}
        if entry.response_class is not None:
            options["response_class"] = entry.response_class

        router.add_api_route(
            entry.path,
            entry.endpoint,
            methods=[entry.method],
            status_code=entry.status_code,
            summary=entry.summary,
            response_model=entry.response_model,
            responses=entry.responses or None,
            dependencies=dependencies,
            **options,
        )
        logger.debug("Registered %s %s%s -> %s", entry.method, router.prefix, entry.path, entry.endpoint.__name__)


def ignore_path_case(routes: Iterable[Any], prefix: str) -> int:
    """
    Recompile the path regex of every API route under `prefix` with IGNORECASE.

    Returns the number of routes changed.
    """
    changed = 0
    for route in routes:
        if isinstance(route, APIRoute) and route.path.startswith(prefix):
            route.path_regex = re.compile(route.path_regex.pattern, re.IGNORECASE)
            changed += 1
    logger.debug("Case-insensitive matching enabled for %d routes under %s", changed, prefix)
    return changed
