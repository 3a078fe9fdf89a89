"""
HelloWebAPI Backend — Product Route Handlers
=============================================

What:  The /api product resource: reads over the static catalog and write
       endpoints that accept, but do not store, their input.
How:   Handlers are plain async functions; PRODUCT_ROUTES maps verbs and
       paths to them and is registered on the router at import time.

Route Inventory:
    GET  /api/Products                 all products (negotiated)
    GET  /api/HammerProducts           products named "Hammer" (negotiated)
    GET  /api/Products/getall          "hello" as UTF-16 text, cached 20 minutes
    GET  /api/Products/getdata         all products (negotiated)
    GET  /api/Products/{product_id}    first product with that id, or 404
    POST /api/SaveId/                  body is a single string; 204
    POST /api/SaveMultiple/            two body parameters; always 400
    POST /api/Product/                 product body ignored; fixed text
    PUT  /api/update/?id=N             id + product body ignored; fixed text
    PUT  /api/update/{product_id}      same, id from the route

Paths match case-insensitively (`/api/products` is `/api/Products`); ids may be
negative, so `/api/Products/-1` is a 404 from the catalog like any absent id.

Content negotiation:
    Product-returning routes write JSON by default and XML when the client's
    Accept header prefers application/xml or text/xml.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import PlainTextResponse

from hellowebapi.binding import from_body
from hellowebapi.config import settings
from hellowebapi.models.product import Product
from hellowebapi.negotiation import negotiated_response
from hellowebapi.routing import RouteEntry, register_routes
from hellowebapi.schemas.responses import ErrorResponse
from hellowebapi.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])

POST_MESSAGE = "POST: Test message"
PUT_MESSAGE = "PUT: Test message"
GETALL_BODY = "hello"


# ══════════════════════════════════════════════════════════════════════════
# Reads
# ══════════════════════════════════════════════════════════════════════════

async def get_all_products(request: Request) -> Response:
    return negotiated_response(request, product_service.list_products())


async def get_hammer_products(request: Request) -> Response:
    return negotiated_response(request, product_service.list_hammer_products())


async def get_product(request: Request, product_id: int) -> Response:
    """
    Returns the first catalog entry with this id.

    Errors:
        HTTP 404: No product has this id (NotFoundError → global handler).
    """
    product = product_service.get_product(product_id)
    return negotiated_response(request, product)


async def get_all() -> Response:
    """
    Fixed text response with an explicit encoding and cache lifetime.

    Body:    "hello" as UTF-16 little-endian, no byte-order mark
    Headers: Cache-Control: max-age=<getall_cache_max_age> (1200 by default)
    """
    return Response(
        content=GETALL_BODY.encode("utf-16-le"),
        status_code=200,
        media_type="text/plain; charset=utf-16",
        headers={"Cache-Control": f"max-age={settings.getall_cache_max_age}"},
    )


async def get_data_products(request: Request) -> Response:
    products = product_service.list_products()
    return negotiated_response(request, products, status_code=200)


# ══════════════════════════════════════════════════════════════════════════
# Writes (accepted, never stored)
# ══════════════════════════════════════════════════════════════════════════

async def save_id(product_id: Optional[str] = from_body("productId")) -> Response:
    logger.debug("SaveId received productId=%r", product_id)
    return Response(status_code=204)


async def save_multiple(
    product_id: Optional[str] = from_body("productId"),
    name: Optional[str] = from_body("name"),
) -> Response:
    # Unreachable: routing rejects handlers with two whole-body parameters.
    return Response(status_code=204)


async def save_product(prod: Optional[Product] = from_body("prod", Product)) -> PlainTextResponse:
    logger.debug("Product POST received %s", "a product" if prod else "no readable product")
    return PlainTextResponse(POST_MESSAGE)


def _updated(product_id: int, item: Optional[Product]) -> PlainTextResponse:
    logger.debug(
        "Update received id=%d (%s)",
        product_id,
        "with product" if item else "no readable product",
    )
    return PlainTextResponse(PUT_MESSAGE)


async def update_product(
    product_id: int = Query(alias="id"),
    item: Optional[Product] = from_body("item", Product),
) -> PlainTextResponse:
    return _updated(product_id, item)


async def update_product_by_route(
    product_id: int,
    item: Optional[Product] = from_body("item", Product),
) -> PlainTextResponse:
    return _updated(product_id, item)


# ══════════════════════════════════════════════════════════════════════════
# Route Table
# ══════════════════════════════════════════════════════════════════════════

_not_found = {404: {"description": "No product with this id", "model": ErrorResponse}}
_bad_request = {400: {"description": "Request could not be bound", "model": ErrorResponse}}

PRODUCT_ROUTES: List[RouteEntry] = [
    RouteEntry("GET", "/Products", get_all_products,
               summary="List all products", response_model=List[Product]),
    RouteEntry("GET", "/HammerProducts", get_hammer_products,
               summary="List products named 'Hammer'", response_model=List[Product]),
    RouteEntry("GET", "/Products/getall", get_all,
               summary="Fixed UTF-16 text with a cache header"),
    RouteEntry("GET", "/Products/getdata", get_data_products,
               summary="List all products via a negotiated response", response_model=List[Product]),
    RouteEntry("GET", "/Products/{product_id:signed_int}", get_product,
               summary="Get a product by id", response_model=Product, responses=_not_found),
    RouteEntry("POST", "/SaveId/", save_id, status_code=204,
               summary="Accept a single string body"),
    RouteEntry("POST", "/SaveMultiple/", save_multiple, status_code=204,
               summary="Two body parameters (always fails binding)", responses=_bad_request),
    RouteEntry("POST", "/Product/", save_product, response_class=PlainTextResponse,
               summary="Accept a product body"),
    RouteEntry("PUT", "/update/", update_product, response_class=PlainTextResponse,
               summary="Accept an id (query string) and a product body", responses=_bad_request),
    RouteEntry("PUT", "/update/{product_id:signed_int}", update_product_by_route, response_class=PlainTextResponse,
               summary="Accept an id (route) and a product body", responses=_bad_request),
]

register_routes(router, PRODUCT_ROUTES)
