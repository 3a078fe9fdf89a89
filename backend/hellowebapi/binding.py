"""
HelloWebAPI Backend — Whole-Body Parameter Binding
===================================================

What:  Binds the entire request body to a single handler parameter.
How:   `from_body(name, target)` returns a FastAPI `Depends` whose dependency
       reads the raw body, decodes it with the formatter selected from
       `Content-Type`, and converts it to `target` (str or a Pydantic model).
Who:   Used as parameter defaults in routes/products.py; inspected by
       routing.register_routes.

Binding rules:
    - Simple types (numbers, strings in the URL) come from the route or the
      query string and are handled by FastAPI as usual.
    - A whole-body parameter consumes the complete body. A body can satisfy
      only one such parameter; a handler declaring two or more is rejected
      with a BindingError (400) before any of them is read.
    - An empty or unreadable body binds None. The handler still runs.

Example:
    async def save_id(product_id: Optional[str] = from_body("productId")):
        ...
"""

import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence, Type, Union

from fastapi import Depends, Request
from fastapi.params import Depends as DependsParam
from pydantic import BaseModel, ValidationError as PydanticValidationError

from hellowebapi.exceptions import BindingError
from hellowebapi.negotiation import FormatterError, get_negotiator

logger = logging.getLogger(__name__)

BodyTarget = Union[Type[str], Type[BaseModel]]

# Attribute set on binder callables so routing can count them per handler.
WHOLE_BODY_ATTR = "__whole_body_parameter__"


def convert_body(value: Any, target: BodyTarget) -> Any:
    """Converts a decoded body value to the target type, or None if it doesn't fit."""
    if value is None:
        return None
    if target is str:
        return value if isinstance(value, str) else None
    try:
        return target.model_validate(value)
    except PydanticValidationError as e:
        logger.debug("Body does not match %s: %d error(s)", target.__name__, e.error_count())
        return None


async def read_body(request: Request, name: str, target: BodyTarget) -> Any:
    raw = await request.body()
    if not raw:
        return None

    content_type = request.headers.get("content-type")
    formatter = get_negotiator().select_reader(content_type)
    if formatter is None:
        logger.debug("No formatter reads %r; binding '%s' to None", content_type, name)
        return None

    try:
        value = formatter.read(raw)
    except FormatterError as e:
        logger.debug("Could not read body for '%s': %s", name, e)
        return None

    return convert_body(value, target)


def from_body(name: str, target: BodyTarget = str) -> Any:
    """
    Declare a handler parameter bound from the whole request body.

    Args:
        name:   Parameter name as reported in binding errors (e.g. "productId").
        target: `str` for a raw string value, or a Pydantic model class.
    """

    async def bind(request: Request) -> Any:
        return await read_body(request, name, target)

    setattr(bind, WHOLE_BODY_ATTR, name)
    bind.__name__ = f"bind_body_{name}"
    return Depends(bind)


def whole_body_parameters(endpoint: Callable) -> List[str]:
    """Names of the whole-body parameters an endpoint declares, in signature order."""
    names = []
    for parameter in inspect.signature(endpoint).parameters.values():
        default = parameter.default
        if isinstance(default, DependsParam):
            name = getattr(default.dependency, WHOLE_BODY_ATTR, None)
            if name is not None:
                names.append(name)
    return names


def multiple_bodies_message(names: Sequence[str]) -> str:
    quoted = [f"'{n}'" for n in names]
    joined = ", ".join(quoted[:-1]) + " and " + quoted[-1]
    return f"Can't bind multiple parameters ({joined}) to the request's content."


def reject_multiple_bodies(names: Sequence[str]) -> Callable:
    """
    Dependency that always fails binding for a route with several body parameters.

    Registered as a route-level dependency, so it runs before the handler's
    own parameters are resolved and the body is never read.
    """
    message = multiple_bodies_message(names)

    async def reject() -> None:
        raise BindingError(message=message, parameters=names)

    return reject


def body_parameter_guard(endpoint: Callable) -> Optional[Callable]:
    """Returns a rejecting dependency if `endpoint` declares more than one body parameter."""
    names = whole_body_parameters(endpoint)
    if len(names) > 1:
        logger.warning(
            "%s declares %d whole-body parameters (%s); requests will fail binding",
            endpoint.__name__,
            len(names),
            ", ".join(names),
        )
        return reject_multiple_bodies(names)
    return None
