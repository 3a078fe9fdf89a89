"""
HelloWebAPI Backend — Media Type Formatters & Content Negotiation
==================================================================

What:  Reads request bodies and writes response payloads in the media type
       the client asked for.
How:   A small registry of formatters (JSON, XML). Responses pick a writer
       from the `Accept` header; the body binder picks a reader from
       `Content-Type`.
Who:   Used by the product routes (responses) and binding.py (requests).

Negotiation rules:
    1. Parse `Accept` into media ranges with their q-values.
    2. Try ranges from highest q to lowest; equal q keeps header order.
       q=0 means "not acceptable" and is skipped.
    3. `type/subtype` matches a formatter exactly, `type/*` matches the first
       formatter with that major type, `*/*` matches the default formatter.
    4. Nothing matched (or no header): the default formatter (JSON).

XML layout:
    A list of products      A single product
    <ArrayOfProduct>        <Product>
      <Product>               <Id>3</Id>
        <Id>3</Id>            <Name>Hammer</Name>
        ...                   ...
      </Product>            </Product>
    </ArrayOfProduct>
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, List, Optional, Sequence, Tuple, Union

from fastapi import Request, Response
from pydantic import BaseModel

from hellowebapi.config import settings

logger = logging.getLogger(__name__)

Payload = Union[BaseModel, Sequence[BaseModel]]


class FormatterError(ValueError):
    """Raised by a formatter that cannot read the given body."""


class MediaTypeFormatter:
    """
    Base class for formatters.

    Subclasses list the media types they handle (the first one is used for
    the response Content-Type) and implement read() and write().
    """

    media_types: Tuple[str, ...] = ()

    @property
    def content_type(self) -> str:
        return f"{self.media_types[0]}; charset=utf-8"

    def supports(self, media_type: str) -> bool:
        return media_type in self.media_types

    def read(self, body: bytes) -> Any:
        raise NotImplementedError

    def write(self, payload: Payload) -> bytes:
        raise NotImplementedError


class JsonFormatter(MediaTypeFormatter):
    media_types = ("application/json", "text/json")

    def read(self, body: bytes) -> Any:
        try:
            return json.loads(body)
        except ValueError as e:
            raise FormatterError(f"Body is not valid JSON: {e}") from e

    def write(self, payload: Payload) -> bytes:
        if isinstance(payload, BaseModel):
            content = payload.model_dump(mode="json", by_alias=True)
        else:
            content = [item.model_dump(mode="json", by_alias=True) for item in payload]
        return json.dumps(content, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class XmlFormatter(MediaTypeFormatter):
    media_types = ("application/xml", "text/xml")

    def read(self, body: bytes) -> Any:
        """
        Reads a scalar element (`<string>42</string>` → "42") or a flat
        complex element (`<Product><Id>1</Id>...</Product>` → dict).
        """
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            raise FormatterError(f"Body is not valid XML: {e}") from e
        children = list(root)
        if not children:
            return root.text or ""
        return {child.tag: child.text for child in children}

    def write(self, payload: Payload) -> bytes:
        if isinstance(payload, BaseModel):
            root = self._element(payload)
        else:
            items = list(payload)
            item_name = type(items[0]).__name__ if items else "Product"
            root = ET.Element(f"ArrayOf{item_name}")
            for item in items:
                root.append(self._element(item))
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)

    @staticmethod
    def _element(model: BaseModel) -> ET.Element:
        element = ET.Element(type(model).__name__)
        for name, value in model.model_dump(by_alias=True).items():
            child = ET.SubElement(element, name)
            child.text = "" if value is None else str(value)
        return element


def _parse_media_type(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


def parse_accept(header: Optional[str]) -> List[Tuple[str, float]]:
    """
    Split an Accept header into (media_range, q) pairs, best first.

    >>> parse_accept("text/xml;q=0.5, application/json")
    [('application/json', 1.0), ('text/xml', 0.5)]
    """
    if not header:
        return []
    ranges = []
    for index, part in enumerate(header.split(",")):
        pieces = [p.strip() for p in part.split(";")]
        media_range = pieces[0].lower()
        if not media_range:
            continue
        q = 1.0
        for param in pieces[1:]:
            key, _, val = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    q = float(val)
                except ValueError:
                    q = 0.0
        ranges.append((media_range, q, index))
    ranges.sort(key=lambda r: (-r[1], r[2]))
    return [(media_range, q) for media_range, q, _ in ranges]


class ContentNegotiator:
    """Chooses formatters for responses (by Accept) and requests (by Content-Type)."""

    def __init__(self, formatters: Sequence[MediaTypeFormatter]):
        if not formatters:
            raise ValueError("At least one formatter is required")
        self.formatters = list(formatters)

    @property
    def default(self) -> MediaTypeFormatter:
        return self.formatters[0]

    def select_writer(self, accept: Optional[str]) -> MediaTypeFormatter:
        for media_range, q in parse_accept(accept):
            if q <= 0:
                continue
            if media_range == "*/*":
                return self.default
            if media_range.endswith("/*"):
                major = media_range[:-2]
                for formatter in self.formatters:
                    if any(mt.startswith(major + "/") for mt in formatter.media_types):
                        return formatter
                continue
            for formatter in self.formatters:
                if formatter.supports(media_range):
                    return formatter
        return self.default

    def select_reader(self, content_type: Optional[str]) -> Optional[MediaTypeFormatter]:
        """Returns None when no formatter can read the given Content-Type."""
        if not content_type:
            return self.default
        media_type = _parse_media_type(content_type)
        for formatter in self.formatters:
            if formatter.supports(media_type):
                return formatter
        return None


def build_negotiator(xml_enabled: bool = True) -> ContentNegotiator:
    formatters: List[MediaTypeFormatter] = [JsonFormatter()]
    if xml_enabled:
        formatters.append(XmlFormatter())
    return ContentNegotiator(formatters)


def get_negotiator() -> ContentNegotiator:
    """Negotiator for the current settings."""
    return build_negotiator(xml_enabled=settings.xml_formatter_enabled)


def negotiated_response(request: Request, payload: Payload, status_code: int = 200) -> Response:
    """Serialize `payload` with the formatter the request's Accept header selects."""
    formatter = get_negotiator().select_writer(request.headers.get("accept"))
    logger.debug(
        "Negotiated %s for Accept=%r",
        formatter.media_types[0],
        request.headers.get("accept"),
    )
    return Response(
        content=formatter.write(payload),
        status_code=status_code,
        media_type=formatter.content_type,
    )
