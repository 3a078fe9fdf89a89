"""
HelloWebAPI Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (function-scoped):
    ├── app: A fresh FastAPI app from create_app() (fresh middleware state)
    ├── test_client: HTTPX AsyncClient routed into `app` via ASGITransport
    ├── sample_product_body: A product-shaped JSON body in wire format
    └── make_request: Builds a Starlette Request with a given body and headers
"""

import os

# Settings are read at import time, so the environment is set before any
# hellowebapi import.
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["XML_FORMATTER_ENABLED"] = "true"

from typing import Dict, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from starlette.requests import Request


@pytest.fixture
def app():
    from hellowebapi.main import create_app
    return create_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_product_body():
    return {"Id": 42, "Name": "Screwdriver", "Category": "Hardware", "Price": 7.5}


@pytest.fixture
def make_request():
    """
    Factory for bare Starlette requests, for testing binders without routing.

    Usage:
        request = make_request(b'"abc"', {"content-type": "application/json"})
    """

    def _make(body: bytes = b"", headers: Optional[Dict[str, str]] = None) -> Request:
        raw_headers = [
            (k.lower().encode("latin-1"), v.encode("latin-1"))
            for k, v in (headers or {}).items()
        ]
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/",
            "headers": raw_headers,
            "query_string": b"",
        }
        sent = False

        async def receive():
            nonlocal sent
            if sent:
                return {"type": "http.disconnect"}
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make
