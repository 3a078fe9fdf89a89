"""
HelloWebAPI Backend — Application Package Initializer
=====================================================

What: Marks the `hellowebapi` directory as a Python package.
Who:  Used by uvicorn (`hellowebapi.main:app`), pytest, and the route modules.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes (route table, HTTP)      │  ← verbs, paths, status codes
    ├─────────────────────────────────────┤
    │  Binding & Negotiation (formatters) │  ← request bodies in, payloads out
    ├─────────────────────────────────────┤
    │     Services (catalog lookups)      │  ← list, filter, first-match get
    ├─────────────────────────────────────┤
    │         Models (Pydantic)           │  ← Product, Author
    └─────────────────────────────────────┘

    There is no persistence layer: the product catalog is a literal,
    read-only sequence created at import time.
"""

__version__ = "1.0.0"
