# Middleware package init
"""
HelloWebAPI Backend — Middleware Package
=========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    1. Request ID first: every response carries X-Request-ID, 429s included
    2. Rate Limit: rejected requests do no further work
    3. Logging: one access line per request, with the request id

Responses travel the chain in reverse, which is how X-Request-ID and the
logged status/duration get attached.
"""
