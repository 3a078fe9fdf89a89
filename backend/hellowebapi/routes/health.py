"""
HelloWebAPI Backend — Health Check Route
=========================================

What:  Liveness endpoint for container health checks and load balancers.
How:   The service has no external dependencies, so a process that can
       answer is healthy. The catalog size is reported for monitoring.
"""

import time

from fastapi import APIRouter

from hellowebapi import __version__
from hellowebapi.schemas.responses import HealthResponse
from hellowebapi.services.product_service import product_service

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        product_count=len(product_service),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
