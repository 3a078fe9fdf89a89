"""
HelloWebAPI Backend — Response Schemas
=======================================

What:  Pydantic models for the non-product responses: errors and health.
Who:   Referenced by route `responses=` declarations (OpenAPI docs) and
       returned by GET /health.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Product with ID '999' was not found",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    product_count: int = Field(description="Number of records in the catalog")
    uptime_seconds: float = Field(description="Seconds since service started")
