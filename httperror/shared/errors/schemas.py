"""Pydantic models for error handling.

Public response shape of an HttpError.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Unified error response schema."""

    error: str = Field(..., description="Error code (SNAKE_CASE)")
    message: str = Field(..., description="Public error message")
    status: int = Field(..., ge=400, lt=600, description="HTTP status code")
    trace_id: str = Field(default="", description="Request correlation ID")
