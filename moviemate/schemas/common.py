"""
Common schema types used across the API.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    request_id: Optional[str] = None


class SuccessResponse(BaseModel):
    """Standard success response."""

    message: str
    success: bool = True


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    provider: str
    version: str
