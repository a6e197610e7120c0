"""Common schemas shared across API endpoints."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response for rejected requests."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
