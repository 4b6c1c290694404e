"""Uniform error body returned for every failed request."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error payload; details is present only for per-field validation errors."""

    timestamp: datetime
    status: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="Reason phrase, e.g. 'Not Found'")
    message: str
    path: str
    details: dict[str, str] | None = None
