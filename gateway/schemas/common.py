"""Common schemas used across multiple endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class PropertiesResponse(BaseModel):
    """System metadata of a container, file or directory."""
    created_time: datetime
    modified_time: datetime
    etag: str
    size: Optional[int] = None


class HealthResponse(BaseModel):
    """Response model for the health check."""
    status: str
    service: str
    timestamp: datetime
