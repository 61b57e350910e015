"""Generic response schemas"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Error response schema"""
    error: str
    detail: str
    timestamp: datetime = Field(default_factory=_utcnow)


class HealthResponse(BaseModel):
    """Health check response schema"""
    status: str
    timestamp: datetime = Field(default_factory=_utcnow)
    dependencies: dict
