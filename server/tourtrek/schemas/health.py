"""Health-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    READY = "ready"
    DEGRADED = "degraded"


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: HealthStatus = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
    version: str = Field("1.0.0", description="API version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(BaseModel):
    """Readiness response with per-dependency checks."""

    status: HealthStatus = Field(..., description="Overall readiness")
    checks: dict[str, str] = Field(default_factory=dict, description="Dependency name to ok/error")
