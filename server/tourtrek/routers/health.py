"""Liveness, health and readiness endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from ..core.config import settings
from ..core.database import get_db
from ..core.observability import SERVICE_VERSION
from ..schemas.health import HealthResponse, HealthStatus, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

LIVENESS_MESSAGE = "Tour Package Server is running!"


@router.get("/", response_class=PlainTextResponse)
async def root() -> PlainTextResponse:
    """Plain-text liveness string."""
    return PlainTextResponse(LIVENESS_MESSAGE)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> JSONResponse:
    """
    Health check endpoint.

    Returns current service status and timestamp.
    """
    response_data = HealthResponse(
        status=HealthStatus.HEALTHY,
        timestamp=datetime.now(timezone.utc),
        version=SERVICE_VERSION,
        environment=settings.environment,
    )

    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(db: AsyncIOMotorDatabase = Depends(get_db)) -> JSONResponse:
    """Ping the database; 503 when it does not answer."""
    try:
        await db.command("ping")
    except PyMongoError as e:
        logger.warning("Readiness check failed", extra={"error": str(e)})
        response_data = ReadinessResponse(status=HealthStatus.DEGRADED, checks={"database": "error"})
        return JSONResponse(status_code=503, content=response_data.model_dump(mode="json"))

    response_data = ReadinessResponse(status=HealthStatus.READY, checks={"database": "ok"})
    return JSONResponse(status_code=200, content=response_data.model_dump(mode="json"))
