"""Health check endpoints."""

import time
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.config import API_VERSION, get_settings

router = APIRouter(tags=["Health"])
logger = structlog.get_logger()

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status: healthy, degraded, unhealthy")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")


class ApiInfoResponse(BaseModel):
    """API information response."""

    name: str
    version: str
    env: str
    docs: str | None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns healthy if the API is running. The snapshot is not read here.
    """
    uptime = int(time.time() - _server_start_time)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=API_VERSION,
        uptime_seconds=uptime,
    )


@router.get("/", response_model=ApiInfoResponse)
async def api_info() -> ApiInfoResponse:
    """API information endpoint."""
    settings = get_settings()
    return ApiInfoResponse(
        name="Book Search Benchmark API",
        version=API_VERSION,
        env=settings.env,
        docs="/docs" if settings.debug else None,
    )
