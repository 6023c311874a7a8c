# =============================================================================
# app/routers/health.py - Liveness Endpoints
# =============================================================================
# Provides liveness endpoints for monitoring and load balancers.
# Neither endpoint touches a route group, so both answer as long as the
# process is serving.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.dependencies import SettingsDep

router = APIRouter()

LIVENESS_MESSAGE = "Bus Booking API is running!"


# =============================================================================
# Response Models
# =============================================================================

class RootResponse(BaseModel):
    """Root liveness response."""
    message: str


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=RootResponse)
async def root():
    """
    Root liveness endpoint.

    Always returns the same message with status 200.
    """
    return RootResponse(message=LIVENESS_MESSAGE)


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )
