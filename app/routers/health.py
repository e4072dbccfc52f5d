# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import UserStoreDep
from core.stores.base import StoreError

router = APIRouter()

# Process start, for the uptime figure
_STARTED_AT = time.monotonic()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    success: bool
    message: str
    timestamp: str
    uptime: float


class ChecksResponse(BaseModel):
    """Individual dependency checks."""
    store: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    success: bool
    message: str
    checks: ChecksResponse
    timestamp: str


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status and process uptime (seconds) for load
    balancers and monitoring.
    """
    return HealthResponse(
        success=True,
        message="Server is healthy",
        timestamp=_now_iso(),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: UserStoreDep):
    """
    Readiness check endpoint.

    Checks that the user store can be reached. Always answers 200; the
    `success` flag says whether the service is ready.
    """
    try:
        store.ping()
        checks = ChecksResponse(store="healthy")
    except StoreError as e:
        checks = ChecksResponse(store=f"unhealthy: {str(e)[:50]}")

    ready = checks.store == "healthy"

    return ReadinessResponse(
        success=ready,
        message="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now_iso(),
    )
