# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from app.exceptions import CatalogEmptyError
from core.services.catalog_service import CatalogService

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual configuration checks."""
    catalog: str
    vendor_credentials: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    The portal is ready when at least one app is configured and the
    Frontegg vendor credentials are present. No upstream call is made.
    """
    checks = ChecksResponse(catalog="unknown", vendor_credentials="unknown")

    try:
        apps = CatalogService.load_catalog()
        checks.catalog = f"healthy: {len(apps)} apps"
    except CatalogEmptyError as e:
        checks.catalog = f"unhealthy: {e.message}"

    if settings.frontegg_credentials_configured:
        checks.vendor_credentials = "healthy"
    else:
        checks.vendor_credentials = "unhealthy: FRONTEGG_CLIENT_ID / FRONTEGG_SECRET not set"

    all_healthy = (
        checks.catalog.startswith("healthy")
        and checks.vendor_credentials == "healthy"
    )

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
