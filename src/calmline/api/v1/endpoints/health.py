"""
Health Check Endpoints

Provides system health and readiness endpoints for:
- Load balancer health checks
- Kubernetes probes
- Monitoring systems
"""

from fastapi import APIRouter
from pydantic import BaseModel

from calmline.api.dependencies import detector_ready, get_detector
from calmline.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns 200 if application is running.
    """
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version="0.1.0",
        environment=settings.env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check including the detector lexicon",
)
async def readiness_check() -> ReadinessResponse:
    """
    Detailed readiness check.

    Ready only when the detector has a loaded lexicon.
    """
    ready = detector_ready()
    components: dict = {"detector": ready}

    if ready:
        lexicon = get_detector().lexicon
        components["lexicon_version"] = lexicon.version
        components["signal_count"] = len(lexicon)

    return ReadinessResponse(
        ready=ready,
        components=components,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_check() -> HealthResponse:
    """
    Kubernetes liveness probe.

    Returns 200 if application process is alive.
    """
    settings = get_settings()

    return HealthResponse(
        status="alive",
        version="0.1.0",
        environment=settings.env,
    )
