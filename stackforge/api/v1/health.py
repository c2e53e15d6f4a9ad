"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from stackforge import __version__
from stackforge.config import settings
from stackforge.generators.templating import registry

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    templates: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Ready once every renderer has registered its templates."""
    # Importing the orchestrator registers every renderer module.
    from stackforge.generators import scaffold  # noqa: F401

    count = len(registry.names())
    return ReadinessResponse(ready=count > 0, templates=count)
