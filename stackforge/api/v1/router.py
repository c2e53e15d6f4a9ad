"""Main router for API v1."""

from fastapi import APIRouter

from stackforge.api.v1 import config, github, health, progress, scaffold

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(health.router, tags=["health"])
router.include_router(config.router, prefix="/config", tags=["config"])
router.include_router(scaffold.router, prefix="/scaffold", tags=["scaffold"])
router.include_router(progress.router, prefix="/progress", tags=["progress"])
router.include_router(github.router, prefix="/github", tags=["github"])
