"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stackforge.core.exceptions import RemoteAuthError
from stackforge.core.progress import ProgressStore, get_progress_store
from stackforge.services.publish_service import PublishService, get_publish_service
from stackforge.services.scaffold_service import ScaffoldService, get_scaffold_service

_bearer = HTTPBearer(auto_error=False)


async def get_scaffold() -> ScaffoldService:
    """Get the scaffold service."""
    return get_scaffold_service()


async def get_publisher() -> PublishService:
    """Get the publish service."""
    return get_publish_service()


async def get_progress() -> ProgressStore:
    """Get the progress store."""
    return get_progress_store()


async def get_github_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> str:
    """GitHub OAuth token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise RemoteAuthError("A GitHub access token is required", step="authenticating")
    return credentials.credentials


# Type aliases for cleaner signatures
ScaffoldDep = Annotated[ScaffoldService, Depends(get_scaffold)]
PublisherDep = Annotated[PublishService, Depends(get_publisher)]
ProgressDep = Annotated[ProgressStore, Depends(get_progress)]
GitHubTokenDep = Annotated[str, Depends(get_github_token)]
