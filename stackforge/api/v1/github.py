"""GitHub repository publishing endpoints."""

from fastapi import APIRouter, status

from stackforge.api.deps import GitHubTokenDep, PublisherDep
from stackforge.models.publishing import PublishRequest, PublishResponse, RateLimitResponse

router = APIRouter()


@router.post(
    "/repositories",
    response_model=PublishResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a repository and publish the scaffold",
)
async def create_repository(
    request: PublishRequest,
    token: GitHubTokenDep,
    publisher: PublisherDep,
) -> PublishResponse:
    """Create (or reuse) a repository and push the scaffold as its initial commit.

    On failure the error body carries a ``fallback`` pointing at the archive
    download endpoint for the same configuration.
    """
    return await publisher.publish(token, request)


@router.get(
    "/rate-limit",
    response_model=RateLimitResponse,
    summary="Repository creation quota",
)
async def get_rate_limit(token: GitHubTokenDep, publisher: PublisherDep) -> RateLimitResponse:
    """Return how many repositories the caller may still create."""
    info = await publisher.rate_limit_info(token)
    return RateLimitResponse(
        limit=info.limit,
        remaining=info.remaining,
        reset=info.reset.isoformat(),
        exceeded=info.exceeded,
    )
