"""Create a GitHub repository and publish a generated scaffold into it."""

from functools import lru_cache

import httpx

from stackforge.config import settings
from stackforge.core.exceptions import (
    RemoteNameConflictError,
    RemoteRateLimitedError,
    StackForgeError,
)
from stackforge.core.rate_limit import RateLimiter, RateLimitInfo, get_repository_rate_limiter
from stackforge.generators.commit_message import build_commit_message
from stackforge.github.client import GitAuthor, GitHubClient
from stackforge.github.publisher import RepositoryPublisher
from stackforge.models.progress import GenerationStep
from stackforge.models.publishing import PublishRequest, PublishResponse
from stackforge.services.scaffold_service import ScaffoldService, get_scaffold_service
from stackforge.utils.logging import get_logger

logger = get_logger("publish_service")


def author_for(user: dict) -> GitAuthor:
    """Commit identity for a GitHub user, falling back to the noreply address."""
    login = user["login"]
    email = user.get("email") or f"{user.get('id', 0)}+{login}@users.noreply.github.com"
    return GitAuthor(name=user.get("name") or login, email=email)


class PublishService:
    """Repository creation plus the initial-commit publisher."""

    def __init__(
        self,
        scaffold_service: ScaffoldService | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.scaffold_service = scaffold_service or get_scaffold_service()
        self.rate_limiter = rate_limiter or get_repository_rate_limiter()
        self._transport = transport

    def client(self, token: str) -> GitHubClient:
        return GitHubClient(token, transport=self._transport)

    async def rate_limit_info(self, token: str) -> RateLimitInfo:
        async with self.client(token) as github:
            user = await github.get_authenticated_user()
        return self.rate_limiter.info(user["login"])

    async def publish(self, token: str, request: PublishRequest) -> PublishResponse:
        """Validate, create the repository, generate and publish.

        Raises:
            ConfigurationInvalidError: The configuration cannot be generated.
            RemotePublishError: Repository creation or publishing failed. The
                same configuration can still be downloaded as an archive.
        """
        config = request.config
        name = request.repository_name or config.project_name
        tracker = self.scaffold_service.start_tracking(request.generation_id)

        try:
            # Configuration problems are reported before touching GitHub.
            self.scaffold_service.ensure_valid(config)

            async with self.client(token) as github:
                user = await github.get_authenticated_user()
                login = user["login"]

                if not self.rate_limiter.check_limit(login):
                    info = self.rate_limiter.info(login)
                    raise RemoteRateLimitedError(
                        f"Repository creation limit reached ({info.limit} per window)",
                        retry_after=info.retry_after,
                        source="app",
                        step="creating-repository",
                    )

                tracker.update(
                    GenerationStep.CREATING_REPOSITORY, f"Creating repository {name}", 10
                )
                repository = await self._create_or_reuse(github, login, name, request)
                owner = repository["owner"]["login"]
                repo_url = repository["html_url"]
                branch = repository.get("default_branch") or settings.github_default_branch

                result, _ = await self.scaffold_service.generate(
                    config,
                    tracker,
                    is_remote_publish=True,
                    remote_url=repo_url,
                )

                publisher = RepositoryPublisher(
                    github,
                    owner,
                    repository["name"],
                    branch=branch,
                    progress=tracker,
                )
                outcome = await publisher.publish(
                    result.files,
                    author_for(user),
                    build_commit_message(config),
                )
        except StackForgeError as e:
            record = tracker.store.get(tracker.id)
            if record is not None and record.error is None:
                tracker.fail(e.message)
            raise

        tracker.complete(f"Published to {repo_url}", result_url=repo_url)
        logger.info(
            "github.publish.completed",
            owner=owner,
            repo=repository["name"],
            commit=outcome.commit_sha,
            files=result.file_count,
        )
        return PublishResponse(
            generation_id=tracker.id,
            owner=owner,
            repository=repository["name"],
            repository_url=repo_url,
            branch=branch,
            commit_sha=outcome.commit_sha,
            files=result.file_count,
            state=outcome.state.value,
        )

    async def _create_or_reuse(
        self, github: GitHubClient, login: str, name: str, request: PublishRequest
    ) -> dict:
        description = request.description or request.config.description
        try:
            return await github.create_repository(name, description, request.private)
        except RemoteNameConflictError:
            if not request.reuse_existing:
                raise
            existing = await github.get_repository(login, name)
            if existing is None:
                raise
            logger.info("github.repository.reused", owner=login, repo=name)
            return existing


@lru_cache
def get_publish_service() -> PublishService:
    """Get the publish service singleton."""
    return PublishService()
