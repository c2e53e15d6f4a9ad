"""Unit tests for the GitHub client and the initial-commit publisher."""

import httpx
import pytest

from stackforge.core.exceptions import (
    RemoteAuthError,
    RemoteNameConflictError,
    RemotePublishError,
    RemoteRateLimitedError,
    RemoteReferenceConflictError,
    RemoteTransientError,
)
from stackforge.core.progress import ProgressStore, ProgressTracker
from stackforge.github.client import GitAuthor, GitHubClient, raise_for_github_status
from stackforge.github.publisher import PublishState, RepositoryPublisher
from stackforge.models.generation import GeneratedFile
from stackforge.models.progress import GenerationStep

AUTHOR = GitAuthor(name="The Octocat", email="1+octocat@users.noreply.github.com")


def _files(count: int = 3) -> list[GeneratedFile]:
    files = [GeneratedFile(path=".gitignore", content="node_modules/\n", file_type="config")]
    files += [
        GeneratedFile(path=f"src/file{i}.ts", content=f"export const n = {i};\n")
        for i in range(1, count)
    ]
    return files


class TestStatusMapping:
    """Tests for raise_for_github_status."""

    def test_success_passes(self):
        raise_for_github_status(httpx.Response(201, json={}))

    def test_unauthorized(self):
        with pytest.raises(RemoteAuthError) as exc_info:
            raise_for_github_status(
                httpx.Response(401, json={"message": "Bad credentials"}), "authenticating"
            )

        assert exc_info.value.step == "authenticating"
        assert "Bad credentials" in exc_info.value.message

    def test_primary_rate_limit(self):
        response = httpx.Response(
            403,
            json={"message": "API rate limit exceeded"},
            headers={"X-RateLimit-Remaining": "0", "Retry-After": "30"},
        )

        with pytest.raises(RemoteRateLimitedError) as exc_info:
            raise_for_github_status(response, "creating-blobs")

        assert exc_info.value.retry_after == 30
        assert exc_info.value.source == "github"
        assert exc_info.value.status_code == 429

    def test_secondary_rate_limit_defaults_retry(self):
        with pytest.raises(RemoteRateLimitedError) as exc_info:
            raise_for_github_status(httpx.Response(429, json={"message": "slow down"}))

        assert exc_info.value.retry_after == 60

    def test_forbidden_without_quota_headers(self):
        with pytest.raises(RemoteAuthError):
            raise_for_github_status(httpx.Response(403, json={"message": "Resource not accessible"}))

    def test_server_error_is_transient(self):
        with pytest.raises(RemoteTransientError):
            raise_for_github_status(httpx.Response(502, text="Bad Gateway"))

    def test_other_client_errors(self):
        with pytest.raises(RemotePublishError) as exc_info:
            raise_for_github_status(httpx.Response(422, json={"message": "Validation Failed"}))

        assert type(exc_info.value) is RemotePublishError
        assert exc_info.value.details["status_code"] == 422


class TestGitHubClient:
    """Tests for GitHubClient against the in-memory GitHub."""

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, json={"login": "octocat"})

        async with GitHubClient("secret-token", transport=httpx.MockTransport(handler)) as github:
            user = await github.get_authenticated_user()

        assert user["login"] == "octocat"
        assert seen["authorization"] == "Bearer secret-token"
        assert seen["accept"] == "application/vnd.github+json"

    @pytest.mark.asyncio
    async def test_create_repository_conflict(self, fake_github):
        fake_github.add_repository("taken")

        async with GitHubClient("token", transport=fake_github.transport) as github:
            with pytest.raises(RemoteNameConflictError) as exc_info:
                await github.create_repository("taken")

        assert exc_info.value.status_code == 409
        assert exc_info.value.name == "taken"

    @pytest.mark.asyncio
    async def test_missing_repository_is_none(self, fake_github):
        async with GitHubClient("token", transport=fake_github.transport) as github:
            assert await github.get_repository("octocat", "nope") is None

    @pytest.mark.asyncio
    async def test_reference_of_empty_repository_is_none(self, fake_github):
        fake_github.add_repository("empty")

        async with GitHubClient("token", transport=fake_github.transport) as github:
            assert await github.get_reference("octocat", "empty", "heads/main") is None

    @pytest.mark.asyncio
    async def test_create_and_read_reference(self, fake_github):
        fake_github.add_repository("app")
        sha = "a" * 40

        async with GitHubClient("token", transport=fake_github.transport) as github:
            created = await github.create_reference("octocat", "app", "heads/feature", sha)
            current = await github.get_reference("octocat", "app", "heads/feature")
            with pytest.raises(RemotePublishError) as exc_info:
                await github.create_reference("octocat", "app", "refs/heads/feature", sha)

        assert created == current == sha
        assert exc_info.value.step == "updating-reference"

    @pytest.mark.asyncio
    async def test_timeouts_are_transient(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        async with GitHubClient("token", transport=httpx.MockTransport(handler)) as github:
            with pytest.raises(RemoteTransientError) as exc_info:
                await github.create_blob("octocat", "repo", "content")

        assert exc_info.value.step == "creating-blobs"

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        with pytest.raises(RuntimeError):
            await GitHubClient("token").get_authenticated_user()


class TestRepositoryPublisher:
    """Tests for the bootstrap, tree, commit and reference sequence."""

    @pytest.mark.asyncio
    async def test_publishes_all_files_in_one_commit(self, fake_github):
        fake_github.add_repository("app")
        files = _files(4)

        async with GitHubClient("token", transport=fake_github.transport) as github:
            outcome = await RepositoryPublisher(github, "octocat", "app").publish(
                files, AUTHOR, "Initial scaffold"
            )

        assert outcome.state == PublishState.PUBLISHED
        assert outcome.history == [
            PublishState.CREATED,
            PublishState.BOOTSTRAPPED,
            PublishState.TREE_BUILT,
            PublishState.COMMITTED,
            PublishState.PUBLISHED,
        ]
        assert fake_github.head("app") == outcome.commit_sha
        assert fake_github.commits[outcome.commit_sha]["parents"] == [outcome.bootstrap_sha]
        assert fake_github.commits[outcome.commit_sha]["message"] == "Initial scaffold"
        assert fake_github.tree_paths(outcome.commit_sha) == sorted(f.path for f in files)
        assert fake_github.file_content(outcome.commit_sha, "src/file2.ts") == "export const n = 2;\n"

    @pytest.mark.asyncio
    async def test_failure_after_bootstrap_leaves_branch_at_bootstrap(self, fake_github):
        fake_github.add_repository("app")
        fake_github.fail("commit", 500)
        publisher = None

        async with GitHubClient("token", transport=fake_github.transport) as github:
            publisher = RepositoryPublisher(github, "octocat", "app")
            with pytest.raises(RemoteTransientError) as exc_info:
                await publisher.publish(_files(), AUTHOR, "Initial scaffold")

        bootstrap = fake_github.head("app")
        assert exc_info.value.step == "creating-commit"
        assert publisher.state == PublishState.ERROR
        assert PublishState.TREE_BUILT in publisher.history
        assert fake_github.commits[bootstrap]["parents"] == []
        assert fake_github.tree_paths(bootstrap) == [".gitignore"]

    @pytest.mark.asyncio
    async def test_retry_resumes_from_bootstrap(self, fake_github):
        fake_github.add_repository("app")
        fake_github.fail("tree", 503)
        files = _files()

        async with GitHubClient("token", transport=fake_github.transport) as github:
            with pytest.raises(RemoteTransientError):
                await RepositoryPublisher(github, "octocat", "app").publish(
                    files, AUTHOR, "Initial scaffold"
                )
            bootstrap = fake_github.head("app")

            outcome = await RepositoryPublisher(github, "octocat", "app").publish(
                files, AUTHOR, "Initial scaffold"
            )

        assert outcome.bootstrap_sha == bootstrap
        assert fake_github.commits[outcome.commit_sha]["parents"] == [bootstrap]
        assert fake_github.tree_paths(outcome.commit_sha) == sorted(f.path for f in files)
        assert fake_github.calls.count("contents") == 1

    @pytest.mark.asyncio
    async def test_existing_history_keeps_every_file(self, fake_github):
        fake_github.add_repository("app")
        existing = fake_github.seed_commit("app", {"README.md": "# Existing\n"})
        files = _files()

        async with GitHubClient("token", transport=fake_github.transport) as github:
            outcome = await RepositoryPublisher(github, "octocat", "app").publish(
                files, AUTHOR, "Initial scaffold"
            )

        assert outcome.state == PublishState.PUBLISHED
        assert outcome.bootstrap_sha == existing
        assert fake_github.commits[outcome.commit_sha]["parents"] == [existing]
        assert fake_github.tree_paths(outcome.commit_sha) == sorted(
            ["README.md", *(f.path for f in files)]
        )
        assert fake_github.file_content(outcome.commit_sha, ".gitignore") == "node_modules/\n"
        assert "contents" not in fake_github.calls

    @pytest.mark.asyncio
    async def test_single_file_on_existing_branch_is_committed(self, fake_github):
        fake_github.add_repository("app")
        existing = fake_github.seed_commit("app", {"README.md": "# Existing\n"})

        async with GitHubClient("token", transport=fake_github.transport) as github:
            outcome = await RepositoryPublisher(github, "octocat", "app").publish(
                _files(1), AUTHOR, "Initial scaffold"
            )

        assert outcome.state == PublishState.PUBLISHED
        assert outcome.commit_sha != existing
        assert fake_github.tree_paths(outcome.commit_sha) == [".gitignore", "README.md"]

    @pytest.mark.asyncio
    async def test_branch_lookup_failure_is_reported_at_bootstrap(self, fake_github):
        fake_github.add_repository("app")
        fake_github.fail("get-ref", 502)

        async with GitHubClient("token", transport=fake_github.transport) as github:
            with pytest.raises(RemoteTransientError) as exc_info:
                await RepositoryPublisher(github, "octocat", "app").publish(
                    _files(), AUTHOR, "Initial scaffold"
                )

        assert exc_info.value.step == "bootstrapping"
        assert "contents" not in fake_github.calls

    @pytest.mark.asyncio
    async def test_single_file_ends_at_bootstrap(self, fake_github):
        fake_github.add_repository("app")

        async with GitHubClient("token", transport=fake_github.transport) as github:
            outcome = await RepositoryPublisher(github, "octocat", "app").publish(
                _files(1), AUTHOR, "Initial scaffold"
            )

        assert outcome.state == PublishState.BOOTSTRAPPED
        assert outcome.commit_sha == outcome.bootstrap_sha == fake_github.head("app")
        assert "blob" not in fake_github.calls

    @pytest.mark.asyncio
    async def test_moved_branch_is_not_overwritten(self, fake_github):
        fake_github.add_repository("app")
        foreign = "f" * 40

        def move_branch() -> None:
            fake_github.refs[("app", "heads/main")] = foreign

        fake_github.before("commit", move_branch)

        async with GitHubClient("token", transport=fake_github.transport) as github:
            with pytest.raises(RemoteReferenceConflictError):
                await RepositoryPublisher(github, "octocat", "app").publish(
                    _files(), AUTHOR, "Initial scaffold"
                )

        assert fake_github.head("app") == foreign
        assert "update-ref" not in fake_github.calls

    @pytest.mark.asyncio
    async def test_empty_file_list_is_rejected(self, fake_github):
        async with GitHubClient("token", transport=fake_github.transport) as github:
            with pytest.raises(RemotePublishError):
                await RepositoryPublisher(github, "octocat", "app").publish([], AUTHOR, "x")

        assert fake_github.calls == []

    @pytest.mark.asyncio
    async def test_reports_progress(self, fake_github):
        fake_github.add_repository("app")
        store = ProgressStore()
        store.create("gen")

        async with GitHubClient("token", transport=fake_github.transport) as github:
            await RepositoryPublisher(
                github, "octocat", "app", progress=ProgressTracker(store, "gen")
            ).publish(_files(), AUTHOR, "Initial scaffold")

        steps = [event.step for event in store.require("gen").events]
        assert steps == [
            GenerationStep.BOOTSTRAPPING,
            GenerationStep.CREATING_BLOBS,
            GenerationStep.CREATING_TREE,
            GenerationStep.CREATING_COMMIT,
            GenerationStep.UPDATING_REFERENCE,
        ]
