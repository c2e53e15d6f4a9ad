"""Initial-commit publisher for freshly created repositories.

An empty repository has no commit to build on, so the first file goes through
the contents API, which creates the branch and the bootstrap commit. All
remaining files are written as blobs, gathered into one tree on top of the
bootstrap tree and committed once. The branch only moves in the last step:
any failure before that leaves the repository at the bootstrap commit, and
publishing again resumes from there. A branch that already has history is
used as the base as is, and then every file goes into the new tree.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from stackforge.config import settings
from stackforge.core.exceptions import (
    RemotePublishError,
    RemoteReferenceConflictError,
)
from stackforge.core.progress import ProgressTracker
from stackforge.github.client import FILE_MODE, GitAuthor, GitHubClient
from stackforge.models.generation import GeneratedFile
from stackforge.models.progress import GenerationStep
from stackforge.utils.logging import get_logger

logger = get_logger(__name__)

BOOTSTRAP_MESSAGE = "Initial commit"


class PublishState(str, Enum):
    """Where a publish run currently stands."""

    CREATED = "created"
    BOOTSTRAPPED = "bootstrapped"
    TREE_BUILT = "tree-built"
    COMMITTED = "committed"
    PUBLISHED = "published"
    ERROR = "error"


@dataclass
class PublishOutcome:
    """Result of a successful publish."""

    commit_sha: str
    bootstrap_sha: str
    state: PublishState
    history: list[PublishState] = field(default_factory=list)


class RepositoryPublisher:
    """Publishes a file set as the initial history of one repository branch."""

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        branch: str | None = None,
        concurrency: int | None = None,
        progress: ProgressTracker | None = None,
    ):
        self.client = client
        self.owner = owner
        self.repo = repo
        self.branch = branch or settings.github_default_branch
        self.concurrency = concurrency or settings.github_blob_concurrency
        self.progress = progress
        self.state = PublishState.CREATED
        self.history: list[PublishState] = [PublishState.CREATED]

    @property
    def ref(self) -> str:
        return f"heads/{self.branch}"

    def _advance(self, state: PublishState) -> None:
        self.state = state
        self.history.append(state)
        logger.info(
            f"github.publish.{state.value.replace('-', '_')}",
            owner=self.owner,
            repo=self.repo,
            branch=self.branch,
        )

    def _report(self, step: GenerationStep, message: str, percent: int) -> None:
        if self.progress is not None:
            self.progress.update(step, message, percent)

    async def publish(
        self,
        files: list[GeneratedFile],
        author: GitAuthor,
        commit_message: str,
    ) -> PublishOutcome:
        """Commit ``files`` to the branch and return the final commit SHA.

        Raises:
            RemotePublishError: Any step failed. The branch is either absent
                or still at the bootstrap commit.
        """
        if not files:
            raise RemotePublishError("No files to commit", step="bootstrapping")
        try:
            return await self._publish(files, author, commit_message)
        except RemotePublishError as e:
            self._fail(e)
            raise

    def _fail(self, error: RemotePublishError) -> None:
        self._advance(PublishState.ERROR)
        logger.error(
            "github.publish.failed",
            owner=self.owner,
            repo=self.repo,
            step=error.step,
            error=error.message,
        )

    async def _publish(
        self,
        files: list[GeneratedFile],
        author: GitAuthor,
        commit_message: str,
    ) -> PublishOutcome:
        existing = await self.client.get_reference(
            self.owner, self.repo, self.ref, step="bootstrapping"
        )
        if existing is not None:
            # The branch already has history; every file goes into the new tree.
            logger.info(
                "github.publish.resuming",
                owner=self.owner,
                repo=self.repo,
                head=existing,
            )
            bootstrap_sha = existing
            remaining = files
        else:
            bootstrap_sha = await self._bootstrap(files[0], author)
            remaining = files[1:]
        self._advance(PublishState.BOOTSTRAPPED)

        if not remaining:
            return self._outcome(bootstrap_sha, bootstrap_sha)

        base_commit = await self.client.get_commit(self.owner, self.repo, bootstrap_sha)
        base_tree = base_commit["tree"]["sha"]

        self._report(
            GenerationStep.CREATING_BLOBS, f"Uploading {len(remaining)} files", 55
        )
        entries = await self._create_blobs(remaining)

        self._report(GenerationStep.CREATING_TREE, "Building the file tree", 75)
        tree_sha = await self.client.create_tree(self.owner, self.repo, entries, base_tree)
        self._advance(PublishState.TREE_BUILT)

        self._report(GenerationStep.CREATING_COMMIT, "Creating the initial commit", 85)
        commit_sha = await self.client.create_commit(
            self.owner, self.repo, tree_sha, commit_message, author, [bootstrap_sha]
        )
        self._advance(PublishState.COMMITTED)

        self._report(GenerationStep.UPDATING_REFERENCE, f"Updating {self.branch}", 95)
        current = await self.client.get_reference(self.owner, self.repo, self.ref)
        if current != bootstrap_sha:
            raise RemoteReferenceConflictError(self.ref, bootstrap_sha, current)
        await self.client.update_reference(
            self.owner, self.repo, self.ref, commit_sha, force=False
        )
        self._advance(PublishState.PUBLISHED)
        return self._outcome(commit_sha, bootstrap_sha)

    async def _bootstrap(self, first: GeneratedFile, author: GitAuthor) -> str:
        """Create the first file, commit and branch through the contents API."""
        self._report(GenerationStep.BOOTSTRAPPING, f"Creating {first.path}", 45)
        data = await self.client.create_file(
            self.owner,
            self.repo,
            first.path,
            first.content,
            BOOTSTRAP_MESSAGE,
            author,
            self.branch,
        )
        return data["commit"]["sha"]

    async def _create_blobs(self, files: list[GeneratedFile]) -> list[dict[str, str]]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def upload(generated: GeneratedFile) -> dict[str, str]:
            async with semaphore:
                sha = await self.client.create_blob(self.owner, self.repo, generated.content)
            return {"path": generated.path, "mode": FILE_MODE, "type": "blob", "sha": sha}

        return list(await asyncio.gather(*(upload(f) for f in files)))

    def _outcome(self, commit_sha: str, bootstrap_sha: str) -> PublishOutcome:
        # A single-file publish ends at BOOTSTRAPPED; that commit is the history.
        return PublishOutcome(
            commit_sha=commit_sha,
            bootstrap_sha=bootstrap_sha,
            state=self.state,
            history=list(self.history),
        )
