"""Async GitHub REST client for repository creation and git object writes."""

import base64
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx

from stackforge.config import settings
from stackforge.core.exceptions import (
    RemoteAuthError,
    RemoteNameConflictError,
    RemotePublishError,
    RemoteRateLimitedError,
    RemoteTransientError,
)
from stackforge.utils.logging import get_logger

logger = get_logger(__name__)

FILE_MODE = "100644"


@dataclass(frozen=True)
class GitAuthor:
    """Commit author and committer identity."""

    name: str
    email: str

    def signature(self, timestamp: datetime | None = None) -> dict[str, str]:
        signature = {"name": self.name, "email": self.email}
        if timestamp is not None:
            signature["date"] = timestamp.isoformat()
        return signature


def _retry_after(response: httpx.Response) -> int:
    """Seconds to wait, from Retry-After or the rate-limit reset header."""
    header = response.headers.get("Retry-After")
    if header and header.isdigit():
        return int(header)
    reset = response.headers.get("X-RateLimit-Reset")
    if reset and reset.isdigit():
        return max(1, int(reset) - int(time.time()))
    return 60


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


def raise_for_github_status(response: httpx.Response, step: str | None = None) -> None:
    """Translate an unsuccessful GitHub response into a typed failure."""
    if response.is_success:
        return
    status_code = response.status_code
    message = _error_message(response)
    details = {"status_code": status_code}

    if status_code == 401:
        raise RemoteAuthError(
            f"GitHub rejected the credentials: {message}", step=step, details=details
        )
    if status_code == 429 or (
        status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
    ):
        raise RemoteRateLimitedError(
            f"GitHub rate limit exceeded: {message}",
            retry_after=_retry_after(response),
            source="github",
            step=step,
        )
    if status_code == 403:
        raise RemoteAuthError(
            f"GitHub denied the request: {message}", step=step, details=details
        )
    if status_code >= 500:
        raise RemoteTransientError(
            f"GitHub is unavailable: {message}", step=step, details=details
        )
    raise RemotePublishError(
        f"GitHub request failed: {message}", step=step, details=details
    )


class GitHubClient:
    """Thin async wrapper over the GitHub endpoints the publisher needs.

    Use as an async context manager; every call shares one connection pool.
    Timeouts and transport failures surface as :class:`RemoteTransientError`.
    """

    def __init__(
        self,
        token: str,
        api_base: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.api_base = (api_base or settings.github_api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.github_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def __aenter__(self) -> "GitHubClient":
        self._client = httpx.AsyncClient(
            base_url=self.api_base,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _send(
        self, method: str, path: str, step: str | None = None, **kwargs: Any
    ) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("GitHubClient must be used as an async context manager")
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("github.request.timeout", method=method, path=path, step=step)
            raise RemoteTransientError(
                f"GitHub request timed out: {method} {path}", step=step
            ) from e
        except httpx.TransportError as e:
            logger.warning(
                "github.request.transport_error",
                method=method,
                path=path,
                step=step,
                error=str(e),
            )
            raise RemoteTransientError(f"GitHub request failed: {e}", step=step) from e

        logger.debug(
            "github.request.completed",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def _request(
        self, method: str, path: str, step: str | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        response = await self._send(method, path, step, **kwargs)
        raise_for_github_status(response, step)
        return response.json()

    # Users and repositories

    async def get_authenticated_user(self) -> dict[str, Any]:
        return await self._request("GET", "/user", step="authenticating")

    async def get_repository(self, owner: str, name: str) -> dict[str, Any] | None:
        response = await self._send("GET", f"/repos/{owner}/{name}", step="creating-repository")
        if response.status_code == 404:
            return None
        raise_for_github_status(response, "creating-repository")
        return response.json()

    async def create_repository(
        self, name: str, description: str = "", private: bool = False
    ) -> dict[str, Any]:
        """Create an empty repository for the authenticated user."""
        step = "creating-repository"
        response = await self._send(
            "POST",
            "/user/repos",
            step,
            json={
                "name": name,
                "description": description,
                "private": private,
                "auto_init": False,
            },
        )
        if response.status_code == 422 and "already exists" in response.text:
            raise RemoteNameConflictError(name, step=step)
        raise_for_github_status(response, step)
        return response.json()

    # Contents API (works on an empty repository)

    async def create_file(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        author: GitAuthor,
        branch: str,
    ) -> dict[str, Any]:
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
        return await self._request(
            "PUT",
            f"/repos/{owner}/{repo}/contents/{path}",
            step="bootstrapping",
            json={
                "message": message,
                "content": encoded,
                "branch": branch,
                "author": author.signature(),
                "committer": author.signature(),
            },
        )

    # Git database API

    async def create_blob(self, owner: str, repo: str, content: str) -> str:
        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/blobs",
            step="creating-blobs",
            json={"content": content, "encoding": "utf-8"},
        )
        return data["sha"]

    async def get_commit(self, owner: str, repo: str, sha: str) -> dict[str, Any]:
        return await self._request(
            "GET", f"/repos/{owner}/{repo}/git/commits/{sha}", step="creating-tree"
        )

    async def create_tree(
        self,
        owner: str,
        repo: str,
        entries: list[dict[str, str]],
        base_tree: str | None = None,
    ) -> str:
        payload: dict[str, Any] = {"tree": entries}
        if base_tree:
            payload["base_tree"] = base_tree
        data = await self._request(
            "POST", f"/repos/{owner}/{repo}/git/trees", step="creating-tree", json=payload
        )
        return data["sha"]

    async def create_commit(
        self,
        owner: str,
        repo: str,
        tree: str,
        message: str,
        author: GitAuthor,
        parents: list[str],
    ) -> str:
        now = datetime.now(timezone.utc)
        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/commits",
            step="creating-commit",
            json={
                "message": message,
                "tree": tree,
                "parents": parents,
                "author": author.signature(now),
                "committer": author.signature(now),
            },
        )
        return data["sha"]

    async def get_reference(
        self, owner: str, repo: str, ref: str, step: str = "updating-reference"
    ) -> str | None:
        """Commit SHA a reference points at, ``None`` if it does not exist.

        GitHub answers 409 for any ref lookup on an empty repository.
        """
        response = await self._send(
            "GET", f"/repos/{owner}/{repo}/git/ref/{ref}", step=step
        )
        if response.status_code in (404, 409):
            return None
        raise_for_github_status(response, step)
        return response.json()["object"]["sha"]

    async def update_reference(
        self, owner: str, repo: str, ref: str, sha: str, force: bool = False
    ) -> str:
        data = await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/git/refs/{ref}",
            step="updating-reference",
            json={"sha": sha, "force": force},
        )
        return data["object"]["sha"]

    async def create_reference(self, owner: str, repo: str, ref: str, sha: str) -> str:
        full_ref = ref if ref.startswith("refs/") else f"refs/{ref}"
        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            step="updating-reference",
            json={"ref": full_ref, "sha": sha},
        )
        return data["object"]["sha"]
