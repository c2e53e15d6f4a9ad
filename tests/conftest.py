"""Pytest configuration and fixtures."""

import base64
import hashlib
import json
import re
from typing import Any, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from stackforge.core.cache import TemplateCache, get_template_cache
from stackforge.core.progress import ProgressStore, get_progress_store
from stackforge.core.rate_limit import get_repository_rate_limiter
from stackforge.main import app
from stackforge.models.config import ScaffoldConfig


@pytest.fixture
async def client() -> AsyncClient:
    """Create an async test client with fresh process-wide state."""
    store = get_progress_store()
    store._records.clear()
    store._subscribers.clear()
    get_repository_rate_limiter()._hits.clear()
    get_template_cache().clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def progress_store() -> ProgressStore:
    """Create a fresh progress store for tests."""
    return ProgressStore(ttl_minutes=30)


@pytest.fixture
def template_cache() -> TemplateCache:
    return TemplateCache(max_entries=64)


@pytest.fixture
def valid_config() -> ScaffoldConfig:
    """The default wizard configuration with a name and description filled in."""
    return ScaffoldConfig(project_name="my-app", description="A sample application")


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """A camelCase request body for a generatable configuration."""
    return {
        "projectName": "my-app",
        "description": "A sample application",
        "frontendFramework": "nextjs",
        "backendFramework": "nextjs-api",
        "projectStructure": "nextjs-only",
        "nextjsRouter": "app",
        "deployment": ["vercel"],
    }


def _sha(*parts: Any) -> str:
    payload = json.dumps(parts, sort_keys=True, default=str)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class FakeGitHub:
    """In-memory GitHub serving the repository and git database endpoints.

    Objects are content addressed, refs are per repository, and non-forced
    ref updates must fast-forward. ``fail`` and ``before`` inject one-shot
    failures and side effects keyed by operation name.
    """

    ROUTES: tuple[tuple[str, str, str], ...] = (
        ("GET", r"/user", "user"),
        ("POST", r"/user/repos", "create-repo"),
        ("GET", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)", "get-repo"),
        ("PUT", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/contents/(?P<path>.+)", "contents"),
        ("POST", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/blobs", "blob"),
        ("GET", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/commits/(?P<sha>\w+)", "get-commit"),
        ("POST", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/trees", "tree"),
        ("POST", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/commits", "commit"),
        ("GET", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/ref/(?P<ref>.+)", "get-ref"),
        ("PATCH", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/refs/(?P<ref>.+)", "update-ref"),
        ("POST", r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/git/refs", "create-ref"),
    )

    def __init__(self, login: str = "octocat"):
        self.login = login
        self.repos: dict[str, dict[str, Any]] = {}
        self.blobs: dict[str, str] = {}
        self.trees: dict[str, dict[str, str]] = {}
        self.commits: dict[str, dict[str, Any]] = {}
        self.refs: dict[tuple[str, str], str] = {}
        self.calls: list[str] = []
        self._failures: dict[str, httpx.Response] = {}
        self._hooks: dict[str, Callable[[], None]] = {}
        self.transport = httpx.MockTransport(self.handle)

    # Test controls

    def fail(self, operation: str, status_code: int, headers: dict[str, str] | None = None) -> None:
        self._failures[operation] = httpx.Response(
            status_code, json={"message": f"injected {operation} failure"}, headers=headers
        )

    def before(self, operation: str, hook: Callable[[], None]) -> None:
        self._hooks[operation] = hook

    def add_repository(self, name: str) -> dict[str, Any]:
        repo = {
            "name": name,
            "owner": {"login": self.login},
            "html_url": f"https://github.com/{self.login}/{name}",
            "default_branch": "main",
            "private": False,
        }
        self.repos[name] = repo
        return repo

    def seed_commit(self, repo: str, files: dict[str, str], branch: str = "main") -> str:
        """Put a commit with ``files`` on ``branch`` as if someone else pushed it."""
        entries = {path: self._store_blob(content) for path, content in files.items()}
        parent = self.head(repo, branch)
        commit = self._store_commit(
            self._store_tree(entries), "Existing history", [parent] if parent else []
        )
        self.refs[(repo, f"heads/{branch}")] = commit
        return commit

    def head(self, repo: str, branch: str = "main") -> str | None:
        return self.refs.get((repo, f"heads/{branch}"))

    def tree_paths(self, commit_sha: str) -> list[str]:
        return sorted(self.trees[self.commits[commit_sha]["tree"]])

    def file_content(self, commit_sha: str, path: str) -> str:
        return self.blobs[self.trees[self.commits[commit_sha]["tree"]][path]]

    # Transport

    def handle(self, request: httpx.Request) -> httpx.Response:
        for method, pattern, operation in self.ROUTES:
            match = re.fullmatch(pattern, request.url.path)
            if request.method == method and match:
                self.calls.append(operation)
                hook = self._hooks.pop(operation, None)
                if hook is not None:
                    hook()
                failure = self._failures.pop(operation, None)
                if failure is not None:
                    return failure
                body = json.loads(request.content) if request.content else {}
                handler = getattr(self, "_" + operation.replace("-", "_"))
                return handler(body, **match.groupdict())
        return httpx.Response(404, json={"message": "Not Found"})

    def _user(self, body: dict) -> httpx.Response:
        return httpx.Response(
            200, json={"login": self.login, "id": 1, "name": "The Octocat", "email": None}
        )

    def _create_repo(self, body: dict) -> httpx.Response:
        if body["name"] in self.repos:
            return httpx.Response(
                422,
                json={
                    "message": "Repository creation failed.",
                    "errors": [{"message": "name already exists on this account"}],
                },
            )
        repo = self.add_repository(body["name"])
        repo["private"] = body.get("private", False)
        return httpx.Response(201, json=repo)

    def _get_repo(self, body: dict, owner: str, repo: str) -> httpx.Response:
        if repo not in self.repos:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=self.repos[repo])

    def _contents(self, body: dict, owner: str, repo: str, path: str) -> httpx.Response:
        content = base64.b64decode(body["content"]).decode("utf-8")
        blob = self._store_blob(content)
        ref = f"heads/{body['branch']}"
        parent = self.refs.get((repo, ref))
        entries = dict(self.trees[self.commits[parent]["tree"]]) if parent else {}
        entries[path] = blob
        tree = self._store_tree(entries)
        commit = self._store_commit(tree, body["message"], [parent] if parent else [])
        self.refs[(repo, ref)] = commit
        return httpx.Response(201, json={"content": {"path": path, "sha": blob}, "commit": {"sha": commit}})

    def _blob(self, body: dict, owner: str, repo: str) -> httpx.Response:
        return httpx.Response(201, json={"sha": self._store_blob(body["content"])})

    def _get_commit(self, body: dict, owner: str, repo: str, sha: str) -> httpx.Response:
        commit = self.commits.get(sha)
        if commit is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(
            200,
            json={
                "sha": sha,
                "tree": {"sha": commit["tree"]},
                "parents": [{"sha": p} for p in commit["parents"]],
                "message": commit["message"],
            },
        )

    def _tree(self, body: dict, owner: str, repo: str) -> httpx.Response:
        base = body.get("base_tree")
        entries = dict(self.trees[base]) if base else {}
        for entry in body["tree"]:
            entries[entry["path"]] = entry["sha"]
        return httpx.Response(201, json={"sha": self._store_tree(entries)})

    def _commit(self, body: dict, owner: str, repo: str) -> httpx.Response:
        sha = self._store_commit(body["tree"], body["message"], body["parents"])
        return httpx.Response(201, json={"sha": sha})

    def _get_ref(self, body: dict, owner: str, repo: str, ref: str) -> httpx.Response:
        if not any(key[0] == repo for key in self.refs):
            return httpx.Response(409, json={"message": "Git Repository is empty."})
        sha = self.refs.get((repo, ref))
        if sha is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json={"ref": f"refs/{ref}", "object": {"sha": sha}})

    def _update_ref(self, body: dict, owner: str, repo: str, ref: str) -> httpx.Response:
        current = self.refs.get((repo, ref))
        if current is None:
            return httpx.Response(422, json={"message": "Reference does not exist"})
        if not body.get("force") and not self._descends(body["sha"], current):
            return httpx.Response(422, json={"message": "Update is not a fast forward"})
        self.refs[(repo, ref)] = body["sha"]
        return httpx.Response(200, json={"ref": f"refs/{ref}", "object": {"sha": body["sha"]}})

    def _create_ref(self, body: dict, owner: str, repo: str) -> httpx.Response:
        ref = body["ref"].removeprefix("refs/")
        if (repo, ref) in self.refs:
            return httpx.Response(422, json={"message": "Reference already exists"})
        self.refs[(repo, ref)] = body["sha"]
        return httpx.Response(201, json={"ref": body["ref"], "object": {"sha": body["sha"]}})

    # Object store

    def _store_blob(self, content: str) -> str:
        sha = _sha("blob", content)
        self.blobs[sha] = content
        return sha

    def _store_tree(self, entries: dict[str, str]) -> str:
        sha = _sha("tree", entries)
        self.trees[sha] = entries
        return sha

    def _store_commit(self, tree: str, message: str, parents: list[str]) -> str:
        sha = _sha("commit", tree, message, parents, len(self.commits))
        self.commits[sha] = {"tree": tree, "message": message, "parents": list(parents)}
        return sha

    def _descends(self, sha: str, ancestor: str) -> bool:
        pending = [sha]
        while pending:
            current = pending.pop()
            if current == ancestor:
                return True
            pending.extend(self.commits.get(current, {}).get("parents", []))
        return False


@pytest.fixture
def fake_github() -> FakeGitHub:
    """An empty in-memory GitHub account."""
    return FakeGitHub()
