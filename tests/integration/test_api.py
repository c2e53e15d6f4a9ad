"""Integration tests for API endpoints."""

import io
import json
import zipfile

import pytest
from httpx import AsyncClient

from stackforge.api.deps import get_publisher
from stackforge.core.rate_limit import RateLimiter
from stackforge.main import app
from stackforge.services.publish_service import PublishService

AUTH = {"Authorization": "Bearer gho_test"}


class TestHealthEndpoint:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        """Test health check returns healthy status."""
        response = await client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "environment" in data
        assert "timestamp" in data

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient):
        response = await client.get("/v1/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["ready"] is True
        assert data["templates"] > 0


class TestConfigEndpoints:
    """Tests for defaults, validation and wizard transitions."""

    @pytest.mark.asyncio
    async def test_defaults_are_camel_case(self, client: AsyncClient):
        response = await client.get("/v1/config/defaults")

        assert response.status_code == 200
        data = response.json()
        assert data["frontendFramework"] == "nextjs"
        assert data["projectStructure"] == "nextjs-only"
        assert data["extras"]["githubActions"] is False

    @pytest.mark.asyncio
    async def test_validate_reports_everything(self, client: AsyncClient, valid_payload):
        payload = {**valid_payload, "projectName": "", "auth": "nextauth"}

        response = await client.post("/v1/config/validate", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["isValid"] is False
        assert data["canGenerate"] is False
        fields = {issue["field"] for issue in data["errors"]}
        assert {"projectName", "database"} <= fields
        assert all("ruleId" in issue for issue in data["errors"])

    @pytest.mark.asyncio
    async def test_validate_rejects_unknown_option(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/config/validate", json={**valid_payload, "styling": "bootstrap"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_transition_applies_rules(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/config/transition",
            json={"config": valid_payload, "field": "frontendFramework", "value": "react"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["config"]["frontendFramework"] == "react"
        assert data["config"]["backendFramework"] == "none"
        assert data["structure"] == "react-spa"
        assert "canGenerate" in data["validation"]

    @pytest.mark.asyncio
    async def test_transition_unknown_field(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/config/transition",
            json={"config": valid_payload, "field": "theme", "value": "dark"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_transition_bad_value(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/config/transition",
            json={"config": valid_payload, "field": "database", "value": "oracle"},
        )

        assert response.status_code == 422


class TestScaffoldEndpoints:
    """Tests for JSON generation and archive download."""

    @pytest.mark.asyncio
    async def test_generate(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/scaffold/generate",
            json=valid_payload,
            headers={"X-Generation-ID": "gen-api-1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["generationId"] == "gen-api-1"
        paths = [f["path"] for f in data["result"]["files"]]
        assert "package.json" in paths
        assert "README.md" in paths
        assert data["result"]["metadata"]["project_name"] == "my-app"
        assert data["warnings"] == []

        progress = await client.get("/v1/progress/gen-api-1")
        assert progress.json()["status"] == "complete"

    @pytest.mark.asyncio
    async def test_generate_invalid_config(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/scaffold/generate", json={**valid_payload, "projectName": "Not Valid"}
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "CONFIGURATIONINVALIDERROR"
        assert error["details"]["errors"]
        assert "fallback" not in error

    @pytest.mark.asyncio
    async def test_generate_accepts_legacy_payload(self, client: AsyncClient):
        response = await client.post(
            "/v1/scaffold/generate",
            json={
                "projectName": "legacy-app",
                "description": "Built from the flat shape",
                "framework": "next",
            },
        )

        assert response.status_code == 200
        assert response.json()["result"]["metadata"]["structure"] == "nextjs-only"

    @pytest.mark.asyncio
    async def test_download(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/scaffold/download",
            json=valid_payload,
            headers={"X-Generation-ID": "dl-api-1"},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["content-disposition"] == 'attachment; filename="my-app.zip"'
        assert response.headers["x-generation-id"] == "dl-api-1"
        with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
            assert "my-app/package.json" in archive.namelist()


class TestProgressEndpoints:
    """Tests for progress polling and streaming."""

    @pytest.mark.asyncio
    async def test_unknown_generation(self, client: AsyncClient):
        response = await client.get("/v1/progress/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PROGRESSNOTFOUNDERROR"

    @pytest.mark.asyncio
    async def test_stream_replays_finished_run(self, client: AsyncClient, valid_payload):
        await client.post(
            "/v1/scaffold/generate",
            json=valid_payload,
            headers={"X-Generation-ID": "stream-1"},
        )

        response = await client.get("/v1/progress/stream-1/stream")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        events = [
            line.removeprefix("event:").strip()
            for line in response.text.splitlines()
            if line.startswith("event:")
        ]
        assert events[0] == "validating"
        assert events[-1] == "complete"
        data = [
            json.loads(line.removeprefix("data:").strip())
            for line in response.text.splitlines()
            if line.startswith("data:")
        ]
        assert data[-1]["progress"] == 100


class TestGitHubEndpoints:
    """Tests for repository publishing."""

    @pytest.fixture
    def publisher(self, fake_github) -> PublishService:
        service = PublishService(
            rate_limiter=RateLimiter(limit=1, window_seconds=3600),
            transport=fake_github.transport,
        )
        app.dependency_overrides[get_publisher] = lambda: service
        return service

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient, valid_payload):
        response = await client.post(
            "/v1/github/repositories", json={"config": valid_payload}
        )

        assert response.status_code == 401
        error = response.json()["error"]
        assert error["code"] == "REMOTEAUTHERROR"
        assert error["details"]["step"] == "authenticating"
        assert error["fallback"] == {"method": "POST", "path": "/v1/scaffold/download"}

    @pytest.mark.asyncio
    async def test_publish(self, client: AsyncClient, valid_payload, publisher, fake_github):
        response = await client.post(
            "/v1/github/repositories",
            json={"config": valid_payload, "generationId": "pub-api-1"},
            headers=AUTH,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["repositoryUrl"] == "https://github.com/octocat/my-app"
        assert data["state"] == "published"
        assert fake_github.head("my-app") == data["commitSha"]

        progress = (await client.get("/v1/progress/pub-api-1")).json()
        assert progress["status"] == "complete"
        assert progress["result_url"] == "https://github.com/octocat/my-app"

    @pytest.mark.asyncio
    async def test_rate_limited(self, client: AsyncClient, valid_payload, publisher):
        first = await client.post(
            "/v1/github/repositories", json={"config": valid_payload}, headers=AUTH
        )
        assert first.status_code == 201

        response = await client.post(
            "/v1/github/repositories",
            json={"config": valid_payload, "repositoryName": "another"},
            headers=AUTH,
        )

        assert response.status_code == 429
        assert int(response.headers["retry-after"]) > 0
        error = response.json()["error"]
        assert error["details"]["source"] == "app"
        assert error["fallback"]["path"] == "/v1/scaffold/download"

        quota = await client.get("/v1/github/rate-limit", headers=AUTH)
        assert quota.status_code == 200
        assert quota.json()["remaining"] == 0
        assert quota.json()["exceeded"] is True

    @pytest.mark.asyncio
    async def test_name_conflict(self, client: AsyncClient, valid_payload, publisher, fake_github):
        fake_github.add_repository("my-app")

        response = await client.post(
            "/v1/github/repositories", json={"config": valid_payload}, headers=AUTH
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "REMOTENAMECONFLICTERROR"

    @pytest.mark.asyncio
    async def test_github_outage(self, client: AsyncClient, valid_payload, publisher, fake_github):
        fake_github.fail("blob", 503)

        response = await client.post(
            "/v1/github/repositories", json={"config": valid_payload}, headers=AUTH
        )

        assert response.status_code == 503
        error = response.json()["error"]
        assert error["code"] == "REMOTETRANSIENTERROR"
        assert error["details"]["step"] == "creating-blobs"
