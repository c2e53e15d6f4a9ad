"""Unit tests for the configuration validator."""

import pytest

from stackforge.models.config import Extras, ScaffoldConfig
from stackforge.validation import RULE_IDS, RULES, validate


def _config(**overrides) -> ScaffoldConfig:
    data = {"project_name": "my-app", "description": "A sample application"}
    data.update(overrides)
    return ScaffoldConfig(**data)


def _api_only(**overrides) -> ScaffoldConfig:
    return _config(
        frontend_framework="react",
        backend_framework="express",
        project_structure="express-api-only",
        **overrides,
    )


class TestValidator:
    """Tests for validate()."""

    def test_default_configuration_is_clean(self, valid_config: ScaffoldConfig):
        result = validate(valid_config)

        assert result.is_valid
        assert result.can_generate
        assert result.errors == []
        assert result.warnings == []

    def test_rule_ids_are_unique(self):
        assert len(RULE_IDS) == len(RULES)

    def test_every_matching_error_is_reported(self):
        config = ScaffoldConfig(project_name="", description="", auth="nextauth", deployment=[])

        result = validate(config)

        assert {issue.rule_id for issue in result.errors} == {
            "project-name-required",
            "description-required",
            "auth-database",
            "deployment-target-required",
        }
        assert not result.can_generate

    def test_warnings_do_not_block_generation(self):
        result = validate(_config(api="graphql"))

        assert result.can_generate
        assert [issue.rule_id for issue in result.warnings] == ["graphql-complexity"]

    def test_serializes_camel_case(self):
        dumped = validate(_config(auth="clerk")).model_dump(by_alias=True)

        assert dumped["isValid"] is False
        assert dumped["canGenerate"] is False
        assert dumped["errors"][0]["ruleId"] == "auth-database"


class TestProjectFields:
    """Tests for name and description rules."""

    @pytest.mark.parametrize("name", ["my-app", "app2", "a", "x" * 50])
    def test_valid_project_names(self, name):
        assert "project-name-required" not in validate(_config(project_name=name)).rule_ids

    @pytest.mark.parametrize("name", ["", "   ", "My App", "my_app", "UPPER", "x" * 51, "my-app\n"])
    def test_invalid_project_names(self, name):
        assert "project-name-required" in validate(_config(project_name=name)).rule_ids

    def test_description_length_limit(self):
        assert "description-required" not in validate(_config(description="d" * 200)).rule_ids
        assert "description-required" in validate(_config(description="d" * 201)).rule_ids

    def test_surrounding_whitespace_is_rejected(self):
        """Names are used verbatim for the package, archive and repository."""
        result = validate(_config(project_name=" my-app "))

        assert "project-name-required" in result.rule_ids
        assert result.can_generate is False

    def test_empty_description_is_rejected(self):
        assert "description-required" in validate(_config(description="")).rule_ids


class TestCompatibilityRules:
    """Tests for cross-field compatibility rules."""

    def test_auth_requires_database(self):
        result = validate(_config(auth="nextauth"))

        assert "auth-database" in {issue.rule_id for issue in result.errors}
        error = result.errors[0]
        assert error.field == "database"
        assert error.severity == "error"

    def test_auth_with_database_is_accepted(self):
        assert "auth-database" not in validate(
            _config(auth="nextauth", database="prisma-postgres")
        ).rule_ids

    def test_vercel_cannot_host_standalone_api(self):
        result = validate(_api_only(deployment=["vercel"]))

        assert "vercel-express" in {issue.rule_id for issue in result.errors}
        assert not result.can_generate

    def test_standalone_api_on_render_is_accepted(self):
        result = validate(_api_only(deployment=["render"]))

        assert result.can_generate

    def test_ai_template_requires_nextjs_frontend(self):
        spa = _config(
            frontend_framework="react",
            backend_framework="none",
            project_structure="react-spa",
            ai_template="chatbot",
        )

        result = validate(spa)

        assert "ai-framework-compatibility" in {issue.rule_id for issue in result.errors}
        assert "ai-api-key" in {issue.rule_id for issue in result.warnings}

    def test_ai_template_rejected_for_api_only_nextjs(self):
        config = _config(
            backend_framework="express",
            project_structure="express-api-only",
            deployment=["render"],
            ai_template="semantic-search",
        )

        assert "ai-framework-compatibility" in validate(config).rule_ids

    def test_ai_template_on_monorepo_is_accepted(self):
        config = _config(
            backend_framework="express",
            project_structure="fullstack-monorepo",
            ai_template="code-assistant",
        )

        result = validate(config)

        assert result.can_generate
        assert result.rule_ids == {"ai-api-key"}

    def test_nextjs_structure_requires_router(self):
        assert "nextjs-router-required" in validate(_config(nextjs_router=None)).rule_ids

    def test_spa_does_not_require_router(self):
        config = _config(
            frontend_framework="vue",
            backend_framework="none",
            project_structure="react-spa",
            nextjs_router=None,
        )

        assert validate(config).can_generate

    def test_nextjs_api_requires_nextjs_frontend(self):
        config = _config(frontend_framework="angular", backend_framework="nextjs-api")

        assert "nextjs-api-frontend" in validate(config).rule_ids

    def test_deployment_target_required(self):
        assert "deployment-target-required" in validate(_config(deployment=[])).rule_ids


class TestWarnings:
    """Tests for warning-severity rules."""

    def test_trpc_on_standalone_api(self):
        result = validate(_api_only(api="trpc", deployment=["render"]))

        assert result.can_generate
        assert "trpc-monorepo" in {issue.rule_id for issue in result.warnings}

    def test_trpc_in_nextjs_has_no_warning(self):
        assert "trpc-monorepo" not in validate(_config(api="trpc")).rule_ids

    def test_supabase_auth_prefers_supabase_database(self):
        result = validate(_config(auth="supabase", database="prisma-postgres"))

        assert result.can_generate
        assert "supabase-auth-db" in {issue.rule_id for issue in result.warnings}

    def test_nextauth_with_mongodb(self):
        result = validate(_config(auth="nextauth", database="mongodb"))

        assert "mongodb-auth-compatibility" in {issue.rule_id for issue in result.warnings}

    def test_docker_recommended_for_railway(self):
        assert "docker-deployment-recommendation" in validate(
            _config(deployment=["railway"])
        ).rule_ids
        assert "docker-deployment-recommendation" not in validate(
            _config(deployment=["railway"], extras=Extras(docker=True))
        ).rule_ids
