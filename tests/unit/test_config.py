"""Unit tests for configuration models, structure derivation and the reducer."""

import pytest
from pydantic import ValidationError

from stackforge.core.reducer import (
    adjust_backend_framework,
    apply_field_change,
    clear_incompatible_ai_template,
)
from stackforge.core.structure import (
    base_path,
    compatible_structures,
    derive_structure,
    resolve_structure,
    web_root,
)
from stackforge.models.config import (
    LegacyScaffoldConfig,
    ScaffoldConfig,
    coerce_config_payload,
    default_config,
    lift_legacy_config,
)


class TestScaffoldConfig:
    """Tests for the ScaffoldConfig model."""

    def test_defaults_describe_nextjs_only(self):
        config = default_config()

        assert config.frontend_framework == "nextjs"
        assert config.backend_framework == "nextjs-api"
        assert config.project_structure == "nextjs-only"
        assert config.nextjs_router == "app"
        assert config.deployment == ["vercel"]
        assert config.ai_template == "none"
        assert config.extras.prettier is True

    def test_accepts_camel_case_payload(self):
        config = ScaffoldConfig.model_validate(
            {
                "projectName": "shop",
                "aiTemplate": "chatbot",
                "aiProvider": "openai",
                "extras": {"githubActions": True},
            }
        )

        assert config.project_name == "shop"
        assert config.ai_template == "chatbot"
        assert config.ai_provider == "openai"
        assert config.extras.github_actions is True

    def test_dumps_camel_case_by_alias(self, valid_config: ScaffoldConfig):
        dumped = valid_config.model_dump(by_alias=True)

        assert dumped["projectName"] == "my-app"
        assert "frontendFramework" in dumped
        assert "githubActions" in dumped["extras"]

    def test_rejects_unknown_option(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(database="sqlite")

    def test_rejects_more_than_four_deployment_targets(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(deployment=["vercel", "render", "ec2", "railway", "vercel"])

    def test_is_immutable(self, valid_config: ScaffoldConfig):
        with pytest.raises(ValidationError):
            valid_config.project_name = "other"

    def test_fields_subset(self, valid_config: ScaffoldConfig):
        assert valid_config.fields_subset("styling", "shadcn") == {
            "styling": "tailwind",
            "shadcn": True,
        }


class TestLegacyConfig:
    """Tests for lifting the flat legacy shape."""

    @pytest.mark.parametrize(
        "framework,frontend,backend,structure",
        [
            ("next", "nextjs", "nextjs-api", "nextjs-only"),
            ("express", "react", "express", "express-api-only"),
            ("monorepo", "nextjs", "express", "fullstack-monorepo"),
        ],
    )
    def test_lift_maps_framework_onto_axes(self, framework, frontend, backend, structure):
        legacy = LegacyScaffoldConfig(project_name="legacy-app", framework=framework, auth="clerk")
        config = lift_legacy_config(legacy)

        assert config.frontend_framework == frontend
        assert config.backend_framework == backend
        assert config.project_structure == structure
        assert config.project_name == "legacy-app"
        assert config.auth == "clerk"

    def test_coerce_lifts_payload_with_framework(self):
        lifted = coerce_config_payload({"projectName": "old", "framework": "monorepo"})

        assert isinstance(lifted, ScaffoldConfig)
        assert lifted.project_structure == "fullstack-monorepo"

    def test_coerce_leaves_current_payload_alone(self):
        payload = {"projectName": "new", "frontendFramework": "vue", "framework": "next"}

        assert coerce_config_payload(payload) is payload


class TestStructureDerivation:
    """Tests for the frontend/backend precedence table."""

    @pytest.mark.parametrize(
        "frontend,backend,current,expected",
        [
            ("nextjs", "nextjs-api", "react-spa", "nextjs-only"),
            ("react", "none", "nextjs-only", "react-spa"),
            ("vue", "nextjs-api", None, "react-spa"),
            ("nextjs", "express", "nextjs-only", "fullstack-monorepo"),
            ("nextjs", "fastify", "express-api-only", "fullstack-monorepo"),
            ("react", "express", None, "express-api-only"),
            ("svelte", "nestjs", "react-spa", "express-api-only"),
            ("nextjs", "none", None, "nextjs-only"),
        ],
    )
    def test_derive_structure(self, frontend, backend, current, expected):
        assert derive_structure(frontend, backend, current) == expected

    def test_compatible_structures_for_nextjs_with_server(self):
        assert compatible_structures("nextjs", "express") == (
            "fullstack-monorepo",
            "express-api-only",
        )

    def test_resolve_keeps_consistent_explicit_structure(self):
        config = ScaffoldConfig(
            frontend_framework="nextjs",
            backend_framework="express",
            project_structure="express-api-only",
        )

        assert resolve_structure(config) == "express-api-only"

    def test_resolve_derives_when_explicit_structure_does_not_fit(self):
        config = ScaffoldConfig(
            frontend_framework="react",
            backend_framework="none",
            project_structure="nextjs-only",
        )

        assert resolve_structure(config) == "react-spa"

    def test_resolve_derives_when_structure_unset(self):
        config = ScaffoldConfig(
            frontend_framework="nextjs",
            backend_framework="nestjs",
            project_structure=None,
        )

        assert resolve_structure(config) == "fullstack-monorepo"

    def test_paths_for_monorepo(self):
        assert base_path("fullstack-monorepo") == "apps/web/src"
        assert web_root("fullstack-monorepo") == "apps/web/"
        assert base_path("react-spa") == "src"
        assert web_root("nextjs-only") == ""


class TestReducer:
    """Tests for wizard field transitions."""

    def test_switching_frontend_away_from_nextjs(self, valid_config: ScaffoldConfig):
        updated = apply_field_change(valid_config, "frontendFramework", "react")

        assert updated.frontend_framework == "react"
        assert updated.backend_framework == "none"
        assert updated.project_structure == "react-spa"
        # The input is never mutated
        assert valid_config.frontend_framework == "nextjs"

    def test_switching_frontend_clears_ai_template(self, valid_config: ScaffoldConfig):
        with_ai = valid_config.model_copy(update={"ai_template": "chatbot"})

        updated = apply_field_change(with_ai, "frontend_framework", "vue")

        assert updated.ai_template == "none"

    def test_adding_server_backend_to_nextjs_makes_monorepo(self, valid_config: ScaffoldConfig):
        updated = apply_field_change(valid_config, "backendFramework", "express")

        assert updated.project_structure == "fullstack-monorepo"

    def test_compatible_structure_change_is_kept(self, valid_config: ScaffoldConfig):
        monorepo = apply_field_change(valid_config, "backendFramework", "fastify")

        updated = apply_field_change(monorepo, "projectStructure", "express-api-only")

        assert updated.project_structure == "express-api-only"

    def test_incompatible_structure_change_is_corrected(self, valid_config: ScaffoldConfig):
        updated = apply_field_change(valid_config, "projectStructure", "react-spa")

        assert updated.project_structure == "nextjs-only"

    def test_nextjs_router_is_restored(self, valid_config: ScaffoldConfig):
        updated = apply_field_change(valid_config, "nextjsRouter", None)

        assert updated.nextjs_router == "app"

    def test_build_tool_survives_frontend_change(self):
        config = ScaffoldConfig(
            frontend_framework="react",
            backend_framework="none",
            project_structure="react-spa",
            build_tool="webpack",
        )

        updated = apply_field_change(config, "frontendFramework", "vue")

        assert updated.build_tool == "webpack"

    def test_unrelated_field_changes_nothing_else(self, valid_config: ScaffoldConfig):
        updated = apply_field_change(valid_config, "colorScheme", "gold")

        assert updated.color_scheme == "gold"
        assert updated.model_dump(exclude={"color_scheme"}) == valid_config.model_dump(
            exclude={"color_scheme"}
        )

    def test_unknown_field_raises(self, valid_config: ScaffoldConfig):
        with pytest.raises(ValueError, match="Unknown configuration field"):
            apply_field_change(valid_config, "colour", "red")

    def test_out_of_domain_value_raises(self, valid_config: ScaffoldConfig):
        with pytest.raises(ValidationError):
            apply_field_change(valid_config, "auth", "okta")

    def test_rules_are_independent(self, valid_config: ScaffoldConfig):
        react = valid_config.model_copy(update={"frontend_framework": "react"})

        assert adjust_backend_framework(react, "frontend_framework").backend_framework == "none"
        assert adjust_backend_framework(react, "styling").backend_framework == "nextjs-api"
        assert clear_incompatible_ai_template(react, "frontend_framework") == react
