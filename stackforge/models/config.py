"""Scaffold configuration models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FrontendFramework = Literal["nextjs", "react", "vue", "angular", "svelte"]
BackendFramework = Literal["none", "nextjs-api", "express", "fastify", "nestjs"]
BuildTool = Literal["auto", "vite", "webpack"]
ProjectStructure = Literal[
    "nextjs-only", "react-spa", "fullstack-monorepo", "express-api-only"
]
NextjsRouter = Literal["app", "pages"]
AuthProvider = Literal["none", "nextauth", "supabase", "clerk"]
Database = Literal["none", "prisma-postgres", "drizzle-postgres", "supabase", "mongodb"]
ApiLayer = Literal["rest-fetch", "rest-axios", "trpc", "graphql"]
Styling = Literal["tailwind", "css-modules", "styled-components"]
ColorScheme = Literal["purple", "gold", "white", "futuristic"]
DeploymentTarget = Literal["vercel", "render", "ec2", "railway"]
AITemplate = Literal[
    "none",
    "chatbot",
    "document-analyzer",
    "semantic-search",
    "code-assistant",
    "image-generator",
]
AIProvider = Literal["anthropic", "openai", "aws-bedrock", "gemini"]
LegacyFramework = Literal["next", "express", "monorepo"]

SERVER_BACKENDS: frozenset[str] = frozenset({"express", "fastify", "nestjs"})
NEXTJS_STRUCTURES: frozenset[str] = frozenset({"nextjs-only", "fullstack-monorepo"})


class _CamelModel(BaseModel):
    """Base for models exchanged with the wizard in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Extras(_CamelModel):
    """Optional tooling toggles."""

    docker: bool = False
    github_actions: bool = False
    redis: bool = False
    prettier: bool = True
    husky: bool = False


class ScaffoldConfig(_CamelModel):
    """A complete scaffold configuration.

    Name and description are deliberately unconstrained here: their syntax
    rules are reported by the validator so every problem surfaces at once.
    ``project_structure`` may be left unset, in which case it is derived
    from the frontend/backend pair.
    """

    project_name: str = ""
    description: str = ""

    frontend_framework: FrontendFramework = "nextjs"
    backend_framework: BackendFramework = "nextjs-api"
    build_tool: BuildTool = "auto"
    project_structure: ProjectStructure | None = "nextjs-only"
    nextjs_router: NextjsRouter | None = "app"

    auth: AuthProvider = "none"
    database: Database = "none"
    api: ApiLayer = "rest-fetch"
    styling: Styling = "tailwind"
    shadcn: bool = True
    color_scheme: ColorScheme = "purple"

    deployment: list[DeploymentTarget] = Field(
        default_factory=lambda: ["vercel"], max_length=4
    )

    ai_template: AITemplate = "none"
    ai_provider: AIProvider = "anthropic"

    extras: Extras = Field(default_factory=Extras)

    def fields_subset(self, *names: str) -> dict[str, Any]:
        """Return the named fields as plain JSON-compatible values."""
        dumped = self.model_dump(mode="json")
        return {name: dumped[name] for name in names}


class LegacyScaffoldConfig(_CamelModel):
    """The older flat configuration shape with a single ``framework`` field."""

    project_name: str = ""
    description: str = ""
    framework: LegacyFramework = "next"
    nextjs_router: NextjsRouter | None = "app"
    auth: AuthProvider = "none"
    database: Database = "none"
    api: ApiLayer = "rest-fetch"
    styling: Styling = "tailwind"
    shadcn: bool = True
    color_scheme: ColorScheme = "purple"
    deployment: list[DeploymentTarget] = Field(
        default_factory=lambda: ["vercel"], max_length=4
    )
    ai_template: AITemplate = "none"
    ai_provider: AIProvider = "anthropic"
    extras: Extras = Field(default_factory=Extras)


_LEGACY_AXES: dict[str, tuple[str, str, str]] = {
    "next": ("nextjs", "nextjs-api", "nextjs-only"),
    "express": ("react", "express", "express-api-only"),
    "monorepo": ("nextjs", "express", "fullstack-monorepo"),
}


def lift_legacy_config(legacy: LegacyScaffoldConfig) -> ScaffoldConfig:
    """Map the flat legacy shape onto the four-axis configuration."""
    frontend, backend, structure = _LEGACY_AXES[legacy.framework]
    data = legacy.model_dump(exclude={"framework"})
    return ScaffoldConfig(
        **data,
        frontend_framework=frontend,
        backend_framework=backend,
        project_structure=structure,
    )


def coerce_config_payload(data: Any) -> Any:
    """Lift a legacy payload if it carries ``framework`` and no frontend axis.

    Used as a ``BeforeValidator`` so the rest of the code only ever sees
    ``ScaffoldConfig``.
    """
    if (
        isinstance(data, dict)
        and "framework" in data
        and "frontendFramework" not in data
        and "frontend_framework" not in data
    ):
        return lift_legacy_config(LegacyScaffoldConfig.model_validate(data))
    return data


def default_config() -> ScaffoldConfig:
    """Return the wizard's starting configuration."""
    return ScaffoldConfig()
