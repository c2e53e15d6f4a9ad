"""Initial commit message for published scaffolds."""

from stackforge.core.structure import resolve_structure
from stackforge.generators.catalog import AI_PROVIDERS, DEPLOYMENT_NAMES
from stackforge.models.config import ScaffoldConfig

COMMIT_TITLE = "🚀 Initial commit - Generated by StackForge"

_FRONTEND_TECH = {
    "nextjs": "Next.js 15",
    "react": "React",
    "vue": "Vue",
    "angular": "Angular",
    "svelte": "Svelte",
}

_BACKEND_TECH = {
    "express": "Express.js",
    "fastify": "Fastify",
    "nestjs": "NestJS",
}

_STYLING_TECH = {
    "tailwind": "Tailwind CSS",
    "styled-components": "Styled Components",
    "css-modules": "CSS Modules",
}

_AUTH = {
    "nextauth": ("NextAuth.js", "OAuth authentication"),
    "clerk": ("Clerk", "User authentication"),
    "supabase": ("Supabase Auth", "User authentication"),
}

_DATABASE_TECH = {
    "prisma-postgres": ["Prisma", "PostgreSQL"],
    "drizzle-postgres": ["Drizzle ORM", "PostgreSQL"],
    "supabase": ["Supabase"],
    "mongodb": ["MongoDB"],
}

_API = {
    "trpc": ("tRPC", "Type-safe API"),
    "graphql": ("GraphQL", "GraphQL API"),
    "rest-axios": ("Axios", "REST API"),
    "rest-fetch": (None, "REST API"),
}

_AI_FEATURES = {
    "chatbot": "AI chatbot",
    "document-analyzer": "AI document analyzer",
    "semantic-search": "AI semantic search",
    "code-assistant": "AI code assistant",
    "image-generator": "AI image generator",
}


def _section(title: str, items: list[str]) -> str | None:
    if not items:
        return None
    return f"## {title}\n" + "\n".join(f"- {item}" for item in items)


def stack_summary(config: ScaffoldConfig) -> tuple[list[str], list[str]]:
    """Technologies and key features implied by the configuration."""
    technologies: list[str] = []
    features: list[str] = []

    structure = resolve_structure(config)
    if structure != "express-api-only":
        technologies.append(_FRONTEND_TECH[config.frontend_framework])
    if config.backend_framework in _BACKEND_TECH:
        technologies.append(_BACKEND_TECH[config.backend_framework])
    if structure == "fullstack-monorepo":
        features.append("Turborepo monorepo structure")

    technologies.append(_STYLING_TECH[config.styling])
    if config.styling == "tailwind" and config.shadcn:
        technologies.append("shadcn/ui")

    if config.auth != "none":
        tech, feature = _AUTH[config.auth]
        technologies.append(tech)
        features.append(feature)

    if config.database != "none":
        technologies += _DATABASE_TECH[config.database]
        features.append("Database integration")

    tech, feature = _API[config.api]
    if tech:
        technologies.append(tech)
    features.append(feature)

    if config.ai_template != "none":
        technologies.append(AI_PROVIDERS[config.ai_provider].display_name)
        features.append(_AI_FEATURES[config.ai_template])

    if config.extras.docker:
        features.append("Docker configuration")
    if config.extras.github_actions:
        features.append("CI/CD pipeline")
    if config.extras.redis:
        technologies.append("Redis")
        features.append("Caching layer")

    if config.deployment:
        platforms = ", ".join(DEPLOYMENT_NAMES[target] for target in config.deployment)
        features.append(f"Deployment configs for {platforms}")

    return technologies, features


def build_commit_message(config: ScaffoldConfig) -> str:
    """Title, tech stack, key features and attribution footer."""
    technologies, features = stack_summary(config)
    footer = (
        "---\n\n"
        "This project was scaffolded using [StackForge](https://stackforge.dev), "
        "a full-stack project generator.\n\n"
        f"Color scheme: {config.color_scheme}\n"
        f"Project: {config.project_name}"
    )
    sections = [
        COMMIT_TITLE,
        _section("Tech Stack", technologies),
        _section("Key Features", features),
        footer,
    ]
    return "\n\n".join(section for section in sections if section)
