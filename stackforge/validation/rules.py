"""Configuration validation rules.

Each rule is an independent predicate over the configuration. A rule matches
when its predicate returns True, which produces one issue of the rule's
severity.
"""

import re
from dataclasses import dataclass
from typing import Callable

from stackforge.core.structure import is_nextjs_structure, resolve_structure
from stackforge.models.config import ScaffoldConfig
from stackforge.models.validation import Severity

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-]{1,50}$")
DESCRIPTION_MAX_LENGTH = 200


@dataclass(frozen=True)
class ValidationRule:
    """A named predicate with a severity and user-facing message."""

    id: str
    field: str
    severity: Severity
    message: str
    check: Callable[[ScaffoldConfig], bool]


def _project_name_invalid(config: ScaffoldConfig) -> bool:
    # The raw value becomes the package, archive and repository name.
    return PROJECT_NAME_PATTERN.fullmatch(config.project_name) is None


def _description_invalid(config: ScaffoldConfig) -> bool:
    return not config.description or len(config.description) > DESCRIPTION_MAX_LENGTH


def _backend_only(config: ScaffoldConfig) -> bool:
    return resolve_structure(config) == "express-api-only"


def _ai_without_frontend(config: ScaffoldConfig) -> bool:
    if config.ai_template == "none":
        return False
    return config.frontend_framework != "nextjs" or resolve_structure(config) in (
        "express-api-only",
        "react-spa",
    )


RULES: tuple[ValidationRule, ...] = (
    ValidationRule(
        id="auth-database",
        field="database",
        severity="error",
        message="Authentication requires a database to store user sessions and data",
        check=lambda c: c.auth != "none" and c.database == "none",
    ),
    ValidationRule(
        id="vercel-express",
        field="deployment",
        severity="error",
        message=(
            "Vercel cannot host a standalone API server. Choose Render, "
            "Railway or EC2, or add a Next.js frontend"
        ),
        check=lambda c: "vercel" in c.deployment and _backend_only(c),
    ),
    ValidationRule(
        id="ai-framework-compatibility",
        field="aiTemplate",
        severity="error",
        message=(
            "AI templates require a Next.js frontend with a server route host "
            "(nextjs-only or fullstack-monorepo)"
        ),
        check=_ai_without_frontend,
    ),
    ValidationRule(
        id="nextjs-router-required",
        field="nextjsRouter",
        severity="error",
        message="Next.js projects require a router type (App Router or Pages Router)",
        check=lambda c: is_nextjs_structure(resolve_structure(c))
        and c.nextjs_router is None,
    ),
    ValidationRule(
        id="nextjs-api-frontend",
        field="backendFramework",
        severity="error",
        message="Next.js API routes require the Next.js frontend",
        check=lambda c: c.backend_framework == "nextjs-api"
        and c.frontend_framework != "nextjs",
    ),
    ValidationRule(
        id="project-name-required",
        field="projectName",
        severity="error",
        message=(
            "Project name is required: 1-50 characters, lowercase letters, "
            "numbers and hyphens only"
        ),
        check=_project_name_invalid,
    ),
    ValidationRule(
        id="description-required",
        field="description",
        severity="error",
        message="Description is required and must be at most 200 characters",
        check=_description_invalid,
    ),
    ValidationRule(
        id="deployment-target-required",
        field="deployment",
        severity="error",
        message="At least one deployment target must be selected",
        check=lambda c: len(c.deployment) == 0,
    ),
    ValidationRule(
        id="trpc-monorepo",
        field="api",
        severity="warning",
        message=(
            "tRPC works best when the client and server share a codebase; "
            "a standalone API loses end-to-end type inference"
        ),
        check=lambda c: c.api == "trpc" and _backend_only(c),
    ),
    ValidationRule(
        id="ai-api-key",
        field="aiTemplate",
        severity="warning",
        message="AI templates need a provider API key; add it to .env.local before running",
        check=lambda c: c.ai_template != "none",
    ),
    ValidationRule(
        id="supabase-auth-db",
        field="database",
        severity="warning",
        message=(
            "Supabase Auth works best with the Supabase database; "
            "consider switching for seamless integration"
        ),
        check=lambda c: c.auth == "supabase" and c.database != "supabase",
    ),
    ValidationRule(
        id="graphql-complexity",
        field="api",
        severity="warning",
        message="GraphQL adds setup complexity; REST may be simpler for small projects",
        check=lambda c: c.api == "graphql",
    ),
    ValidationRule(
        id="mongodb-auth-compatibility",
        field="database",
        severity="warning",
        message=(
            "NextAuth with MongoDB needs the MongoDB adapter; "
            "consider Prisma for a smoother setup"
        ),
        check=lambda c: c.auth == "nextauth" and c.database == "mongodb",
    ),
    ValidationRule(
        id="docker-deployment-recommendation",
        field="extras",
        severity="warning",
        message="Docker is recommended for EC2 and Railway deployments",
        check=lambda c: not c.extras.docker
        and any(target in ("ec2", "railway") for target in c.deployment),
    ),
)

RULE_IDS: frozenset[str] = frozenset(rule.id for rule in RULES)
