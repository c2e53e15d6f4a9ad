"""Project structure derivation from the frontend/backend pair."""

from stackforge.models.config import (
    NEXTJS_STRUCTURES,
    SERVER_BACKENDS,
    ScaffoldConfig,
)


def compatible_structures(frontend: str, backend: str) -> tuple[str, ...]:
    """Structures that make sense for a frontend/backend pair.

    The first entry is the one the precedence table derives.
    """
    if frontend == "nextjs":
        if backend in SERVER_BACKENDS:
            return ("fullstack-monorepo", "express-api-only")
        return ("nextjs-only",)
    if backend in SERVER_BACKENDS:
        return ("express-api-only",)
    # nextjs-api without a Next.js frontend has nowhere to live
    return ("react-spa",)


def derive_structure(frontend: str, backend: str, current: str | None = None) -> str:
    """Apply the precedence table to a frontend/backend pair.

    Rules are checked in a fixed order and the first match wins:

    1. Next.js frontend with the Next.js API backend is ``nextjs-only``.
    2. Any other frontend without a server backend is ``react-spa``.
    3. Next.js frontend with a server backend is ``fullstack-monorepo``.
    4. A server backend whose current structure does not fit becomes
       ``express-api-only``.
    5. Otherwise the current structure is kept when it fits the pair, else
       the first compatible structure is used.
    """
    if frontend == "nextjs" and backend == "nextjs-api":
        return "nextjs-only"
    if frontend != "nextjs" and backend not in SERVER_BACKENDS:
        return "react-spa"
    if frontend == "nextjs" and backend in SERVER_BACKENDS:
        return "fullstack-monorepo"
    allowed = compatible_structures(frontend, backend)
    if backend in SERVER_BACKENDS and current not in allowed:
        return "express-api-only"
    if current in allowed:
        return current
    return allowed[0]


def is_consistent(config: ScaffoldConfig) -> bool:
    """Whether the explicit structure fits the frontend/backend pair."""
    return config.project_structure in compatible_structures(
        config.frontend_framework, config.backend_framework
    )


def resolve_structure(config: ScaffoldConfig) -> str:
    """Effective structure for generation.

    An explicit structure that fits the pair wins; otherwise it is derived.
    """
    if config.project_structure is not None and is_consistent(config):
        return config.project_structure
    return derive_structure(
        config.frontend_framework,
        config.backend_framework,
        config.project_structure,
    )


def is_nextjs_structure(structure: str) -> bool:
    """Whether the structure hosts a Next.js application."""
    return structure in NEXTJS_STRUCTURES


def base_path(structure: str) -> str:
    """Directory that frontend-relative files are emitted under."""
    return "apps/web/src" if structure == "fullstack-monorepo" else "src"


def web_root(structure: str) -> str:
    """Root of the web application, with a trailing slash unless empty."""
    return "apps/web/" if structure == "fullstack-monorepo" else ""
