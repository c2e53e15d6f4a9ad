"""Declarative directory plan for a scaffold.

Directories are declared, not created: the plan ships with the file set so
archives can carry empty directory entries and the UI can show a tree.
"""

from dataclasses import dataclass
from typing import Callable

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import ai, api_layer, auth, database, pages, redis
from stackforge.models.config import ScaffoldConfig

Condition = Callable[[RenderContext], bool]


@dataclass(frozen=True)
class DirectoryEntry:
    """A directory path, optionally relative to the source or web root."""

    path: str
    condition: Condition | None = None
    root: str = "project"  # project | src | web

    def resolve(self, ctx: RenderContext) -> str:
        if self.root == "src":
            return ctx.src(self.path) if self.path else ctx.base
        if self.root == "web":
            return ctx.web(self.path).rstrip("/") or "."
        return self.path


def _always(ctx: RenderContext) -> bool:
    return True


def _nextjs(ctx: RenderContext) -> bool:
    return ctx.is_nextjs


def _app_router(ctx: RenderContext) -> bool:
    return ctx.is_nextjs and ctx.config.nextjs_router != "pages"


def _pages_router(ctx: RenderContext) -> bool:
    return ctx.is_nextjs and ctx.config.nextjs_router == "pages"


def _shadcn(ctx: RenderContext) -> bool:
    return ctx.is_nextjs and ctx.config.styling == "tailwind" and ctx.config.shadcn


def _server_dirs(ctx: RenderContext) -> bool:
    return ctx.is_api_only


DIRECTORY_TABLE: tuple[DirectoryEntry, ...] = (
    DirectoryEntry("", _always, root="src"),
    DirectoryEntry(
        "lib",
        lambda ctx: not ctx.is_api_only or database.applies(ctx) or redis.applies(ctx),
        root="src",
    ),
    DirectoryEntry("app", lambda ctx: ctx.has_frontend, root="src"),
    DirectoryEntry("app/api", lambda ctx: ctx.is_nextjs, root="src"),
    DirectoryEntry("app/dashboard", pages.applies, root="src"),
    DirectoryEntry("pages", _pages_router, root="src"),
    DirectoryEntry("components", _nextjs, root="src"),
    DirectoryEntry("components/ui", _shadcn, root="src"),
    DirectoryEntry("public", _nextjs, root="web"),
    # auth
    DirectoryEntry("app/auth", lambda ctx: auth.applies(ctx) and ctx.config.auth != "clerk", root="src"),
    DirectoryEntry("app/api/auth", lambda ctx: auth.applies(ctx) and ctx.config.auth == "nextauth", root="src"),
    # database
    DirectoryEntry(
        "prisma", lambda ctx: database.applies(ctx) and ctx.config.database == "prisma-postgres", root="web"
    ),
    DirectoryEntry(
        "lib/db",
        lambda ctx: database.applies(ctx) and ctx.config.database == "drizzle-postgres",
        root="src",
    ),
    DirectoryEntry(
        "supabase/migrations",
        lambda ctx: ctx.config.database == "supabase" or auth.emits_supabase_client(ctx),
        root="web",
    ),
    DirectoryEntry(
        "scripts",
        lambda ctx: ctx.config.database in ("prisma-postgres", "drizzle-postgres"),
        root="web",
    ),
    # api layer
    DirectoryEntry(
        "lib/trpc", lambda ctx: api_layer.applies(ctx) and _app_router(ctx) and ctx.config.api == "trpc", root="src"
    ),
    DirectoryEntry(
        "lib/graphql",
        lambda ctx: api_layer.applies(ctx) and _app_router(ctx) and ctx.config.api == "graphql",
        root="src",
    ),
    DirectoryEntry(
        "routes",
        lambda ctx: _server_dirs(ctx)
        and ctx.server_framework != "nestjs"
        and ctx.config.api.startswith("rest"),
        root="src",
    ),
    DirectoryEntry(
        "users",
        lambda ctx: _server_dirs(ctx)
        and ctx.server_framework == "nestjs"
        and ctx.config.api.startswith("rest"),
        root="src",
    ),
    DirectoryEntry("trpc", lambda ctx: _server_dirs(ctx) and ctx.config.api == "trpc", root="src"),
    DirectoryEntry("graphql", lambda ctx: _server_dirs(ctx) and ctx.config.api == "graphql", root="src"),
    # monorepo
    DirectoryEntry("apps", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("apps/web", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("apps/api", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("apps/api/src", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("packages", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("packages/shared-types", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("packages/shared-types/src", lambda ctx: ctx.is_monorepo),
    DirectoryEntry("packages/config", lambda ctx: ctx.is_monorepo),
    # tooling
    DirectoryEntry(".husky", lambda ctx: ctx.config.extras.husky),
    DirectoryEntry(".github", lambda ctx: ctx.config.extras.github_actions),
    DirectoryEntry(".github/workflows", lambda ctx: ctx.config.extras.github_actions),
    DirectoryEntry("deploy", lambda ctx: "ec2" in ctx.config.deployment),
)


def _ai_directories(ctx: RenderContext) -> list[str]:
    parent_dirs = set()
    for path in ai.ai_file_paths(ctx):
        parent_dirs.add(path.rsplit("/", 1)[0])
    return sorted(parent_dirs)


def plan_directories(ctx: RenderContext) -> list[str]:
    """Directories for an already-resolved render context, deduplicated in table order."""
    candidates = [
        entry.resolve(ctx)
        for entry in DIRECTORY_TABLE
        if entry.condition is None or entry.condition(ctx)
    ]
    candidates += _ai_directories(ctx)

    planned: list[str] = []
    for path in candidates:
        if path not in planned and path != ".":
            planned.append(path)
    return planned


def plan(config: ScaffoldConfig) -> list[str]:
    """Directories that must exist for ``config``."""
    return plan_directories(RenderContext.from_config(config))
