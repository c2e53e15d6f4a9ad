"""Turborepo workspace with a Next.js web app, a server API app and shared packages."""

import json

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import tooling
from stackforge.generators.renderers.contributions import Contribution
from stackforge.generators.renderers.manifest import package_json
from stackforge.generators.renderers.nextjs import render_nextjs_app
from stackforge.generators.renderers.server import render_server
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "monorepo/shared-types.ts": """\
// Types shared between apps/web and apps/api

export interface User {
  id: string;
  email: string;
  name: string | null;
  createdAt: string;
}

export interface ApiResponse<T> {
  data?: T;
  error?: string;
}

export interface HealthStatus {
  status: 'ok' | 'degraded';
  service: string;
}
""",
}

registry.register_many(TEMPLATES)

WORKSPACE_SCRIPTS = {
    "dev": "turbo run dev",
    "build": "turbo run build",
    "start": "turbo run start",
    "lint": "turbo run lint",
}

TURBO_CONFIG = {
    "$schema": "https://turbo.build/schema.json",
    "ui": "tui",
    "tasks": {
        "build": {
            "dependsOn": ["^build"],
            "outputs": [".next/**", "!.next/cache/**", "dist/**"],
        },
        "dev": {"cache": False, "persistent": True},
        "start": {"dependsOn": ["build"], "cache": False, "persistent": True},
        "lint": {"dependsOn": ["^lint"]},
    },
}


def render_monorepo(ctx: RenderContext) -> list[GeneratedFile]:
    """Root workspace files plus ``apps/web``, ``apps/api`` and ``packages/*``."""
    root_manifest = tooling.contribution(ctx).merge(
        Contribution(dev_dependencies={"turbo": "^2.3.3"})
    )
    files = [
        ctx.file(
            "package.json",
            package_json(
                ctx.project_name,
                WORKSPACE_SCRIPTS,
                root_manifest,
                workspaces=["apps/*", "packages/*"],
                packageManager="npm@10.9.0",
            ),
            "config",
        ),
        ctx.file("turbo.json", json.dumps(TURBO_CONFIG, indent=2) + "\n", "config"),
    ]

    shared = Contribution(dependencies={"@repo/shared-types": "*"})
    files += render_nextjs_app(ctx, shared)
    files.append(ctx.file(ctx.web("tsconfig.json"), tooling.tsconfig("next", ctx), "config"))

    files += render_server(ctx)
    files.append(ctx.file("apps/api/tsconfig.json", tooling.tsconfig("server", ctx), "config"))

    files += [
        ctx.file(
            "packages/shared-types/package.json",
            package_json(
                "@repo/shared-types",
                {},
                Contribution(),
                main="./src/index.ts",
                types="./src/index.ts",
            ),
            "config",
        ),
        ctx.file(
            "packages/shared-types/src/index.ts",
            registry.render("monorepo/shared-types.ts"),
        ),
        ctx.file(
            "packages/config/package.json",
            package_json(
                "@repo/config",
                {},
                Contribution(),
                files=["tsconfig.base.json"],
            ),
            "config",
        ),
        ctx.file(
            "packages/config/tsconfig.base.json",
            tooling.tsconfig("base", ctx),
            "config",
        ),
    ]
    return files
