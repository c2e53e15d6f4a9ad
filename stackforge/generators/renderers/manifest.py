"""package.json assembly from feature contributions."""

import json
from typing import Any

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import ai, api_layer, auth, database, redis, styling
from stackforge.generators.renderers.contributions import (
    Contribution,
    merge_all,
    sorted_deps,
)


def feature_contribution(ctx: RenderContext) -> Contribution:
    """Everything the feature renderers add to the application package."""
    parts = [
        auth.contribution(ctx),
        database.contribution(ctx),
        redis.contribution(ctx),
        api_layer.contribution(ctx),
        ai.contribution(ctx),
    ]
    if ctx.is_nextjs:
        parts.insert(0, styling.contribution(ctx))
    return merge_all(parts)


def package_json(
    name: str,
    scripts: dict[str, str],
    contribution: Contribution,
    dependencies: dict[str, str] | None = None,
    dev_dependencies: dict[str, str] | None = None,
    **extra: Any,
) -> str:
    """Serialize a package manifest with sorted dependency maps."""
    manifest: dict[str, Any] = {
        "name": name,
        "version": "0.1.0",
        "private": True,
        **extra,
        "scripts": {**scripts, **contribution.scripts},
        "dependencies": sorted_deps({**(dependencies or {}), **contribution.dependencies}),
        "devDependencies": sorted_deps(
            {**(dev_dependencies or {}), **contribution.dev_dependencies}
        ),
    }
    if not manifest["dependencies"]:
        del manifest["dependencies"]
    if not manifest["devDependencies"]:
        del manifest["devDependencies"]
    return json.dumps(manifest, indent=2) + "\n"
