"""Scaffold generator.

Composes the renderer groups into one file set for a configuration. Groups
own disjoint path namespaces, and a path emitted twice fails the whole run.
"""

import asyncio
from typing import Callable

from stackforge.core.cache import TemplateCache
from stackforge.core.exceptions import GenerationInternalError
from stackforge.generators.context import RenderContext
from stackforge.generators.directories import plan_directories
from stackforge.generators.renderers.ai import render_ai
from stackforge.generators.renderers.api_layer import render_api_layer
from stackforge.generators.renderers.auth import render_auth
from stackforge.generators.renderers.database import render_database
from stackforge.generators.renderers.metadata import render_metadata
from stackforge.generators.renderers.monorepo import render_monorepo
from stackforge.generators.renderers.nextjs import render_nextjs_only
from stackforge.generators.renderers.pages import render_pages
from stackforge.generators.renderers.redis import render_redis
from stackforge.generators.renderers.server import render_server
from stackforge.generators.renderers.spa import render_spa
from stackforge.generators.renderers.tooling import render_tooling
from stackforge.models.config import ScaffoldConfig
from stackforge.models.generation import (
    GeneratedFile,
    GenerationMetadata,
    GenerationResult,
)
from stackforge.utils.logging import get_logger

logger = get_logger(__name__)

RendererGroup = Callable[[RenderContext], list[GeneratedFile]]

STRUCTURE_RENDERERS: dict[str, RendererGroup] = {
    "nextjs-only": render_nextjs_only,
    "fullstack-monorepo": render_monorepo,
    "express-api-only": render_server,
    "react-spa": render_spa,
}


def render_structure(ctx: RenderContext) -> list[GeneratedFile]:
    """Scaffolding for the resolved project structure."""
    try:
        renderer = STRUCTURE_RENDERERS[ctx.structure]
    except KeyError:
        raise GenerationInternalError(f"unknown structure '{ctx.structure}'", group="structure")
    return renderer(ctx)


# Each group checks its own applicability and returns nothing when inactive.
RENDERER_GROUPS: tuple[tuple[str, RendererGroup], ...] = (
    ("metadata", render_metadata),
    ("tooling", render_tooling),
    ("structure", render_structure),
    ("pages", render_pages),
    ("ai", render_ai),
    ("auth", render_auth),
    ("database", render_database),
    ("redis", render_redis),
    ("api_layer", render_api_layer),
)


def find_duplicate_paths(files: list[GeneratedFile]) -> list[str]:
    """Paths that appear more than once, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for generated in files:
        if generated.path in seen and generated.path not in duplicates:
            duplicates.append(generated.path)
        seen.add(generated.path)
    return duplicates


def _framework_label(ctx: RenderContext) -> str:
    if ctx.is_api_only:
        return ctx.server_framework
    if ctx.is_monorepo:
        return f"nextjs+{ctx.server_framework}"
    return ctx.config.frontend_framework


class ScaffoldGenerator:
    """Builds a complete in-memory scaffold for one configuration."""

    def __init__(self, cache: TemplateCache | None = None):
        self.cache = cache

    async def _run_group(
        self, name: str, render: RendererGroup, ctx: RenderContext
    ) -> list[GeneratedFile]:
        try:
            return render(ctx)
        except GenerationInternalError:
            raise
        except Exception as e:
            logger.error(
                "scaffold.group.failed",
                group=name,
                structure=ctx.structure,
                error=str(e),
                exc_info=True,
            )
            raise GenerationInternalError(str(e), group=name) from e

    async def generate(
        self,
        config: ScaffoldConfig,
        is_remote_publish: bool = False,
        remote_url: str | None = None,
    ) -> GenerationResult:
        """Generate every file and directory for ``config``.

        Args:
            config: A configuration that already passed validation.
            is_remote_publish: Whether the result is headed for a hosted
                repository (adds badges and repository links to the README).
            remote_url: Repository URL shown in the README when publishing.

        Raises:
            GenerationInternalError: A renderer failed or two renderers
                emitted the same path. No partial result is returned.
        """
        ctx = RenderContext.from_config(
            config,
            is_remote_publish=is_remote_publish,
            remote_url=remote_url,
            cache=self.cache,
        )
        logger.info(
            "scaffold.generation.started",
            project_name=config.project_name,
            structure=ctx.structure,
            remote=is_remote_publish,
        )

        directories = plan_directories(ctx)
        groups = await asyncio.gather(
            *(self._run_group(name, render, ctx) for name, render in RENDERER_GROUPS)
        )
        files = [generated for group in groups for generated in group]

        duplicates = find_duplicate_paths(files)
        if duplicates:
            logger.error(
                "scaffold.generation.duplicate_paths",
                structure=ctx.structure,
                paths=duplicates,
            )
            raise GenerationInternalError(
                f"duplicate output paths: {', '.join(duplicates)}"
            )

        result = GenerationResult(
            files=files,
            directories=directories,
            metadata=GenerationMetadata(
                project_name=config.project_name,
                structure=ctx.structure,
                framework=_framework_label(ctx),
                total_files=len(files),
                total_directories=len(directories),
            ),
        )
        logger.info(
            "scaffold.generation.completed",
            project_name=config.project_name,
            structure=ctx.structure,
            files=result.file_count,
            directories=len(directories),
            lines=result.total_lines,
        )
        return result


async def generate_scaffold(
    config: ScaffoldConfig,
    is_remote_publish: bool = False,
    remote_url: str | None = None,
    cache: TemplateCache | None = None,
) -> GenerationResult:
    """Convenience wrapper around :class:`ScaffoldGenerator`."""
    return await ScaffoldGenerator(cache).generate(config, is_remote_publish, remote_url)
