"""Per-run rendering context derived once from the configuration."""

from dataclasses import dataclass
from typing import Callable

from stackforge.core.cache import TemplateCache
from stackforge.core.structure import (
    base_path,
    is_nextjs_structure,
    resolve_structure,
    web_root,
)
from stackforge.generators.catalog import ColorClasses, colors_for
from stackforge.generators.templating import title_case
from stackforge.models.config import ScaffoldConfig
from stackforge.models.generation import FileType, GeneratedFile


@dataclass(frozen=True)
class RenderContext:
    """Configuration plus the path decisions every renderer shares."""

    config: ScaffoldConfig
    structure: str
    base: str
    web_root: str
    colors: ColorClasses
    is_remote_publish: bool = False
    remote_url: str | None = None
    cache: TemplateCache | None = None

    @classmethod
    def from_config(
        cls,
        config: ScaffoldConfig,
        is_remote_publish: bool = False,
        remote_url: str | None = None,
        cache: TemplateCache | None = None,
    ) -> "RenderContext":
        structure = resolve_structure(config)
        return cls(
            config=config,
            structure=structure,
            base=base_path(structure),
            web_root=web_root(structure),
            colors=colors_for(config.color_scheme),
            is_remote_publish=is_remote_publish,
            remote_url=remote_url,
            cache=cache,
        )

    def cached(self, name: str, fields: dict, render: Callable[[], str]) -> str:
        """Memoize ``render`` under ``fields`` when a cache is attached."""
        if self.cache is None:
            return render()
        return self.cache.get_or_render(name, fields, render)

    @property
    def project_name(self) -> str:
        return self.config.project_name

    @property
    def display_name(self) -> str:
        return title_case(self.config.project_name)

    @property
    def is_monorepo(self) -> bool:
        return self.structure == "fullstack-monorepo"

    @property
    def is_nextjs(self) -> bool:
        return is_nextjs_structure(self.structure)

    @property
    def is_api_only(self) -> bool:
        return self.structure == "express-api-only"

    @property
    def is_spa(self) -> bool:
        return self.structure == "react-spa"

    @property
    def has_frontend(self) -> bool:
        return not self.is_api_only

    @property
    def server_framework(self) -> str:
        """Server framework for API-bearing structures, express by default."""
        backend = self.config.backend_framework
        return backend if backend in ("express", "fastify", "nestjs") else "express"

    def src(self, relative: str) -> str:
        """Path under the effective base path."""
        return f"{self.base}/{relative}"

    def web(self, relative: str) -> str:
        """Path under the web application root."""
        return f"{self.web_root}{relative}"

    def file(
        self, path: str, content: str, file_type: FileType = "source"
    ) -> GeneratedFile:
        return GeneratedFile(path=path, content=content, file_type=file_type)

    def params(self, **extra) -> dict:
        """Common template parameters."""
        return {
            "project_name": self.config.project_name,
            "display_name": self.display_name,
            "description": self.config.description,
            "colors": self.colors,
            "structure": self.structure,
            **extra,
        }
