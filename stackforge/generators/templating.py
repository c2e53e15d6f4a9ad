"""Named-template rendering for generated source files.

Templates are registered by name into a shared jinja2 environment and
rendered with keyword parameters. The environment uses bracket delimiters
(``[[ value ]]`` and ``[% block %]``) so JSX and TypeScript braces pass
through untouched, and ``StrictUndefined`` so a missing parameter fails
loudly instead of rendering an empty string.
"""

import re
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined


class TemplateRegistry:
    """A set of named templates sharing one environment."""

    def __init__(self) -> None:
        self._sources: dict[str, str] = {}
        self.env = Environment(
            loader=DictLoader(self._sources),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            block_start_string="[%",
            block_end_string="%]",
            variable_start_string="[[",
            variable_end_string="]]",
            comment_start_string="[#",
            comment_end_string="#]",
        )
        self.env.filters["slugify"] = slugify
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["snake_case"] = snake_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["title_case"] = title_case
        self.env.filters["constant_case"] = constant_case

    def register(self, name: str, source: str) -> None:
        """Add a template; names must be unique."""
        if name in self._sources:
            raise ValueError(f"Template already registered: {name}")
        self._sources[name] = source

    def register_many(self, templates: dict[str, str]) -> None:
        for name, source in templates.items():
            self.register(name, source)

    def render(self, name: str, /, **params: Any) -> str:
        """Render a registered template with the given parameters."""
        return self.env.get_template(name).render(**params)

    def render_string(self, source: str, /, **params: Any) -> str:
        """Render an inline template string."""
        return self.env.from_string(source).render(**params)

    def names(self, prefix: str = "") -> list[str]:
        return sorted(name for name in self._sources if name.startswith(prefix))


def slugify(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word.capitalize() for word in parts if word)


def snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def title_case(value: str) -> str:
    """Convert ``my-app`` to ``My App``."""
    return " ".join(word.capitalize() for word in re.split(r"[-_\s]+", value) if word)


def constant_case(value: str) -> str:
    """Convert ``my-app`` to ``MY_APP``."""
    return snake_case(value).upper()


# Shared registry; renderer modules register their templates on import
registry = TemplateRegistry()
