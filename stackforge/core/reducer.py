"""Pure configuration transitions for the configuration wizard.

Every cross-field consequence of a single field edit is a separate rule so it
can be tested on its own. ``apply_field_change`` runs them in a fixed order.
"""

from typing import Any, Callable

from stackforge.core.structure import (
    compatible_structures,
    derive_structure,
    is_nextjs_structure,
)
from stackforge.models.config import ScaffoldConfig

Rule = Callable[[ScaffoldConfig, str], ScaffoldConfig]

_AXES = ("frontend_framework", "backend_framework")


def adjust_backend_framework(config: ScaffoldConfig, field: str) -> ScaffoldConfig:
    """Drop the Next.js API backend when the frontend is not Next.js."""
    if (
        field == "frontend_framework"
        and config.frontend_framework != "nextjs"
        and config.backend_framework == "nextjs-api"
    ):
        return config.model_copy(update={"backend_framework": "none"})
    return config


def adjust_project_structure(config: ScaffoldConfig, field: str) -> ScaffoldConfig:
    """Keep the structure consistent with the frontend/backend pair."""
    if field in _AXES:
        structure = derive_structure(
            config.frontend_framework,
            config.backend_framework,
            config.project_structure,
        )
    elif field == "project_structure":
        allowed = compatible_structures(
            config.frontend_framework, config.backend_framework
        )
        if config.project_structure in allowed:
            return config
        structure = derive_structure(
            config.frontend_framework, config.backend_framework
        )
    else:
        return config
    if structure == config.project_structure:
        return config
    return config.model_copy(update={"project_structure": structure})


def clear_incompatible_ai_template(
    config: ScaffoldConfig, field: str
) -> ScaffoldConfig:
    """AI templates need a Next.js frontend."""
    if (
        field == "frontend_framework"
        and config.frontend_framework != "nextjs"
        and config.ai_template != "none"
    ):
        return config.model_copy(update={"ai_template": "none"})
    return config


def adjust_nextjs_router(config: ScaffoldConfig, field: str) -> ScaffoldConfig:
    """Give Next.js structures a router if they have none."""
    structure = config.project_structure
    if structure and is_nextjs_structure(structure) and config.nextjs_router is None:
        return config.model_copy(update={"nextjs_router": "app"})
    return config


def adjust_build_tool(config: ScaffoldConfig, field: str) -> ScaffoldConfig:
    """The build tool is never changed as a side effect of another field."""
    return config


RULES: tuple[Rule, ...] = (
    adjust_backend_framework,
    adjust_project_structure,
    clear_incompatible_ai_template,
    adjust_nextjs_router,
    adjust_build_tool,
)


def _field_name(field: str) -> str:
    for name, info in ScaffoldConfig.model_fields.items():
        if field in (name, info.alias):
            return name
    raise ValueError(f"Unknown configuration field: {field}")


def apply_field_change(config: ScaffoldConfig, field: str, value: Any) -> ScaffoldConfig:
    """Set one field and apply every dependent rule.

    ``field`` may be the attribute name or its camelCase alias. The value is
    validated against the field's declared type, so an out-of-domain value
    raises ``pydantic.ValidationError``.
    """
    name = _field_name(field)
    data = config.model_dump()
    data[name] = value
    updated = ScaffoldConfig.model_validate(data)
    for rule in RULES:
        updated = rule(updated, name)
    return updated
