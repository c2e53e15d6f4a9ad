"""Configuration endpoints: defaults, validation and wizard transitions."""

from typing import Any

from fastapi import APIRouter, HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from stackforge.api.deps import ScaffoldDep
from stackforge.core.reducer import apply_field_change
from stackforge.core.structure import resolve_structure
from stackforge.models.config import ScaffoldConfig, default_config
from stackforge.models.publishing import ConfigPayload
from stackforge.models.validation import ValidationResult

router = APIRouter()


class TransitionRequest(BaseModel):
    """One wizard field change."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    config: ConfigPayload
    field: str
    value: Any = None


class TransitionResponse(BaseModel):
    """The configuration after the change and its dependent rules."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    config: ScaffoldConfig
    structure: str
    validation: ValidationResult


@router.get(
    "/defaults",
    response_model=ScaffoldConfig,
    summary="Get the default configuration",
)
async def get_defaults() -> ScaffoldConfig:
    """Return the wizard's starting configuration."""
    return default_config()


@router.post(
    "/validate",
    response_model=ValidationResult,
    summary="Validate a configuration",
)
async def validate_config(config: ConfigPayload, scaffold: ScaffoldDep) -> ValidationResult:
    """Run every rule and report all errors and warnings together."""
    return scaffold.validate(config)


@router.post(
    "/transition",
    response_model=TransitionResponse,
    summary="Apply a wizard field change",
)
async def transition_config(
    request: TransitionRequest, scaffold: ScaffoldDep
) -> TransitionResponse:
    """Set one field and apply every cross-field rule."""
    try:
        updated = apply_field_change(request.config, request.field, request.value)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e
    return TransitionResponse(
        config=updated,
        structure=resolve_structure(updated),
        validation=scaffold.validate(updated),
    )
