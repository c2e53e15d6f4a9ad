"""Scaffold generation endpoints."""

from fastapi import APIRouter, Header, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stackforge.api.deps import ScaffoldDep
from stackforge.models.generation import GenerationResult
from stackforge.models.publishing import ConfigPayload
from stackforge.models.validation import ValidationIssue

router = APIRouter()


class GenerateResponse(BaseModel):
    """Generated scaffold plus any non-blocking warnings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    generation_id: str
    result: GenerationResult
    warnings: list[ValidationIssue]


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate a scaffold as JSON",
)
async def generate_scaffold(
    config: ConfigPayload,
    scaffold: ScaffoldDep,
    x_generation_id: str | None = Header(default=None),
) -> GenerateResponse:
    """Validate the configuration and return every generated file."""
    tracker = scaffold.start_tracking(x_generation_id)
    result, validation = await scaffold.generate(config, tracker)
    tracker.complete(f"Generated {result.file_count} files")
    return GenerateResponse(
        generation_id=tracker.id,
        result=result,
        warnings=validation.warnings,
    )


@router.post(
    "/download",
    summary="Generate a scaffold as a ZIP archive",
    response_class=Response,
    responses={200: {"content": {"application/zip": {}}}},
)
async def download_scaffold(
    config: ConfigPayload,
    scaffold: ScaffoldDep,
    x_generation_id: str | None = Header(default=None),
) -> Response:
    """Validate, generate and package the scaffold."""
    archive, filename, generation_id = await scaffold.download(config, x_generation_id)
    return Response(
        content=archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Generation-ID": generation_id,
        },
    )
