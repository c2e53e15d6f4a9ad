"""Progress tracking models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class GenerationStep(str, Enum):
    """Lifecycle steps reported while generating or publishing."""

    VALIDATING = "validating"
    CREATING_STRUCTURE = "creating-structure"
    GENERATING_FILES = "generating-files"
    GENERATING_DOCS = "generating-docs"
    CREATING_ARCHIVE = "creating-archive"
    CREATING_REPOSITORY = "creating-repository"
    BOOTSTRAPPING = "bootstrapping"
    CREATING_BLOBS = "creating-blobs"
    CREATING_TREE = "creating-tree"
    CREATING_COMMIT = "creating-commit"
    UPDATING_REFERENCE = "updating-reference"
    COMPLETE = "complete"
    ERROR = "error"


class ProgressStatus(str, Enum):
    """Overall status of a tracked operation."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ERROR = "error"


class ProgressEvent(BaseModel):
    """One lifecycle transition."""

    step: GenerationStep
    message: str
    progress: int = Field(ge=0, le=100)
    timestamp: datetime = Field(default_factory=_now)

    @property
    def is_terminal(self) -> bool:
        return self.step in (GenerationStep.COMPLETE, GenerationStep.ERROR)


class GenerationProgress(BaseModel):
    """Append-only progress record for one generation or publish run."""

    id: str
    status: ProgressStatus = ProgressStatus.PENDING
    current_step: GenerationStep = GenerationStep.VALIDATING
    progress: int = 0
    events: list[ProgressEvent] = Field(default_factory=list)
    error: str | None = None
    result_url: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
