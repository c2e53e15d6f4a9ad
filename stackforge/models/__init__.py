"""Data models for StackForge."""

from stackforge.models.config import (
    Extras,
    LegacyScaffoldConfig,
    ScaffoldConfig,
    default_config,
    lift_legacy_config,
)
from stackforge.models.generation import (
    GeneratedFile,
    GenerationMetadata,
    GenerationResult,
)
from stackforge.models.progress import (
    GenerationProgress,
    GenerationStep,
    ProgressEvent,
    ProgressStatus,
)
from stackforge.models.publishing import (
    PublishRequest,
    PublishResponse,
    RateLimitResponse,
)
from stackforge.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Configuration models
    "Extras",
    "ScaffoldConfig",
    "LegacyScaffoldConfig",
    "default_config",
    "lift_legacy_config",
    # Generation models
    "GeneratedFile",
    "GenerationMetadata",
    "GenerationResult",
    # Progress models
    "GenerationProgress",
    "GenerationStep",
    "ProgressEvent",
    "ProgressStatus",
    # Publishing models
    "PublishRequest",
    "PublishResponse",
    "RateLimitResponse",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
