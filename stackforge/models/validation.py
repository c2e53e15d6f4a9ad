"""Validation result models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

Severity = Literal["error", "warning"]


class ValidationIssue(BaseModel):
    """A single rule match."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field: str
    message: str
    rule_id: str
    severity: Severity


class ValidationResult(BaseModel):
    """Outcome of validating a configuration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    @computed_field  # type: ignore[prop-decorator]
    @property
    def can_generate(self) -> bool:
        return len(self.errors) == 0

    @property
    def rule_ids(self) -> set[str]:
        """All rule ids that matched, regardless of severity."""
        return {issue.rule_id for issue in [*self.errors, *self.warnings]}
