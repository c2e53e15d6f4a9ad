"""Rule-based configuration validator."""

from stackforge.models.config import ScaffoldConfig
from stackforge.models.validation import ValidationIssue, ValidationResult
from stackforge.validation.rules import RULES, ValidationRule


def validate(
    config: ScaffoldConfig, rules: tuple[ValidationRule, ...] = RULES
) -> ValidationResult:
    """Evaluate every rule against the configuration.

    Rules never short-circuit each other, so all matching errors and warnings
    are reported together. The function is pure.
    """
    result = ValidationResult()
    for rule in rules:
        if not rule.check(config):
            continue
        issue = ValidationIssue(
            field=rule.field,
            message=rule.message,
            rule_id=rule.id,
            severity=rule.severity,
        )
        if rule.severity == "error":
            result.errors.append(issue)
        else:
            result.warnings.append(issue)
    return result
