"""Configuration validation."""

from stackforge.validation.rules import RULE_IDS, RULES, ValidationRule
from stackforge.validation.validator import validate

__all__ = ["RULE_IDS", "RULES", "ValidationRule", "validate"]
