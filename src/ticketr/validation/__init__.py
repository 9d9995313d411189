"""Validation - hierarchy and required-field checks over parsed tickets."""

from ticketr.validation.models import ValidationIssue
from ticketr.validation.validator import HIERARCHY_RULES, Validator, validate_hierarchy

__all__ = ["HIERARCHY_RULES", "ValidationIssue", "Validator", "validate_hierarchy"]
