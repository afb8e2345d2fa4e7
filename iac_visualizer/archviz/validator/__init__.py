"""Validation pipeline for parsed IaC documents."""

from archviz.validator.models import ValidationIssue, ValidationResult, ValidationSeverity
from archviz.validator.pipeline import validate

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "validate",
]
