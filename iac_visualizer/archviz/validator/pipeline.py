"""Validation pipeline: generic checks, then format-specific checks."""

from __future__ import annotations

import logging
from typing import Any

from archviz.parser.models import IaCFormat
from archviz.validator.format_checks import FORMAT_CHECKS, check_required_fields
from archviz.validator.models import ValidationIssue, ValidationResult, ValidationSeverity

logger = logging.getLogger(__name__)


def validate(tree: Any, fmt: IaCFormat) -> ValidationResult:
    """Validate a parsed tree for its detected format.

    Order: 1. tree shape → 2. known format → 3. required fields →
    4. format checks. Never raises; errors make the result invalid,
    warnings do not.
    """
    if not isinstance(tree, dict):
        return ValidationResult(
            valid=False,
            issues=[
                ValidationIssue(
                    severity=ValidationSeverity.error,
                    check_name="structure",
                    message="Invalid data structure",
                )
            ],
        )

    if fmt == IaCFormat.unknown or fmt not in FORMAT_CHECKS:
        return ValidationResult(
            valid=False,
            issues=[
                ValidationIssue(
                    severity=ValidationSeverity.error,
                    check_name="format",
                    message="Unknown or unsupported format",
                )
            ],
        )

    result = ValidationResult()
    result.issues.extend(check_required_fields(tree, fmt))

    try:
        result.issues.extend(FORMAT_CHECKS[fmt](tree))
    except Exception as e:
        logger.exception("Validation check for %s failed", fmt.value)
        result.issues.append(
            ValidationIssue(
                severity=ValidationSeverity.warning,
                check_name=fmt.value,
                message=f"Validation could not complete: {e}",
            )
        )

    result.valid = not any(i.severity == ValidationSeverity.error for i in result.issues)
    logger.debug(
        "Validated %s: valid=%s, %d issues", fmt.value, result.valid, len(result.issues)
    )
    return result
