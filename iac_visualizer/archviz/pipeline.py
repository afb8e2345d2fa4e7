"""End-to-end rendering: raw text → parse → validate → Mermaid markup."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from archviz.generator import DiagramKind, generate
from archviz.parser import IaCFormat, ParseFailure, parse
from archviz.validator import ValidationIssue, ValidationSeverity, validate

logger = logging.getLogger(__name__)

UNSUPPORTED_FORMAT = "Unsupported format: unable to detect a supported infrastructure format"


class DiagramResponse(BaseModel):
    """Displayable outcome of rendering one document."""

    success: bool
    format: IaCFormat = IaCFormat.unknown
    markup: str | None = None
    diagram_kind: DiagramKind | None = None
    error: str | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)


def _render(text: str) -> DiagramResponse:
    if not text or not text.strip():
        return DiagramResponse(success=False, error=UNSUPPORTED_FORMAT)

    parsed = parse(text)
    if isinstance(parsed, ParseFailure):
        return DiagramResponse(
            success=False,
            error=f"Unsupported or malformed input: {parsed.message}",
            issues=[
                ValidationIssue(
                    severity=ValidationSeverity.error,
                    check_name="syntax",
                    message=parsed.message,
                    line=parsed.line,
                    column=parsed.column,
                )
            ],
        )

    if parsed.format == IaCFormat.unknown:
        return DiagramResponse(success=False, error=UNSUPPORTED_FORMAT)

    logger.info("Detected %s input", parsed.format.value)

    validation = validate(parsed.tree, parsed.format)
    if not validation.valid:
        messages = "; ".join(issue.message for issue in validation.errors)
        logger.info("Validation failed for %s: %s", parsed.format.value, messages)
        return DiagramResponse(
            success=False,
            format=parsed.format,
            error=f"Validation failed: {messages}",
            issues=validation.issues,
        )

    result = generate(parsed)
    if not result.success:
        return DiagramResponse(
            success=False,
            format=parsed.format,
            error=result.error,
            issues=validation.issues,
        )

    return DiagramResponse(
        success=True,
        format=parsed.format,
        markup=result.markup,
        diagram_kind=result.diagram_kind,
        issues=validation.issues,
    )


def render_diagram(text: str) -> DiagramResponse:
    """Turn IaC text into Mermaid markup.

    Never raises: every failure, expected or not, comes back as a response
    with ``success=False`` and a human-readable ``error``.
    """
    try:
        return _render(text)
    except Exception as e:
        logger.exception("Diagram rendering failed")
        return DiagramResponse(success=False, error=f"Unexpected error: {e}")
