"""POST /api/parse endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from archviz.deps import check_input_size, get_options
from archviz.parser import IaCFormat, ParsedDocument, ParseFailure, parse
from archviz.validator import ValidationIssue, ValidationSeverity, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["parse"])


class ParseRequest(BaseModel):
    """Request body for POST /api/parse."""

    content: str = Field(..., description="Raw IaC document text")


class ParseResponse(BaseModel):
    """Response body for POST /api/parse."""

    success: bool
    document: ParsedDocument | None = None
    error: str | None = None
    issues: list[ValidationIssue] = Field(default_factory=list)


@router.post("/parse", response_model=ParseResponse)
async def parse_document(
    body: ParseRequest,
    options: dict[str, Any] = Depends(get_options),
) -> ParseResponse:
    """Parse and validate a document, returning its tree and any issues."""
    check_input_size(body.content, options)

    parsed = parse(body.content)
    if isinstance(parsed, ParseFailure):
        return ParseResponse(
            success=False,
            error=parsed.message,
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

    issues: list[ValidationIssue] = []
    if parsed.format != IaCFormat.unknown:
        issues = validate(parsed.tree, parsed.format).issues
    logger.debug("Parsed %s document with %d issues", parsed.format.value, len(issues))
    return ParseResponse(success=True, document=parsed, issues=issues)
