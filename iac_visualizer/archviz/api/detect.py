"""POST /api/detect endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from archviz.deps import check_input_size, get_options
from archviz.parser import IaCFormat, detect_format

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["detect"])


class DetectRequest(BaseModel):
    """Request body for POST /api/detect."""

    content: str = Field(..., description="Raw IaC document text")


class DetectResponse(BaseModel):
    """Response body for POST /api/detect."""

    format: IaCFormat


@router.post("/detect", response_model=DetectResponse)
async def detect(
    body: DetectRequest,
    options: dict[str, Any] = Depends(get_options),
) -> DetectResponse:
    """Classify a document without parsing it further."""
    check_input_size(body.content, options)
    fmt = detect_format(body.content)
    logger.debug("Detected format: %s", fmt.value)
    return DetectResponse(format=fmt)
