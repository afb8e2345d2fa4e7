"""POST /api/generate endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from archviz.deps import check_input_size, get_options
from archviz.pipeline import DiagramResponse, render_diagram

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])


class GenerateRequest(BaseModel):
    """Request body for POST /api/generate."""

    content: str = Field(..., description="Raw IaC document text")


@router.post("/generate", response_model=DiagramResponse)
async def generate_diagram(
    body: GenerateRequest,
    options: dict[str, Any] = Depends(get_options),
) -> DiagramResponse:
    """Render a document as Mermaid markup.

    Pipeline failures are user conditions, so they come back as 200 with
    ``success: false`` rather than as HTTP errors.
    """
    check_input_size(body.content, options)
    response = render_diagram(body.content)
    if not response.success:
        logger.info("Diagram generation failed: %s", response.error)
    return response
