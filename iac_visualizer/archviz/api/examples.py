"""GET /api/examples endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from archviz.examples import EXAMPLES, ExampleContent, get_example
from archviz.parser import IaCFormat

router = APIRouter(prefix="/api", tags=["examples"])


@router.get("/examples", response_model=list[ExampleContent])
async def list_examples() -> list[ExampleContent]:
    """Return every bundled example."""
    return list(EXAMPLES)


@router.get("/examples/{fmt}", response_model=ExampleContent)
async def get_example_for_format(fmt: str) -> ExampleContent:
    """Return the bundled example for one format."""
    try:
        iac_format = IaCFormat(fmt)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown format: {fmt}")

    example = get_example(iac_format)
    if example is None:
        raise HTTPException(status_code=404, detail=f"No example for format: {fmt}")
    return example
