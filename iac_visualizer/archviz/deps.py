"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException

DEFAULT_MAX_INPUT_BYTES = 5 * 1024 * 1024

_options: dict[str, Any] | None = None


def get_options() -> dict[str, Any]:
    """FastAPI dependency: return the loaded service options."""
    assert _options is not None, "Options not initialised"
    return _options


def check_input_size(content: str, options: dict[str, Any]) -> None:
    """Reject documents larger than ``max_input_bytes`` with HTTP 413."""
    limit = int(options.get("max_input_bytes", DEFAULT_MAX_INPUT_BYTES))
    size = len(content.encode("utf-8"))
    if size > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Input is {size} bytes; the limit is {limit} bytes",
        )
