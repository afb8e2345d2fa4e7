"""FastAPI application -- IaC Visualizer entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

import archviz.deps as deps
from archviz.api.detect import router as detect_router
from archviz.api.examples import router as examples_router
from archviz.api.generate import router as generate_router
from archviz.api.parse import router as parse_router

logger = logging.getLogger(__name__)


def _load_options() -> dict:
    """Load service options from /data/options.json or env fallback."""
    opts_path = os.environ.get("ARCHVIZ_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return json.loads(Path(opts_path).read_text())
    return {
        "max_input_bytes": int(
            os.environ.get("MAX_INPUT_BYTES", str(deps.DEFAULT_MAX_INPUT_BYTES))
        ),
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load options on startup, drop them on shutdown."""
    log_level = logging.DEBUG if os.environ.get("ARCHVIZ_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    deps._options = _load_options()
    logger.info("IaC Visualizer starting with options: %s", deps._options)

    yield

    deps._options = None


app = FastAPI(
    title="IaC Visualizer",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(detect_router)
app.include_router(parse_router)
app.include_router(generate_router)
app.include_router(examples_router)
