"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add iac_visualizer/ to Python path so `from archviz.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "iac_visualizer"))

import pytest

os.environ["ARCHVIZ_DEV_MODE"] = "true"


@pytest.fixture
def options() -> dict:
    return {"max_input_bytes": 5 * 1024 * 1024}
