"""Data models for diagram generation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DiagramKind(str, Enum):
    """Rendering mode the consumer should request from Mermaid."""

    flowchart = "flowchart"
    graph = "graph"


class GenerationResult(BaseModel):
    """Outcome of a single generator run."""

    success: bool
    markup: str | None = None
    error: str | None = None
    diagram_kind: DiagramKind = DiagramKind.flowchart
    node_count: int = 0
    edge_count: int = 0
