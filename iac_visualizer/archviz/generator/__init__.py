"""Mermaid diagram generators, one module per IaC format."""

from archviz.generator.engine import GENERATORS, generate
from archviz.generator.markup import MermaidDiagram, sanitize_id, sanitize_label
from archviz.generator.models import DiagramKind, GenerationResult

__all__ = [
    "GENERATORS",
    "DiagramKind",
    "GenerationResult",
    "MermaidDiagram",
    "generate",
    "sanitize_id",
    "sanitize_label",
]
