"""Structural parsing and format detection for IaC documents."""

from archviz.parser.detect import classify_tree, detect_format
from archviz.parser.models import IaCFormat, ParsedDocument, ParseFailure, SourceSyntax
from archviz.parser.structural import parse

__all__ = [
    "IaCFormat",
    "ParsedDocument",
    "ParseFailure",
    "SourceSyntax",
    "classify_tree",
    "detect_format",
    "parse",
]
