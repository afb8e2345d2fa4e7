"""Structural parser: raw text to a ParsedDocument."""

from __future__ import annotations

import logging
from typing import Any

from archviz.parser.detect import classify_tree
from archviz.parser.hcl import looks_like_hcl, parse_hcl
from archviz.parser.loader import StructuredLoadError, load_structured
from archviz.parser.models import IaCFormat, ParsedDocument, ParseFailure, SourceSyntax

logger = logging.getLogger(__name__)


def _build_document(
    text: str, documents: list[Any], syntax: SourceSyntax,
) -> ParsedDocument:
    primary = documents[0] if documents else None
    if not isinstance(primary, dict):
        return ParsedDocument(
            format=IaCFormat.unknown, tree={}, syntax=syntax, source_text=text,
        )

    multi = len(documents) > 1
    doc = ParsedDocument(
        format=classify_tree(primary, is_json=syntax is SourceSyntax.json),
        tree=primary,
        syntax=syntax,
        is_multi_document=multi,
        documents=documents if multi else [],
        source_text=text,
    )
    if multi:
        # Validation copies each container; share the primary document again.
        doc.tree = doc.documents[0]
    return doc


def parse(text: str) -> ParsedDocument | ParseFailure:
    """Parse IaC text into a ParsedDocument.

    Native Terraform goes through the mini-HCL extractor (which never
    fails); everything else is JSON or YAML. Syntax errors come back as a
    ParseFailure carrying the parser's own message.
    """
    if not text or not text.strip():
        return ParseFailure(message="Empty input")

    if looks_like_hcl(text) and not text.lstrip().startswith("{"):
        tree = parse_hcl(text)
        return ParsedDocument(
            format=IaCFormat.terraform,
            tree=tree,
            syntax=SourceSyntax.hcl,
            source_text=text,
        )

    try:
        documents, syntax = load_structured(text)
    except StructuredLoadError as e:
        logger.info("Parse failed (%s): %s", e.syntax.value if e.syntax else "?", e.message)
        return ParseFailure(
            message=e.message, line=e.line, column=e.column, syntax=e.syntax,
        )

    doc = _build_document(text, documents, syntax)
    logger.debug(
        "Parsed %s input as %s (%d documents)",
        syntax.value,
        doc.format.value,
        len(doc.documents) or 1,
    )
    return doc
