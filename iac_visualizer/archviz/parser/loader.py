"""JSON / YAML loading into plain Python trees."""

from __future__ import annotations

import datetime
import json
import logging
from typing import Any

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import TaggedScalar
from ruamel.yaml.scalarbool import ScalarBoolean

from archviz.parser.models import SourceSyntax

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "---"
NESTING_MESSAGE = "Document is nested too deeply to parse"


class StructuredLoadError(Exception):
    """Raised when text is neither valid JSON nor valid YAML."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        syntax: SourceSyntax | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.syntax = syntax


def _tag_name(node: Any) -> str | None:
    """Return a local ``!Tag`` attached to a ruamel node, if any."""
    tag = getattr(node, "tag", None)
    value = getattr(tag, "value", tag)
    if isinstance(value, str) and value.startswith("!") and not value.startswith("!!"):
        return value
    return None


def _intrinsic(tag: str, value: Any) -> dict[str, Any]:
    """Expand a CloudFormation short-form tag (``!Ref X`` -> ``{"Ref": "X"}``)."""
    name = tag.lstrip("!")
    if name in ("Ref", "Condition"):
        return {name: value}
    return {f"Fn::{name}": value}


def to_plain(node: Any) -> Any:
    """Convert ruamel round-trip nodes into plain dicts, lists and scalars.

    Mapping keys are coerced to strings and dates become ISO strings so the
    result is always JSON-serialisable.
    """
    if isinstance(node, TaggedScalar):
        return _intrinsic(_tag_name(node) or "!Tag", node.value)
    if isinstance(node, dict):
        plain = {str(key): to_plain(value) for key, value in node.items()}
        tag = _tag_name(node)
        return _intrinsic(tag, plain) if tag else plain
    if isinstance(node, list):
        items = [to_plain(item) for item in node]
        tag = _tag_name(node)
        return _intrinsic(tag, items) if tag else items
    if isinstance(node, ScalarBoolean):
        return bool(node)
    if isinstance(node, bool) or node is None:
        return node
    if isinstance(node, int):
        return int(node)
    if isinstance(node, float):
        return float(node)
    if isinstance(node, (datetime.date, datetime.datetime)):
        return node.isoformat()
    if isinstance(node, str):
        return str(node)
    return node


def load_yaml_documents(text: str) -> list[Any]:
    """Load one or more YAML documents, dropping empty ones.

    Raises ``YAMLError`` on syntax errors.
    """
    # Round-trip loader: unknown local tags such as !Ref load instead of failing.
    yaml = YAML()
    if DOCUMENT_SEPARATOR in text:
        documents = [doc for doc in yaml.load_all(text) if doc is not None]
    else:
        loaded = yaml.load(text)
        documents = [] if loaded is None else [loaded]
    return [to_plain(doc) for doc in documents]


def load_structured(text: str) -> tuple[list[Any], SourceSyntax]:
    """Parse *text* as JSON, falling back to YAML.

    Returns the list of non-empty documents and the syntax that succeeded.
    Raises ``StructuredLoadError`` when both parsers reject the text; the
    JSON error is reported for text that looks like JSON, the YAML error
    otherwise. Nesting deeper than the interpreter stack allows is reported
    the same way.
    """
    try:
        return [json.loads(text)], SourceSyntax.json
    except json.JSONDecodeError as json_error:
        first_error = json_error
    except RecursionError as e:
        raise StructuredLoadError(NESTING_MESSAGE, syntax=SourceSyntax.json) from e

    try:
        return load_yaml_documents(text), SourceSyntax.yaml
    except RecursionError as e:
        raise StructuredLoadError(NESTING_MESSAGE, syntax=SourceSyntax.yaml) from e
    except YAMLError as yaml_error:
        logger.debug("YAML parsing failed: %s", yaml_error)
        if text.lstrip().startswith(("{", "[")):
            raise StructuredLoadError(
                str(first_error),
                line=first_error.lineno,
                column=first_error.colno,
                syntax=SourceSyntax.json,
            ) from yaml_error
        line = None
        column = None
        mark = getattr(yaml_error, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1  # 0-indexed to 1-indexed
            column = mark.column + 1
        raise StructuredLoadError(
            str(yaml_error), line=line, column=column, syntax=SourceSyntax.yaml,
        ) from yaml_error
