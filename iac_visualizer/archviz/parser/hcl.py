"""Mini-HCL extractor for native Terraform syntax.

Only the subset needed for diagrams is understood: ``provider``,
``resource``, ``data``, ``variable`` and ``module`` blocks with their quoted
labels and a handful of top-level attribute shapes. Block headers are found
with an anchored regex and block bodies with a linear brace-depth scan that
skips strings and comments, so adversarial input cannot trigger regex
backtracking. Heredocs and quotes nested inside ``${...}`` are not
understood.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

_LABELS_RE = re.compile(r'"([^"\n]*)"')
_ATTR_RE = re.compile(r"^\s*([A-Za-z_][\w-]*)\s*=(.*)$")
_QUOTED_RE = re.compile(r'"((?:[^"\\\n]|\\.)*)"')
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_BARE_REF_RE = re.compile(r"[A-Za-z_][\w.\[\]*-]*")
_LIST_START_RE = re.compile(r"^[ \t]*([A-Za-z_][\w-]*)[ \t]*=[ \t]*\[", re.MULTILINE)
_TAG_RE = re.compile(r'(?<![\w.:/"-])"?([A-Za-z_][\w.:/-]*)"?[ \t]*=[ \t]*"([^"\n]*)"')
_NESTED_NAME_RE = re.compile(r"[ \t]*([A-Za-z_][\w-]*)")

_HCL_MARKERS = ('terraform {', 'provider "', 'resource "', 'data "')
_TERRAFORM_BLOCK_RE = re.compile(r"terraform\s*\{")
_RESOURCE_HEADER_RE = re.compile(r'resource\s+"[^"\n]*"\s+"[^"\n]*"\s*\{')

_header_cache: dict[str, re.Pattern[str]] = {}


def looks_like_hcl(text: str) -> bool:
    """Heuristic: does *text* contain native Terraform block syntax?"""
    if any(marker in text for marker in _HCL_MARKERS):
        return True
    return bool(_TERRAFORM_BLOCK_RE.search(text) or _RESOURCE_HEADER_RE.search(text))


@dataclass
class RawBlock:
    """A top-level HCL block: ``keyword "label" ... { body }``."""

    keyword: str
    labels: list[str] = field(default_factory=list)
    body: str = ""
    offset: int = 0


def _header_re(keyword: str) -> re.Pattern[str]:
    pattern = _header_cache.get(keyword)
    if pattern is None:
        pattern = re.compile(
            rf'^[ \t]*{re.escape(keyword)}[ \t]*((?:"[^"\n]*"[ \t]*)*)\{{',
            re.MULTILINE,
        )
        _header_cache[keyword] = pattern
    return pattern


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string opening at *start*."""
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        if ch == "\n":
            # Unterminated string: stop at end of line.
            return i
        i += 1
    return n


def _skip_comment(text: str, start: int) -> int | None:
    """If a comment opens at *start*, return the index where it ends."""
    ch = text[start]
    nxt = text[start + 1] if start + 1 < len(text) else ""
    if ch == "#" or (ch == "/" and nxt == "/"):
        end = text.find("\n", start)
        return len(text) if end == -1 else end
    if ch == "/" and nxt == "*":
        end = text.find("*/", start + 2)
        return len(text) if end == -1 else end + 2
    return None


def find_block_end(text: str, open_index: int) -> int | None:
    """Return the index of the brace closing the one at *open_index*.

    ``None`` when the block is never closed.
    """
    depth = 0
    i = open_index
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i)
            continue
        if ch in "#/":
            end = _skip_comment(text, i)
            if end is not None:
                i = end
                continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def brace_pairs(text: str) -> dict[int, int]:
    """Map the index of every closed ``{`` in *text* to its matching ``}``.

    One pass with the same string and comment rules as ``find_block_end``.
    """
    pairs: dict[int, int] = {}
    stack: list[int] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i)
            continue
        if ch in "#/":
            end = _skip_comment(text, i)
            if end is not None:
                i = end
                continue
        if ch == "{":
            stack.append(i)
        elif ch == "}" and stack:
            pairs[stack.pop()] = i
        i += 1
    return pairs


def extract_blocks(text: str, keyword: str) -> list[RawBlock]:
    """Find every balanced top-level ``keyword "label"... { ... }`` block in *text*.

    Headers that sit inside an already extracted block are skipped, so the
    bodies returned never overlap.
    """
    blocks: list[RawBlock] = []
    pairs = brace_pairs(text)
    last_close = -1
    for match in _header_re(keyword).finditer(text):
        open_index = match.end() - 1
        if open_index < last_close:
            continue
        close_index = pairs.get(open_index)
        if close_index is None:
            logger.debug("Unbalanced %s block at offset %d", keyword, match.start())
            continue
        last_close = close_index
        blocks.append(
            RawBlock(
                keyword=keyword,
                labels=_LABELS_RE.findall(match.group(1)),
                body=text[open_index + 1:close_index],
                offset=match.start(),
            )
        )
    return blocks


def split_body(body: str) -> tuple[str, list[tuple[str, str]]]:
    """Split a block body into its top-level text and nested blocks.

    Nested blocks are replaced by ``{}`` in the top-level text and returned
    as ``(name, inner_text)`` pairs, where name is the first identifier on
    the line that opens them (``tags`` for ``tags = {``).
    """
    top: list[str] = []
    nested: list[tuple[str, str]] = []
    n = len(body)
    seg_start = 0
    i = 0
    while i < n:
        ch = body[i]
        if ch == '"':
            i = _skip_string(body, i)
            continue
        if ch in "#/":
            end = _skip_comment(body, i)
            if end is not None:
                top.append(body[seg_start:i])
                seg_start = i = end
                continue
        if ch == "{":
            close = find_block_end(body, i)
            if close is None:
                break
            line_start = body.rfind("\n", 0, i) + 1
            name_match = _NESTED_NAME_RE.match(body, line_start, i)
            nested.append((name_match.group(1) if name_match else "", body[i + 1:close]))
            top.append(body[seg_start:i])
            top.append("{}")
            seg_start = i = close + 1
            continue
        i += 1
    top.append(body[seg_start:i])
    return "".join(top), nested


def top_level_assignments(body: str) -> list[tuple[str, str]]:
    """Return ``(key, raw_value)`` for each single-line top-level assignment."""
    top, _ = split_body(body)
    assignments: list[tuple[str, str]] = []
    for line in top.splitlines():
        match = _ATTR_RE.match(line)
        if match:
            assignments.append((match.group(1), match.group(2).strip()))
    return assignments


def _unquote(raw: str) -> str | None:
    match = _QUOTED_RE.fullmatch(raw)
    return match.group(1) if match else None


def _scalar(raw: str) -> Any:
    """Convert a raw attribute value; ``None`` when it is not understood."""
    quoted = _unquote(raw)
    if quoted is not None:
        return quoted
    if raw in ("true", "false"):
        return raw == "true"
    if _NUMBER_RE.fullmatch(raw):
        return float(raw) if "." in raw else int(raw)
    if _BARE_REF_RE.fullmatch(raw) and "." in raw:
        return "${%s}" % raw
    return None


def _list_items(raw: str, as_reference: bool) -> list[Any]:
    items: list[Any] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if as_reference and _BARE_REF_RE.fullmatch(part):
            items.append(part)
            continue
        value = _scalar(part)
        if value is not None:
            items.append(value)
    return items


def parse_attributes(body: str) -> dict[str, Any]:
    """Extract the attributes the generators use from a resource body.

    Quoted strings, numbers, booleans and dotted bare references (stored as
    ``${ref}`` interpolations) are kept; ``tags = { ... }`` becomes a flat
    map and single-level lists are kept when their items are understood.
    ``depends_on`` items stay plain ``type.name`` strings.
    """
    top, nested = split_body(body)
    attributes: dict[str, Any] = {}

    for line in top.splitlines():
        match = _ATTR_RE.match(line)
        if not match:
            continue
        value = _scalar(match.group(2).strip())
        if value is not None:
            attributes[match.group(1)] = value

    pos = 0
    while True:
        match = _LIST_START_RE.search(top, pos)
        if match is None:
            break
        close = top.find("]", match.end())
        if close == -1:
            # No later list can be closed either.
            break
        key = match.group(1)
        attributes[key] = _list_items(top[match.end():close], as_reference=key == "depends_on")
        pos = close + 1

    for name, inner in nested:
        if name == "tags":
            attributes["tags"] = dict(_TAG_RE.findall(inner))

    return attributes


def variable_details(text: str) -> dict[str, dict[str, Any]]:
    """Read ``type`` / ``default`` / ``description`` from variable blocks."""
    details: dict[str, dict[str, Any]] = {}
    for block in extract_blocks(text, "variable"):
        if not block.labels:
            continue
        info: dict[str, Any] = {}
        for key, raw in top_level_assignments(block.body):
            if key == "type":
                info["type"] = raw
            elif key == "default":
                value = _scalar(raw)
                info["default"] = raw if value is None else value
            elif key == "description":
                info["description"] = _unquote(raw) or raw
        details[block.labels[0]] = info
    return details


def parse_hcl(text: str) -> dict[str, Any]:
    """Build a Terraform-JSON-shaped tree from native HCL text.

    Never raises; blocks that cannot be matched are simply absent.
    """
    result: dict[str, Any] = {}

    providers: dict[str, Any] = {}
    for block in extract_blocks(text, "provider"):
        if block.labels:
            providers[block.labels[0]] = {"name": block.labels[0]}
    if providers:
        result["provider"] = providers

    resources: dict[str, dict[str, Any]] = {}
    for block in extract_blocks(text, "resource"):
        if len(block.labels) < 2:
            continue
        resource_type, resource_name = block.labels[0], block.labels[1]
        resources.setdefault(resource_type, {})[resource_name] = parse_attributes(block.body)
    if resources:
        result["resource"] = resources

    data_sources: dict[str, dict[str, Any]] = {}
    for block in extract_blocks(text, "data"):
        if len(block.labels) < 2:
            continue
        data_sources.setdefault(block.labels[0], {})[block.labels[1]] = {"name": block.labels[1]}
    if data_sources:
        result["data"] = data_sources

    variables: dict[str, Any] = {}
    for block in extract_blocks(text, "variable"):
        if block.labels:
            variables[block.labels[0]] = {"name": block.labels[0]}
    if variables:
        result["variable"] = variables

    modules: dict[str, Any] = {}
    for block in extract_blocks(text, "module"):
        if not block.labels:
            continue
        source = ""
        for key, raw in top_level_assignments(block.body):
            if key == "source":
                source = _unquote(raw) or raw
        modules[block.labels[0]] = {"name": block.labels[0], "source": source}
    if modules:
        result["module"] = modules

    logger.debug(
        "HCL extraction: %d resource types, %d data types, %d variables, %d modules",
        len(resources),
        len(data_sources),
        len(variables),
        len(modules),
    )
    return result
