"""Mermaid markup assembly and label/ID sanitising."""

from __future__ import annotations

import re

from archviz.generator.models import DiagramKind
from archviz.generator.styles import STYLE_PALETTE

_UNSAFE_ID_RE = re.compile(r"[^A-Za-z0-9_-]")
_REPEATED_UNDERSCORE_RE = re.compile(r"_{2,}")

# Flowchart keywords that break the parser when used as a bare node ID
RESERVED_IDS = frozenset({
    "end", "subgraph", "graph", "flowchart", "class", "classdef", "style",
    "linkstyle", "click", "call", "href", "direction",
})

INDENT = "    "


def sanitize_id(raw: str) -> str:
    """Turn any identifier into a Mermaid-safe node ID.

    The result always matches ``^[A-Za-z_][A-Za-z0-9_-]*$`` and the function
    is idempotent, so edges can re-derive the ID of a node from the same
    source identifier.
    """
    node_id = _UNSAFE_ID_RE.sub("_", str(raw))
    node_id = _REPEATED_UNDERSCORE_RE.sub("_", node_id).strip("_")
    # Leading digits and hyphens are not valid identifier starts.
    if not node_id or not node_id[0].isalpha():
        node_id = f"n{node_id}"
    elif node_id.lower() in RESERVED_IDS:
        node_id = f"n_{node_id}"
    return node_id


def sanitize_label(raw: str) -> str:
    """Escape quotes and turn newlines into ``<br/>`` for a quoted label."""
    return str(raw).replace('"', "&quot;").replace("\r\n", "\n").replace("\n", "<br/>").strip()


class MermaidDiagram:
    """Line-oriented builder for a single Mermaid diagram.

    Nodes and groups are written in call order; edges are collected and
    written after all nodes, each distinct edge once. Style definitions for
    the requested class names are appended at the end. A group whose ID is
    also used by a node (a Compose service called ``Services``) is renamed
    at render time, since edges only ever point at nodes.
    """

    def __init__(
        self,
        kind: DiagramKind,
        style_classes: tuple[str, ...] = (),
        direction: str = "TD",
    ) -> None:
        self.kind = kind
        self._style_classes = style_classes
        self._lines: list[str] = [f"{kind.value} {direction}"]
        self._groups: list[tuple[int, str, str, str]] = []
        self._node_ids: set[str] = set()
        self._edges: list[str] = []
        self._seen_edges: set[str] = set()
        self._depth = 1
        self.node_count = 0

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def open_group(self, group_id: str, title: str) -> None:
        # Written out by render() once every node ID is known.
        self._groups.append(
            (len(self._lines), INDENT * self._depth, sanitize_id(group_id), sanitize_label(title))
        )
        self._lines.append("")
        self._depth += 1

    def close_group(self) -> None:
        self._depth = max(1, self._depth - 1)
        self._lines.append(f"{INDENT * self._depth}end")

    def node(self, raw_id: str, label_lines: list[str], css_class: str | None = None) -> str:
        """Declare a node; returns its sanitized ID."""
        node_id = sanitize_id(raw_id)
        label = sanitize_label("\n".join(label_lines))
        pad = INDENT * self._depth
        self._lines.append(f'{pad}{node_id}["{label}"]')
        if css_class:
            self._lines.append(f"{pad}class {node_id} {css_class}")
        self._node_ids.add(node_id)
        self.node_count += 1
        return node_id

    def edge(
        self,
        source: str,
        target: str,
        label: str | None = None,
        dotted: bool = False,
    ) -> None:
        """Add ``source -->|label| target`` (``-.->`` when dotted)."""
        source_id = sanitize_id(source)
        target_id = sanitize_id(target)
        arrow = "-.->" if dotted else "-->"
        text = f"|{sanitize_label(label)}|" if label else ""
        line = f"{INDENT}{source_id} {arrow}{text} {target_id}"
        if line in self._seen_edges:
            return
        self._seen_edges.add(line)
        self._edges.append(line)
        self._node_ids.update((source_id, target_id))

    def _group_ids(self) -> list[str]:
        taken = set(self._node_ids)
        ids: list[str] = []
        for _, _, group_id, _ in self._groups:
            unique = group_id
            suffix = 1
            while unique in taken:
                unique = f"{group_id}_group" if suffix == 1 else f"{group_id}_group{suffix}"
                suffix += 1
            taken.add(unique)
            ids.append(unique)
        return ids

    def render(self) -> str:
        lines = list(self._lines)
        for (index, pad, _, title), group_id in zip(self._groups, self._group_ids()):
            lines[index] = f'{pad}subgraph {group_id}["{title}"]'
        lines.extend(self._edges)
        if self._style_classes:
            lines.append("")
            for name in self._style_classes:
                lines.append(f"{INDENT}classDef {name} {STYLE_PALETTE[name]}")
        return "\n".join(lines) + "\n"
