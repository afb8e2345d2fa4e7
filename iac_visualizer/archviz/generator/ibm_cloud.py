"""IBM Cloud resource configs → Mermaid graph."""

from __future__ import annotations

import re

from archviz.generator.markup import MermaidDiagram
from archviz.generator.models import DiagramKind, GenerationResult
from archviz.generator.styles import IBM_CLASSES, IBM_TYPE_RULES, classify_style
from archviz.parser.models import ParsedDocument
from archviz.parser.tree import get_dict, get_list, get_str, iter_interpolations

_INSTANCE_TARGET_RE = re.compile(r"ibm_is_instance\.([^.]+)")

# First matching substring picks the icon
TYPE_ICONS = (
    ("vpc", "🏢"),
    ("subnet", "🌐"),
    ("instance", "🖥️"),
    ("security_group", "🛡️"),
    ("lb", "⚖️"),
    ("floating_ip", "🌍"),
    ("cos", "📦"),
)
DEFAULT_ICON = "🌐"

# Single-reference properties that link a resource to its parent
REFERENCE_PROPERTIES = ("vpc", "subnet", "lb", "group")


def extract_resource_name(ref: str) -> str | None:
    """``"${ibm_is_vpc.main.id}"`` → ``"main"``."""
    for expression in iter_interpolations(ref):
        parts = expression.split(".", 2)
        if len(parts) == 3 and parts[0] and parts[1]:
            return parts[1]
    return None


def _icon(resource_type: str) -> str:
    for keyword, icon in TYPE_ICONS:
        if keyword in resource_type:
            return icon
    return DEFAULT_ICON


def generate(doc: ParsedDocument) -> GenerationResult:
    """Flat resource list; references in ``properties`` become edges."""
    tree = doc.tree
    diagram = MermaidDiagram(DiagramKind.graph, IBM_CLASSES)

    for resource in get_list(tree, "resources"):
        name = get_str(resource, "name")
        resource_type = get_str(resource, "type")
        if not name or not resource_type:
            continue
        node_id = diagram.node(
            name,
            [f"{_icon(resource_type)} {name}", f"<small>{resource_type}</small>"],
            classify_style(resource_type, IBM_TYPE_RULES),
        )

        properties = get_dict(resource, "properties")
        for key in REFERENCE_PROPERTIES:
            value = properties.get(key)
            if isinstance(value, str):
                parent = extract_resource_name(value)
                if parent:
                    diagram.edge(parent, node_id)

        target = properties.get("target")
        if isinstance(target, str):
            match = _INSTANCE_TARGET_RE.search(target)
            if match:
                diagram.edge(match.group(1), node_id)

        for group in get_list(properties, "security_groups"):
            if isinstance(group, str):
                parent = extract_resource_name(group)
                if parent:
                    diagram.edge(parent, node_id)

    for data_source in get_list(tree, "data_sources"):
        name = get_str(data_source, "name")
        data_type = get_str(data_source, "type")
        if name and data_type:
            diagram.node(
                f"data_{name}",
                [f"📋 {name}", f"<small>data.{data_type}</small>"],
                "datasource",
            )

    return GenerationResult(
        success=True,
        markup=diagram.render(),
        diagram_kind=diagram.kind,
        node_count=diagram.node_count,
        edge_count=diagram.edge_count,
    )
