"""Azure Resource Manager templates → Mermaid flowchart."""

from __future__ import annotations

from archviz.generator.markup import MermaidDiagram
from archviz.generator.models import DiagramKind, GenerationResult
from archviz.generator.styles import ARM_CLASSES, ARM_TYPE_RULES, classify_style
from archviz.parser.models import ParsedDocument
from archviz.parser.tree import as_list, get_list, get_str


def generate(doc: ParsedDocument) -> GenerationResult:
    """Flat resource list; each ``dependsOn`` entry becomes a placeholder node.

    Dependencies are usually ``resourceId(...)`` expressions that cannot be
    resolved to a declared resource without evaluating the template, so
    they are drawn as separate nodes labelled with the raw expression.
    """
    diagram = MermaidDiagram(DiagramKind.flowchart, ARM_CLASSES)

    edges: list[tuple[str, str]] = []
    for index, resource in enumerate(get_list(doc.tree, "resources")):
        if not isinstance(resource, dict):
            continue
        resource_type = get_str(resource, "type") or "Unknown"
        name = get_str(resource, "name") or f"resource_{index}"
        details = [resource_type, f"🔷 {name}"]
        location = resource.get("location")
        if isinstance(location, str) and location:
            details.append(f"📍 {location}")
        node_id = diagram.node(
            f"{resource_type}_{name}_{index}",
            details,
            classify_style(resource_type, ARM_TYPE_RULES),
        )
        for dependency in as_list(resource.get("dependsOn")):
            if isinstance(dependency, str):
                edges.append((dependency, node_id))

    declared: set[str] = set()
    for dependency, _ in edges:
        if dependency not in declared:
            declared.add(dependency)
            diagram.node(f"{dependency}_dep", [dependency], "dependency")

    for dependency, node_id in edges:
        diagram.edge(f"{dependency}_dep", node_id)

    return GenerationResult(
        success=True,
        markup=diagram.render(),
        diagram_kind=diagram.kind,
        node_count=diagram.node_count,
        edge_count=diagram.edge_count,
    )
