"""AWS CloudFormation → Mermaid graph."""

from __future__ import annotations

from archviz.generator.markup import MermaidDiagram
from archviz.generator.models import DiagramKind, GenerationResult
from archviz.generator.styles import CLOUDFORMATION_CLASSES, CLOUDFORMATION_TYPE_RULES, classify_style
from archviz.parser.models import ParsedDocument
from archviz.parser.tree import as_dict, as_list, get_str


def generate(doc: ParsedDocument) -> GenerationResult:
    """Flat list of resources keyed by logical ID, ``DependsOn`` edges and parameters."""
    tree = doc.tree
    resources = as_dict(tree.get("Resources"))
    parameters = as_dict(tree.get("Parameters"))

    diagram = MermaidDiagram(DiagramKind.graph, CLOUDFORMATION_CLASSES)

    for logical_id, raw_config in resources.items():
        if not isinstance(raw_config, dict):
            continue
        resource_type = get_str(raw_config, "Type") or "Unknown"
        diagram.node(
            logical_id,
            [resource_type, f"☁️ {logical_id}"],
            classify_style(resource_type, CLOUDFORMATION_TYPE_RULES),
        )
        for dependency in as_list(raw_config.get("DependsOn")):
            if isinstance(dependency, str):
                diagram.edge(dependency, logical_id)

    for name, raw_config in parameters.items():
        details = ["Parameter", f"⚙️ {name}"]
        parameter_type = get_str(as_dict(raw_config), "Type")
        if parameter_type:
            details.append(f"🔧 {parameter_type}")
        diagram.node(f"param_{name}", details, "parameter")

    return GenerationResult(
        success=True,
        markup=diagram.render(),
        diagram_kind=diagram.kind,
        node_count=diagram.node_count,
        edge_count=diagram.edge_count,
    )
