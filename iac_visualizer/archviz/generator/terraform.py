"""Terraform (HCL or JSON) → Mermaid flowchart."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import Any

from archviz.generator.markup import MermaidDiagram
from archviz.generator.models import DiagramKind, GenerationResult
from archviz.generator.styles import TERRAFORM_CLASSES, TERRAFORM_TYPE_RULES, classify_style
from archviz.parser.hcl import variable_details
from archviz.parser.models import ParsedDocument, SourceSyntax
from archviz.parser.tree import (
    as_dict,
    as_list,
    get_list,
    get_str,
    iter_interpolations,
    iter_strings,
    truncate,
)

DESCRIPTION_LIMIT = 30

# Reference roots that never name a resource
NON_RESOURCE_ROOTS = frozenset({"var", "local", "count", "each", "path", "self", "terraform"})

_REFERENCE_RE = re.compile(r"(?<![\w.-])(data\.)?([A-Za-z_][\w-]*)\.([A-Za-z_][\w-]*)")


def _first(value: Any) -> str:
    items = as_list(value)
    return str(items[0]) if items else ""


def _aws_details(resource_type: str, config: dict[str, Any]) -> list[str]:
    details: list[str] = []
    if resource_type == "aws_instance":
        if config.get("instance_type"):
            details.append(f"💻 {get_str(config, 'instance_type')}")
        if config.get("ami"):
            details.append(f"💿 {get_str(config, 'ami')}")
    elif resource_type == "aws_vpc":
        if config.get("cidr_block"):
            details.append(f"🌐 {get_str(config, 'cidr_block')}")
    elif resource_type == "aws_subnet":
        if config.get("cidr_block"):
            details.append(f"🌐 {get_str(config, 'cidr_block')}")
        if config.get("availability_zone"):
            details.append(f"📍 {get_str(config, 'availability_zone')}")
    elif resource_type == "aws_security_group":
        ingress = get_list(config, "ingress")
        egress = get_list(config, "egress")
        if ingress:
            details.append(f"🔓 {len(ingress)} ingress rules")
        if egress:
            details.append(f"🔒 {len(egress)} egress rules")
    elif resource_type == "aws_db_instance":
        if config.get("engine"):
            details.append(f"🔧 {get_str(config, 'engine')}")
        if config.get("instance_class"):
            details.append(f"💻 {get_str(config, 'instance_class')}")
        if config.get("allocated_storage"):
            details.append(f"💾 {get_str(config, 'allocated_storage')}GB")
    elif resource_type == "aws_lb":
        if config.get("load_balancer_type"):
            details.append(f"⚖️ {get_str(config, 'load_balancer_type')}")
    elif resource_type == "aws_s3_bucket":
        if config.get("bucket"):
            details.append(f"🪣 {get_str(config, 'bucket')}")
    return details


def _azure_details(resource_type: str, config: dict[str, Any]) -> list[str]:
    details: list[str] = []
    if resource_type == "azurerm_virtual_machine":
        if config.get("vm_size"):
            details.append(f"💻 {get_str(config, 'vm_size')}")
    elif resource_type == "azurerm_virtual_network":
        if get_list(config, "address_space"):
            details.append(f"🌐 {_first(config['address_space'])}")
    elif resource_type == "azurerm_subnet":
        if get_list(config, "address_prefixes"):
            details.append(f"🌐 {_first(config['address_prefixes'])}")
    elif resource_type == "azurerm_storage_account":
        if config.get("account_tier"):
            details.append(f"💾 {get_str(config, 'account_tier')}")
        if config.get("account_replication_type"):
            details.append(f"🔁 {get_str(config, 'account_replication_type')}")
    return details


def _gcp_details(resource_type: str, config: dict[str, Any]) -> list[str]:
    details: list[str] = []
    if resource_type == "google_compute_instance":
        if config.get("machine_type"):
            details.append(f"💻 {get_str(config, 'machine_type')}")
        if config.get("zone"):
            details.append(f"📍 {get_str(config, 'zone')}")
    elif resource_type == "google_compute_network":
        if config.get("auto_create_subnetworks") is False:
            details.append("🌐 custom mode")
    elif resource_type == "google_storage_bucket":
        if config.get("location"):
            details.append(f"📍 {get_str(config, 'location')}")
    return details


PROVIDER_DETAILS: dict[str, Callable[[str, dict[str, Any]], list[str]]] = {
    "aws_": _aws_details,
    "azurerm_": _azure_details,
    "google_": _gcp_details,
}


def _resource_label(resource_type: str, name: str, config: dict[str, Any]) -> list[str]:
    details = [f"<b>{name}</b>", f"🏗️ {resource_type}"]
    for prefix, enrich in PROVIDER_DETAILS.items():
        if resource_type.startswith(prefix):
            details.extend(enrich(resource_type, config))
            break
    tags = config.get("tags")
    if isinstance(tags, dict):
        details.append(f"🏷️ {len(tags)} tags")
    if config.get("count"):
        details.append(f"📊 count: {get_str(config, 'count')}")
    return details


def _data_label(data_type: str, name: str, config: dict[str, Any]) -> list[str]:
    details = [f"<b>{name}</b>", f"📊 data.{data_type}"]
    if config.get("filter") or config.get("filters"):
        details.append("🔍 filtered")
    if "vpc" in data_type or "subnet" in data_type:
        details.append("🌐 network lookup")
    elif "ami" in data_type or "image" in data_type:
        details.append("💿 image lookup")
    return details


def _variable_label(name: str, info: dict[str, Any]) -> list[str]:
    details = [f"<b>{name}</b>", "📝 variable"]
    if info.get("type"):
        details.append(f"🔧 {get_str(info, 'type')}")
    if "default" in info:
        details.append("⚙️ has default")
    if info.get("description"):
        details.append(f"ℹ️ {truncate(get_str(info, 'description'), DESCRIPTION_LIMIT)}")
    return details


def _instances(section: Any) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """Yield ``(type, name, config)`` from a ``{type: {name: config}}`` section."""
    for block_type, instances in as_dict(section).items():
        for name, config in as_dict(instances).items():
            yield block_type, name, as_dict(config)


def _address_node_id(address: str) -> str:
    """``aws_vpc.main`` / ``data.aws_ami.x`` / ``module.vpc`` → raw node ID."""
    return address.replace(".", "_")


def _without_literals(expression: str) -> str:
    """Blank out quoted string literals such as the path in ``file("a.sh")``."""
    kept: list[str] = []
    i = 0
    n = len(expression)
    while i < n:
        quote = expression.find('"', i)
        if quote == -1:
            kept.append(expression[i:])
            break
        kept.append(expression[i:quote])
        i = quote + 1
        while i < n and expression[i] != '"':
            i += 2 if expression[i] == "\\" else 1
        i += 1
    return " ".join(kept)


def references(config: dict[str, Any]) -> list[str]:
    """Raw node IDs of resources, data sources and modules referenced in ``${...}``."""
    found: list[str] = []
    for key, value in config.items():
        if key == "depends_on":
            continue
        for text in iter_strings(value):
            for expression in iter_interpolations(text):
                for data_prefix, root, name in _REFERENCE_RE.findall(_without_literals(expression)):
                    if data_prefix:
                        ref = f"data_{root}_{name}"
                    elif root in NON_RESOURCE_ROOTS or root == "data":
                        continue
                    elif root == "module":
                        ref = f"module_{name}"
                    else:
                        ref = f"{root}_{name}"
                    if ref not in found:
                        found.append(ref)
    return found


def _variables(doc: ParsedDocument) -> dict[str, dict[str, Any]]:
    declared = as_dict(doc.tree.get("variable"))
    if doc.syntax == SourceSyntax.hcl:
        from_text = variable_details(doc.source_text)
        return {name: from_text.get(name, {}) for name in declared}
    return {name: as_dict(info) for name, info in declared.items()}


def generate(doc: ParsedDocument) -> GenerationResult:
    """Resources, data sources, variables and modules with their dependency edges."""
    tree = doc.tree
    resources = list(_instances(tree.get("resource")))
    data_sources = list(_instances(tree.get("data")))
    variables = _variables(doc)
    modules = as_dict(tree.get("module"))

    diagram = MermaidDiagram(DiagramKind.flowchart, TERRAFORM_CLASSES)

    if resources:
        diagram.open_group("Resources", "🏗️ Resources")
        for resource_type, name, config in resources:
            diagram.node(
                f"{resource_type}_{name}",
                _resource_label(resource_type, name, config),
                classify_style(resource_type, TERRAFORM_TYPE_RULES),
            )
        diagram.close_group()

    if data_sources:
        diagram.open_group("DataSources", "📊 Data Sources")
        for data_type, name, config in data_sources:
            diagram.node(f"data_{data_type}_{name}", _data_label(data_type, name, config), "datasource")
        diagram.close_group()

    if variables:
        diagram.open_group("Variables", "📝 Variables")
        for name, info in variables.items():
            diagram.node(f"var_{name}", _variable_label(name, info), "variable")
        diagram.close_group()

    if modules:
        diagram.open_group("Modules", "📦 Modules")
        for name, config in modules.items():
            details = [f"<b>{name}</b>", "📦 module"]
            source = get_str(config, "source")
            if source:
                details.append(f"🔗 {source}")
            diagram.node(f"module_{name}", details, "module")
        diagram.close_group()

    for resource_type, name, config in resources:
        node_id = f"{resource_type}_{name}"
        for dependency in as_list(config.get("depends_on")):
            if isinstance(dependency, str):
                diagram.edge(_address_node_id(dependency), node_id, "depends on")
        for ref in references(config):
            if ref != node_id:
                diagram.edge(ref, node_id, "referenced by", dotted=True)

    for name, config in modules.items():
        node_id = f"module_{name}"
        for ref in references(as_dict(config)):
            if ref != node_id:
                diagram.edge(ref, node_id, "referenced by", dotted=True)

    return GenerationResult(
        success=True,
        markup=diagram.render(),
        diagram_kind=diagram.kind,
        node_count=diagram.node_count,
        edge_count=diagram.edge_count,
    )
