"""Kubernetes manifests → Mermaid flowchart grouped by namespace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from archviz.generator.markup import MermaidDiagram
from archviz.generator.models import DiagramKind, GenerationResult
from archviz.generator.styles import KUBERNETES_CLASSES, KUBERNETES_KIND_CLASSES
from archviz.parser.models import ParsedDocument
from archviz.parser.tree import as_dict, get_dict, get_list, get_path, get_str

MAX_CONTAINER_PORTS = 2
WORKLOAD_KINDS = ("Deployment", "StatefulSet", "DaemonSet")
SELECTABLE_KINDS = ("Deployment", "StatefulSet")


@dataclass
class _Resource:
    kind: str
    name: str
    namespace: str
    node_id: str
    body: dict[str, Any]


def _collect(doc: ParsedDocument) -> list[_Resource]:
    documents = doc.documents if doc.is_multi_document else [doc.tree]
    resources: list[_Resource] = []
    for index, item in enumerate(documents):
        if not isinstance(item, dict):
            continue
        metadata = get_dict(item, "metadata")
        kind = get_str(item, "kind") or "Unknown"
        name = get_str(metadata, "name") or f"resource_{index}"
        namespace = get_str(metadata, "namespace") or "default"
        resources.append(_Resource(kind, name, namespace, f"{kind}_{name}_{namespace}", item))
    return resources


def _requests_limits(container: dict[str, Any]) -> list[str]:
    details = []
    requests = as_dict(get_path(container, "resources", "requests"))
    limits = as_dict(get_path(container, "resources", "limits"))
    if requests.get("cpu") or requests.get("memory"):
        details.append(
            f"📈 Requests: {get_str(requests, 'cpu', 'N/A')}/{get_str(requests, 'memory', 'N/A')}"
        )
    if limits.get("cpu") or limits.get("memory"):
        details.append(
            f"📉 Limits: {get_str(limits, 'cpu', 'N/A')}/{get_str(limits, 'memory', 'N/A')}"
        )
    return details


def _workload_details(spec: dict[str, Any]) -> list[str]:
    details = []
    if spec.get("replicas"):
        details.append(f"📊 {get_str(spec, 'replicas')} replicas")

    containers = [c for c in get_list(get_path(spec, "template", "spec"), "containers") if isinstance(c, dict)]
    if containers:
        first = containers[0]
        details.append(f"📦 {get_str(first, 'image') or 'unknown'}")
        details.extend(_requests_limits(first))
        ports = get_list(first, "ports")
        details.extend(
            f"🌐 {get_str(port, 'containerPort')}" for port in ports[:MAX_CONTAINER_PORTS]
        )
        env = get_list(first, "env")
        if env:
            details.append(f"⚙️ {len(env)} env vars")
        if len(containers) > 1:
            details.append(f"📦 +{len(containers) - 1} more containers")
    return details


def _statefulset_details(spec: dict[str, Any]) -> list[str]:
    details = ["💾 StatefulSet"]
    templates = get_list(spec, "volumeClaimTemplates")
    if templates:
        details.append(f"💾 {len(templates)} volume templates")
        storage = get_path(templates[0], "spec", "resources", "requests", "storage")
        if storage:
            details.append(f"💾 {storage}")
    return details


def _service_details(spec: dict[str, Any]) -> list[str]:
    details = [f"🔗 Type: {get_str(spec, 'type') or 'ClusterIP'}"]
    ports = [p for p in get_list(spec, "ports") if isinstance(p, dict)]
    if ports:
        mappings = []
        for port in ports:
            target = get_str(port, "targetPort")
            mappings.append(f"{get_str(port, 'port')}:{target}" if target else get_str(port, "port"))
        details.append(f"🌐 {', '.join(mappings)}")
    return details


def _pvc_details(spec: dict[str, Any]) -> list[str]:
    details = []
    storage = get_path(spec, "resources", "requests", "storage")
    if storage:
        details.append(f"💾 {storage}")
    modes = get_list(spec, "accessModes")
    if modes:
        details.append(f"🔐 {', '.join(str(mode) for mode in modes)}")
    return details


def _ingress_hosts(spec: dict[str, Any]) -> list[str]:
    return [get_str(rule, "host") for rule in get_list(spec, "rules") if get_str(rule, "host")]


def _ingress_backends(spec: dict[str, Any]) -> list[str]:
    """Service names referenced by an Ingress (``networking.k8s.io/v1`` and v1beta1)."""
    backends = [get_dict(spec, "defaultBackend"), get_dict(spec, "backend")]
    for rule in get_list(spec, "rules"):
        for path in get_list(get_dict(rule, "http"), "paths"):
            backends.append(get_dict(path, "backend"))

    names: list[str] = []
    for backend in backends:
        name = get_str(get_dict(backend, "service"), "name") or get_str(backend, "serviceName")
        if name and name not in names:
            names.append(name)
    return names


def _label(resource: _Resource) -> list[str]:
    body = resource.body
    spec = get_dict(body, "spec")
    details = [f"<b>{resource.name}</b>", f"📋 {resource.kind}"]

    labels = get_path(body, "metadata", "labels")
    if isinstance(labels, dict):
        details.append(f"🏷️ {len(labels)} labels")

    kind = resource.kind
    if kind in WORKLOAD_KINDS:
        details.extend(_workload_details(spec))
        if kind == "StatefulSet":
            details.extend(_statefulset_details(spec))
    elif kind == "Service" and spec:
        details.extend(_service_details(spec))
    elif kind in ("ConfigMap", "Secret"):
        keys = set(get_dict(body, "data")) | set(get_dict(body, "stringData"))
        if "data" in body or "stringData" in body:
            details.append(f"🔑 {len(keys)} keys")
    elif kind == "PersistentVolumeClaim":
        details.extend(_pvc_details(spec))
    elif kind == "Ingress":
        hosts = _ingress_hosts(spec)
        if hosts:
            details.append(f"🌍 {', '.join(hosts)}")
    return details


def generate(doc: ParsedDocument) -> GenerationResult:
    """One subgraph per namespace; Services select workloads, Ingresses route to Services."""
    resources = _collect(doc)

    namespaces: dict[str, list[_Resource]] = {}
    for resource in resources:
        namespaces.setdefault(resource.namespace, []).append(resource)

    diagram = MermaidDiagram(DiagramKind.flowchart, KUBERNETES_CLASSES)
    for namespace, members in namespaces.items():
        diagram.open_group(f"NS_{namespace}", f"🏠 Namespace: {namespace}")
        for resource in members:
            diagram.node(resource.node_id, _label(resource), KUBERNETES_KIND_CLASSES.get(resource.kind))
        diagram.close_group()

    for resource in resources:
        peers = namespaces[resource.namespace]
        spec = get_dict(resource.body, "spec")

        if resource.kind == "Service" and get_dict(spec, "selector"):
            for other in peers:
                if other.kind in SELECTABLE_KINDS:
                    diagram.edge(resource.node_id, other.node_id, "selects")

        elif resource.kind == "Ingress":
            services = {other.name: other for other in peers if other.kind == "Service"}
            for backend in _ingress_backends(spec):
                if backend in services:
                    diagram.edge(resource.node_id, services[backend].node_id, "routes to", dotted=True)

    return GenerationResult(
        success=True,
        markup=diagram.render(),
        diagram_kind=diagram.kind,
        node_count=diagram.node_count,
        edge_count=diagram.edge_count,
    )
