"""Docker Compose → Mermaid flowchart."""

from __future__ import annotations

from typing import Any

from archviz.generator.markup import MermaidDiagram
from archviz.generator.models import DiagramKind, GenerationResult
from archviz.generator.styles import COMPOSE_CLASSES, COMPOSE_IMAGE_RULES, classify_style
from archviz.parser.models import ParsedDocument
from archviz.parser.tree import as_dict, as_list, get_str, truncate

MAX_PORTS = 3
COMMAND_LIMIT = 20


def _port_text(port: Any) -> str:
    """Render short (``"80:80"``) or long (``{published, target}``) port syntax."""
    if isinstance(port, dict):
        published = get_str(port, "published")
        target = get_str(port, "target")
        return f"{published}:{target}" if published else target
    return str(port)


def _keys_or_items(value: Any) -> list[str]:
    """Names from a list, a single string, or the keys of a mapping."""
    if isinstance(value, dict):
        return [str(k) for k in value]
    return [item for item in as_list(value) if isinstance(item, str)]


def _service_label(name: str, config: dict[str, Any]) -> list[str]:
    image = get_str(config, "image") or "custom"
    details = [f"<b>{name}</b>", f"📦 {image}"]

    ports = as_list(config.get("ports"))
    details.extend(f"🌐 {_port_text(port)}" for port in ports[:MAX_PORTS])
    if len(ports) > MAX_PORTS:
        details.append(f"🌐 +{len(ports) - MAX_PORTS} more ports")

    environment = config.get("environment")
    if environment:
        count = len(environment) if isinstance(environment, (list, dict)) else 1
        details.append(f"⚙️ {count} env vars")

    volumes = as_list(config.get("volumes"))
    if volumes:
        details.append(f"💾 {len(volumes)} volumes")

    if config.get("restart"):
        details.append(f"🔄 restart: {get_str(config, 'restart')}")

    if config.get("working_dir"):
        details.append(f"📁 {get_str(config, 'working_dir')}")

    command = config.get("command")
    if command:
        text = " ".join(str(part) for part in command) if isinstance(command, list) else str(command)
        details.append(f"▶️ {truncate(text, COMMAND_LIMIT)}")

    return details


def _named_volume(mount: Any) -> str | None:
    """Volume name for a named-volume mount; ``None`` for bind mounts."""
    if isinstance(mount, dict):
        source = get_str(mount, "source")
        if get_str(mount, "type", "volume") == "volume" and source:
            return source
        return None
    if not isinstance(mount, str):
        return None
    parts = mount.split(":")
    if len(parts) < 2:
        return None
    name = parts[0]
    if name.startswith((".", "/", "~")):
        return None
    return name


def generate(doc: ParsedDocument) -> GenerationResult:
    """Services, networks and volumes, each in its own subgraph."""
    tree = doc.tree
    services = as_dict(tree.get("services"))
    networks = as_dict(tree.get("networks"))
    volumes = as_dict(tree.get("volumes"))

    diagram = MermaidDiagram(DiagramKind.flowchart, COMPOSE_CLASSES)

    diagram.open_group("Services", "🚀 Services")
    for name, raw_config in services.items():
        config = as_dict(raw_config)
        image = get_str(config, "image") or "custom"
        diagram.node(name, _service_label(name, config), classify_style(image, COMPOSE_IMAGE_RULES))
    diagram.close_group()

    for name, raw_config in services.items():
        for dependency in _keys_or_items(as_dict(raw_config).get("depends_on")):
            diagram.edge(dependency, name, "depends on")

    if networks:
        diagram.open_group("Networks", "🌐 Networks")
        for network_name, network_config in networks.items():
            # `frontend:` with no body is a valid declaration.
            driver = get_str(as_dict(network_config), "driver") or "bridge"
            diagram.node(
                f"network_{network_name}",
                [f"🌐 {network_name}", f"Driver: {driver}"],
                "network",
            )
        diagram.close_group()

        for name, raw_config in services.items():
            for network_name in _keys_or_items(as_dict(raw_config).get("networks")):
                diagram.edge(name, f"network_{network_name}", "connects to", dotted=True)

    if volumes:
        diagram.open_group("Volumes", "💾 Volumes")
        for volume_name, volume_config in volumes.items():
            driver = get_str(as_dict(volume_config), "driver") or "local"
            diagram.node(
                f"volume_{volume_name}",
                [f"💾 {volume_name}", f"Driver: {driver}"],
                "volume",
            )
        diagram.close_group()

        for name, raw_config in services.items():
            for mount in as_list(as_dict(raw_config).get("volumes")):
                volume_name = _named_volume(mount)
                if volume_name:
                    diagram.edge(f"volume_{volume_name}", name, "mounts to", dotted=True)

    return GenerationResult(
        success=True,
        markup=diagram.render(),
        diagram_kind=diagram.kind,
        node_count=diagram.node_count,
        edge_count=diagram.edge_count,
    )
