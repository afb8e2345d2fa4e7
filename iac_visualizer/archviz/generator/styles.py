"""Style classes and the substring rules that assign them."""

from __future__ import annotations

from types import MappingProxyType

_BASE = "stroke-width:2px,color:#000"

# classDef name -> Mermaid style; appended verbatim to every diagram that uses it
STYLE_PALETTE = MappingProxyType({
    "webServer": f"fill:#e1f5fe,stroke:#01579b,{_BASE}",
    "database": f"fill:#f3e5f5,stroke:#4a148c,{_BASE}",
    "cache": f"fill:#fff3e0,stroke:#e65100,{_BASE}",
    "application": f"fill:#e8f5e8,stroke:#2e7d32,{_BASE}",
    "network": f"fill:#e3f2fd,stroke:#1976d2,{_BASE}",
    "volume": f"fill:#f1f8e9,stroke:#33691e,{_BASE}",
    "workload": f"fill:#e3f2fd,stroke:#1976d2,{_BASE}",
    "service": f"fill:#f3e5f5,stroke:#7b1fa2,{_BASE}",
    "config": f"fill:#fff3e0,stroke:#f57c00,{_BASE}",
    "storage": f"fill:#fce4ec,stroke:#c2185b,{_BASE}",
    "ingress": f"fill:#e0f7fa,stroke:#006064,{_BASE}",
    "compute": f"fill:#fff3e0,stroke:#f57c00,{_BASE}",
    "loadbalancer": f"fill:#e8f5e8,stroke:#388e3c,{_BASE}",
    "security": f"fill:#ffebee,stroke:#c62828,{_BASE}",
    "datasource": f"fill:#f1f8e9,stroke:#689f38,{_BASE}",
    "variable": f"fill:#fff8e1,stroke:#fbc02d,{_BASE}",
    "module": f"fill:#ede7f6,stroke:#4527a0,{_BASE}",
    "parameter": f"fill:#fff8e1,stroke:#fbc02d,{_BASE}",
    "dependency": f"fill:#eceff1,stroke:#455a64,stroke-dasharray:4,{_BASE}",
})

StyleRules = tuple[tuple[tuple[str, ...], str], ...]

# Ordered (keywords, class) pairs; the first rule with a matching keyword wins.
COMPOSE_IMAGE_RULES: StyleRules = (
    (("nginx", "apache"), "webServer"),
    (("postgres", "mysql", "mongo", "mariadb"), "database"),
    (("redis", "memcached"), "cache"),
    (("node", "python", "java", "golang"), "application"),
)

TERRAFORM_TYPE_RULES: StyleRules = (
    (("vpc", "network", "subnet"), "network"),
    (("instance", "server"), "compute"),
    (("db", "database"), "database"),
    (("lb", "balancer"), "loadbalancer"),
    (("storage", "bucket"), "storage"),
    (("security_group", "firewall", "iam"), "security"),
)

CLOUDFORMATION_TYPE_RULES: StyleRules = (
    (("securitygroup", "iam::", "kms::"), "security"),
    (("elasticloadbalancing",), "loadbalancer"),
    (("::vpc", "subnet", "gateway", "routetable"), "network"),
    (("rds::", "dynamodb", "docdb", "neptune"), "database"),
    (("s3::", "efs::"), "storage"),
    (("ec2::instance", "lambda", "ecs::", "autoscaling"), "compute"),
)

ARM_TYPE_RULES: StyleRules = (
    (("networksecuritygroups",), "security"),
    (("loadbalancers", "applicationgateways"), "loadbalancer"),
    (("microsoft.network",), "network"),
    (("microsoft.sql", "documentdb", "dbfor"), "database"),
    (("storageaccounts",), "storage"),
    (("virtualmachines", "microsoft.web", "containerinstances"), "compute"),
)

IBM_TYPE_RULES: StyleRules = (
    (("security_group",), "security"),
    (("_lb",), "loadbalancer"),
    (("vpc", "subnet", "floating_ip", "public_gateway"), "network"),
    (("database",), "database"),
    (("instance",), "compute"),
    (("cos", "bucket"), "storage"),
)

KUBERNETES_KIND_CLASSES = MappingProxyType({
    "Deployment": "workload",
    "StatefulSet": "workload",
    "DaemonSet": "workload",
    "Service": "service",
    "ConfigMap": "config",
    "Secret": "config",
    "PersistentVolumeClaim": "storage",
    "Ingress": "ingress",
})

# Classes each generator may emit, in classDef order
COMPOSE_CLASSES = ("webServer", "database", "cache", "application", "network", "volume")
KUBERNETES_CLASSES = ("workload", "service", "config", "storage", "ingress")
TERRAFORM_CLASSES = (
    "network", "compute", "database", "loadbalancer", "storage", "security",
    "datasource", "variable", "module",
)
CLOUDFORMATION_CLASSES = (
    "security", "loadbalancer", "network", "database", "storage", "compute", "parameter",
)
ARM_CLASSES = (
    "security", "loadbalancer", "network", "database", "storage", "compute", "dependency",
)
IBM_CLASSES = (
    "security", "loadbalancer", "network", "database", "compute", "storage", "datasource",
)


def classify_style(value: str, rules: StyleRules) -> str | None:
    """Return the class of the first rule whose keyword occurs in *value*."""
    lowered = value.lower()
    for keywords, class_name in rules:
        if any(keyword in lowered for keyword in keywords):
            return class_name
    return None
