"""Format-specific structural checks for parsed IaC trees."""

from __future__ import annotations

from typing import Any

from archviz.parser.models import IaCFormat
from archviz.validator.models import ValidationIssue, ValidationSeverity

# Top-level keys each format must carry
REQUIRED_FIELDS: dict[IaCFormat, list[str]] = {
    IaCFormat.docker_compose: ["version", "services"],
    IaCFormat.kubernetes: ["apiVersion", "kind"],
    IaCFormat.cloudformation: ["Resources"],
    IaCFormat.azure_arm: ["$schema", "contentVersion", "resources"],
    IaCFormat.terraform: [],
    IaCFormat.ibm_cloud: [],
}


def _error(check_name: str, message: str, suggestion: str | None = None) -> ValidationIssue:
    return ValidationIssue(
        severity=ValidationSeverity.error,
        check_name=check_name,
        message=message,
        suggestion=suggestion,
    )


def _warning(check_name: str, message: str, suggestion: str | None = None) -> ValidationIssue:
    return ValidationIssue(
        severity=ValidationSeverity.warning,
        check_name=check_name,
        message=message,
        suggestion=suggestion,
    )


def check_required_fields(tree: dict[str, Any], fmt: IaCFormat) -> list[ValidationIssue]:
    """Flag missing top-level keys the format cannot do without."""
    return [
        _error("required_fields", f"Missing required field: {field}")
        for field in REQUIRED_FIELDS.get(fmt, [])
        if field not in tree
    ]


def check_docker_compose(tree: dict[str, Any]) -> list[ValidationIssue]:
    """Every service needs a mapping config with an image or a build."""
    issues: list[ValidationIssue] = []
    services = tree.get("services")
    if not isinstance(services, dict):
        return issues

    for name, config in services.items():
        if not isinstance(config, dict):
            issues.append(
                _error("docker_compose", f"Invalid service configuration for: {name}")
            )
            continue
        if not config.get("image") and not config.get("build"):
            issues.append(
                _warning(
                    "docker_compose",
                    f"Service '{name}' must have either 'image' or 'build' specified",
                )
            )
    return issues


def check_kubernetes(tree: dict[str, Any]) -> list[ValidationIssue]:
    """apiVersion/kind must be strings; metadata should carry a name."""
    issues: list[ValidationIssue] = []
    if not isinstance(tree.get("apiVersion"), str):
        issues.append(_error("kubernetes", "apiVersion must be a string"))
    if not isinstance(tree.get("kind"), str):
        issues.append(_error("kubernetes", "kind must be a string"))

    metadata = tree.get("metadata")
    if isinstance(metadata, dict) and not metadata.get("name"):
        issues.append(_warning("kubernetes", "metadata.name is required"))
    return issues


def check_cloudformation(tree: dict[str, Any]) -> list[ValidationIssue]:
    """Each resource must be a mapping with a Type."""
    issues: list[ValidationIssue] = []
    resources = tree.get("Resources")
    if not isinstance(resources, dict):
        return issues

    for name, config in resources.items():
        if not isinstance(config, dict):
            issues.append(
                _error("cloudformation", f"Invalid resource configuration for: {name}")
            )
            continue
        if not config.get("Type"):
            issues.append(
                _error("cloudformation", f"Resource '{name}' is missing Type property")
            )
    return issues


def check_terraform(tree: dict[str, Any]) -> list[ValidationIssue]:
    """A configuration without resources, data or modules draws nothing."""
    has_content = any(
        isinstance(tree.get(key), dict) and tree.get(key)
        for key in ("resource", "data", "module")
    )
    if has_content:
        return []
    return [
        _warning(
            "terraform",
            "Terraform configuration should contain at least one resource, data source, or module",
        )
    ]


def check_azure_arm(tree: dict[str, Any]) -> list[ValidationIssue]:
    """resources must be a list; entries should declare a type."""
    issues: list[ValidationIssue] = []
    resources = tree.get("resources")
    if resources is None:
        return issues
    if not isinstance(resources, list):
        issues.append(_error("azure_arm", "'resources' must be a list"))
        return issues

    for index, resource in enumerate(resources):
        if not isinstance(resource, dict) or not resource.get("type"):
            issues.append(
                _warning("azure_arm", f"Resource {index} is missing a 'type'")
            )
    return issues


def check_ibm_cloud(tree: dict[str, Any]) -> list[ValidationIssue]:
    """IBM Cloud configs list their resources in an array."""
    resources = tree.get("resources")
    if resources is not None and not isinstance(resources, list):
        return [
            _warning(
                "ibm_cloud",
                "'resources' should be a list of resource objects",
                suggestion="Use resources: [{name: ..., type: ibm_..., properties: {...}}]",
            )
        ]
    return []


FORMAT_CHECKS = {
    IaCFormat.docker_compose: check_docker_compose,
    IaCFormat.kubernetes: check_kubernetes,
    IaCFormat.cloudformation: check_cloudformation,
    IaCFormat.terraform: check_terraform,
    IaCFormat.azure_arm: check_azure_arm,
    IaCFormat.ibm_cloud: check_ibm_cloud,
}
