"""Data models for structural parsing and format detection."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class IaCFormat(str, Enum):
    """Schema families the classifier can recognise."""

    docker_compose = "docker-compose"
    kubernetes = "kubernetes"
    terraform = "terraform"
    cloudformation = "cloudformation"
    azure_arm = "azure-arm"
    ibm_cloud = "ibm-cloud"
    unknown = "unknown"


class SourceSyntax(str, Enum):
    """Which structural parser produced the tree."""

    json = "json"
    yaml = "yaml"
    hcl = "hcl"


class ParsedDocument(BaseModel):
    """A parsed IaC document ready for validation and generation."""

    format: IaCFormat = IaCFormat.unknown
    tree: dict[str, Any] = Field(default_factory=dict)
    syntax: SourceSyntax = SourceSyntax.yaml
    is_multi_document: bool = False
    documents: list[Any] = Field(default_factory=list)
    source_text: str = ""


class ParseFailure(BaseModel):
    """A syntax error raised by the JSON or YAML parser."""

    message: str
    line: int | None = None
    column: int | None = None
    syntax: SourceSyntax | None = None
