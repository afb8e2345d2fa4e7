"""Format classifier: decide which IaC schema family a document belongs to."""

from __future__ import annotations

import json
import logging
from typing import Any

from archviz.parser.hcl import looks_like_hcl
from archviz.parser.loader import load_structured
from archviz.parser.models import IaCFormat, SourceSyntax

logger = logging.getLogger(__name__)

ARM_SCHEMA_MARKER = "deploymentTemplate.json"
IBM_MARKERS = ("ibm_", "ibmcloud_")


def classify_tree(tree: Any, is_json: bool = False) -> IaCFormat:
    """Run the field-presence cascade on a parsed tree.

    Formats share optional fields, so the order below resolves ambiguity:
    ARM (JSON only) → CloudFormation → Kubernetes → Docker Compose →
    Terraform (JSON/YAML form) → IBM Cloud.
    """
    if not isinstance(tree, dict):
        return IaCFormat.unknown

    schema = tree.get("$schema")
    if is_json and isinstance(schema, str) and ARM_SCHEMA_MARKER in schema:
        return IaCFormat.azure_arm

    if tree.get("AWSTemplateFormatVersion") or tree.get("Resources"):
        return IaCFormat.cloudformation

    if tree.get("apiVersion") and tree.get("kind"):
        return IaCFormat.kubernetes

    if tree.get("version") and tree.get("services"):
        return IaCFormat.docker_compose

    if tree.get("terraform") or tree.get("provider") or tree.get("resource"):
        return IaCFormat.terraform

    serialized = json.dumps(tree, default=str).lower()
    if any(marker in serialized for marker in IBM_MARKERS):
        return IaCFormat.ibm_cloud

    return IaCFormat.unknown


def detect_format(text: str) -> IaCFormat:
    """Classify raw text. Never raises; anything unexpected is ``unknown``."""
    try:
        if not text or not text.strip():
            return IaCFormat.unknown

        # HCL is not valid YAML/JSON, so check it before parsing.
        if looks_like_hcl(text):
            return IaCFormat.terraform

        documents, syntax = load_structured(text)
        if not documents:
            return IaCFormat.unknown
        return classify_tree(documents[0], is_json=syntax is SourceSyntax.json)
    except Exception:
        logger.debug("Format detection failed", exc_info=True)
        return IaCFormat.unknown
