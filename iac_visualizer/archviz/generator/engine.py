"""Dispatch a parsed document to its format's generator."""

from __future__ import annotations

import logging
from collections.abc import Callable

from archviz.generator import azure_arm, cloudformation, compose, ibm_cloud, kubernetes, terraform
from archviz.generator.models import GenerationResult
from archviz.parser.models import IaCFormat, ParsedDocument

logger = logging.getLogger(__name__)

GENERATORS: dict[IaCFormat, Callable[[ParsedDocument], GenerationResult]] = {
    IaCFormat.docker_compose: compose.generate,
    IaCFormat.kubernetes: kubernetes.generate,
    IaCFormat.terraform: terraform.generate,
    IaCFormat.cloudformation: cloudformation.generate,
    IaCFormat.azure_arm: azure_arm.generate,
    IaCFormat.ibm_cloud: ibm_cloud.generate,
}


def generate(doc: ParsedDocument) -> GenerationResult:
    """Render *doc* as Mermaid markup.

    Never raises: an unsupported format or a failure inside a generator is
    reported through ``GenerationResult.error``.
    """
    generator = GENERATORS.get(doc.format)
    if generator is None:
        return GenerationResult(success=False, error=f"Unsupported format: {doc.format.value}")

    try:
        result = generator(doc)
    except Exception as e:
        logger.exception("Generator for %s failed", doc.format.value)
        return GenerationResult(success=False, error=f"Failed to generate diagram: {e}")

    logger.debug(
        "Generated %s diagram: %d nodes, %d edges",
        doc.format.value,
        result.node_count,
        result.edge_count,
    )
    return result
