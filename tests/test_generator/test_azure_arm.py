"""Tests for the Azure ARM generator."""

from __future__ import annotations

import json

from archviz.generator import generate
from archviz.parser import IaCFormat, parse

TEMPLATE = {
    "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#",
    "contentVersion": "1.0.0.0",
    "resources": [
        {
            "type": "Microsoft.Storage/storageAccounts",
            "name": "store",
            "location": "westeurope",
        },
        {
            "type": "Microsoft.Web/sites",
            "name": "site",
            "location": "[resourceGroup().location]",
            "dependsOn": ["store"],
        },
        {
            "type": "Microsoft.Web/sites/config",
            "name": "site/web",
            "dependsOn": "store",
        },
        "not-a-resource",
        {"name": "untyped"},
    ],
}


def _markup() -> str:
    doc = parse(json.dumps(TEMPLATE))
    assert doc.format == IaCFormat.azure_arm
    result = generate(doc)
    assert result.success, result.error
    return result.markup


class TestAzureArmGenerator:
    def test_flowchart(self) -> None:
        assert _markup().startswith("flowchart TD\n")

    def test_node_ids_include_index(self) -> None:
        markup = _markup()
        assert "Microsoft_Storage_storageAccounts_store_0" in markup
        assert "Microsoft_Web_sites_site_1" in markup
        assert "Microsoft_Web_sites_config_site_web_2" in markup
        assert "Unknown_untyped_4" in markup

    def test_labels(self) -> None:
        markup = _markup()
        assert "Microsoft.Storage/storageAccounts<br/>🔷 store<br/>📍 westeurope" in markup
        assert "📍 [resourceGroup().location]" in markup

    def test_dependency_placeholder_declared_once(self) -> None:
        markup = _markup()
        assert markup.count('store_dep["store"]') == 1
        assert "class store_dep dependency" in markup
        assert "    store_dep --> Microsoft_Web_sites_site_1\n" in markup
        assert "    store_dep --> Microsoft_Web_sites_config_site_web_2\n" in markup

    def test_classes(self) -> None:
        markup = _markup()
        assert "class Microsoft_Storage_storageAccounts_store_0 storage" in markup
        assert "class Microsoft_Web_sites_site_1 compute" in markup
