"""Tests for format detection."""

from __future__ import annotations

import json

from archviz.parser import IaCFormat, classify_tree, detect_format


class TestDetectFormat:
    def test_empty(self) -> None:
        assert detect_format("") == IaCFormat.unknown

    def test_whitespace(self) -> None:
        assert detect_format("  \n\n  ") == IaCFormat.unknown

    def test_compose(self) -> None:
        assert detect_format("version: '3.8'\nservices:\n  web:\n    image: nginx\n") == IaCFormat.docker_compose

    def test_kubernetes_multi_document(self) -> None:
        text = "---\napiVersion: v1\nkind: Service\nmetadata:\n  name: a\n---\napiVersion: v1\nkind: ConfigMap\n"
        assert detect_format(text) == IaCFormat.kubernetes

    def test_terraform_hcl(self) -> None:
        assert detect_format('provider "aws" {\n  region = "us-east-1"\n}\n') == IaCFormat.terraform

    def test_terraform_json(self) -> None:
        text = json.dumps({"resource": {"aws_vpc": {"main": {"cidr_block": "10.0.0.0/16"}}}})
        assert detect_format(text) == IaCFormat.terraform

    def test_cloudformation(self) -> None:
        text = "AWSTemplateFormatVersion: '2010-09-09'\nResources:\n  B:\n    Type: AWS::S3::Bucket\n"
        assert detect_format(text) == IaCFormat.cloudformation

    def test_azure_arm_json(self) -> None:
        text = json.dumps({
            "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#",
            "contentVersion": "1.0.0.0",
            "resources": [],
        })
        assert detect_format(text) == IaCFormat.azure_arm

    def test_arm_schema_in_yaml_is_not_arm(self) -> None:
        text = (
            "$schema: https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#\n"
            "contentVersion: 1.0.0.0\n"
        )
        assert detect_format(text) == IaCFormat.unknown

    def test_ibm_cloud(self) -> None:
        text = json.dumps({"resources": [{"name": "vpc", "type": "ibm_is_vpc"}]})
        assert detect_format(text) == IaCFormat.ibm_cloud

    def test_prose(self) -> None:
        assert detect_format("Please draw my servers.") == IaCFormat.unknown

    def test_malformed_json_is_unknown(self) -> None:
        assert detect_format('{"services": {"web": }') == IaCFormat.unknown


class TestClassifyTree:
    def test_non_mapping(self) -> None:
        assert classify_tree(["a"]) == IaCFormat.unknown

    def test_kubernetes_before_compose(self) -> None:
        tree = {"apiVersion": "v1", "kind": "Pod", "version": "3", "services": {}}
        assert classify_tree(tree) == IaCFormat.kubernetes

    def test_cloudformation_before_kubernetes(self) -> None:
        tree = {"Resources": {"A": {"Type": "x"}}, "apiVersion": "v1", "kind": "Pod"}
        assert classify_tree(tree) == IaCFormat.cloudformation

    def test_compose_needs_version(self) -> None:
        assert classify_tree({"services": {"web": {"image": "nginx"}}}) == IaCFormat.unknown

    def test_ibmcloud_marker_in_nested_value(self) -> None:
        tree = {"config": {"plugin": "IBMCloud_Provider"}}
        assert classify_tree(tree) == IaCFormat.ibm_cloud
