"""Tests for the validation pipeline."""

from __future__ import annotations

from archviz.parser import IaCFormat
from archviz.validator import ValidationSeverity, validate


class TestGenericChecks:
    def test_non_mapping_tree(self) -> None:
        result = validate(["not", "a", "dict"], IaCFormat.kubernetes)
        assert result.valid is False
        assert result.issues[0].message == "Invalid data structure"

    def test_unknown_format(self) -> None:
        result = validate({"a": 1}, IaCFormat.unknown)
        assert result.valid is False
        assert result.issues[0].message == "Unknown or unsupported format"

    def test_missing_required_fields(self) -> None:
        result = validate({"contentVersion": "1.0.0.0"}, IaCFormat.azure_arm)
        assert result.valid is False
        messages = [i.message for i in result.errors]
        assert "Missing required field: $schema" in messages
        assert "Missing required field: resources" in messages


class TestDockerCompose:
    def test_valid(self) -> None:
        tree = {"version": "3", "services": {"web": {"image": "nginx"}}}
        result = validate(tree, IaCFormat.docker_compose)
        assert result.valid is True
        assert result.issues == []

    def test_service_without_image_or_build_warns(self) -> None:
        tree = {"version": "3", "services": {"web": {"ports": ["80:80"]}}}
        result = validate(tree, IaCFormat.docker_compose)
        assert result.valid is True
        assert len(result.warnings) == 1
        assert "web" in result.warnings[0].message

    def test_non_mapping_service_is_error(self) -> None:
        tree = {"version": "3", "services": {"web": "nginx"}}
        result = validate(tree, IaCFormat.docker_compose)
        assert result.valid is False
        assert result.errors[0].message == "Invalid service configuration for: web"


class TestKubernetes:
    def test_kind_must_be_string(self) -> None:
        tree = {"apiVersion": "v1", "kind": 5, "metadata": {"name": "a"}}
        result = validate(tree, IaCFormat.kubernetes)
        assert result.valid is False
        assert result.errors[0].message == "kind must be a string"

    def test_metadata_without_name_warns(self) -> None:
        tree = {"apiVersion": "v1", "kind": "Pod", "metadata": {"labels": {}}}
        result = validate(tree, IaCFormat.kubernetes)
        assert result.valid is True
        assert result.warnings[0].severity == ValidationSeverity.warning


class TestCloudFormation:
    def test_resource_without_type(self) -> None:
        tree = {"Resources": {"Bucket": {"Properties": {}}}}
        result = validate(tree, IaCFormat.cloudformation)
        assert result.valid is False
        assert result.errors[0].message == "Resource 'Bucket' is missing Type property"

    def test_non_mapping_resource(self) -> None:
        result = validate({"Resources": {"Bucket": "x"}}, IaCFormat.cloudformation)
        assert result.valid is False


class TestTerraform:
    def test_empty_configuration_warns(self) -> None:
        result = validate({"provider": {"aws": {"name": "aws"}}}, IaCFormat.terraform)
        assert result.valid is True
        assert len(result.warnings) == 1

    def test_module_only_is_fine(self) -> None:
        result = validate({"module": {"vpc": {"source": "x"}}}, IaCFormat.terraform)
        assert result.issues == []


class TestAzureArm:
    def test_resources_must_be_list(self) -> None:
        tree = {"$schema": "s", "contentVersion": "1", "resources": {"a": 1}}
        result = validate(tree, IaCFormat.azure_arm)
        assert result.valid is False
        assert result.errors[0].message == "'resources' must be a list"

    def test_entry_without_type_warns(self) -> None:
        tree = {"$schema": "s", "contentVersion": "1", "resources": [{"name": "x"}]}
        result = validate(tree, IaCFormat.azure_arm)
        assert result.valid is True
        assert len(result.warnings) == 1


class TestIbmCloud:
    def test_resources_not_list_warns(self) -> None:
        result = validate({"resources": {"vpc": "ibm_is_vpc"}}, IaCFormat.ibm_cloud)
        assert result.valid is True
        assert result.warnings[0].suggestion
