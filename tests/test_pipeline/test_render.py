"""Tests for the end-to-end rendering pipeline."""

from __future__ import annotations

from unittest.mock import patch

from archviz.generator import DiagramKind
from archviz.parser import IaCFormat
from archviz.pipeline import UNSUPPORTED_FORMAT, render_diagram
from archviz.validator import ValidationSeverity

COMPOSE = "version: '3'\nservices:\n  web:\n    image: nginx\n  worker:\n    ports: ['9000']\n"


class TestRenderDiagram:
    def test_success(self) -> None:
        response = render_diagram(COMPOSE)
        assert response.success is True
        assert response.format == IaCFormat.docker_compose
        assert response.diagram_kind == DiagramKind.flowchart
        assert response.markup.startswith("flowchart TD\n")
        assert response.error is None

    def test_warnings_do_not_block(self) -> None:
        response = render_diagram(COMPOSE)
        assert response.success is True
        assert [i.severity for i in response.issues] == [ValidationSeverity.warning]

    def test_empty_input(self) -> None:
        response = render_diagram("   ")
        assert response.success is False
        assert response.error == UNSUPPORTED_FORMAT

    def test_prose(self) -> None:
        response = render_diagram("Just describe my infrastructure please.")
        assert response.success is False
        assert response.format == IaCFormat.unknown
        assert "Unsupported format" in response.error

    def test_malformed_json(self) -> None:
        response = render_diagram('{"version": "3", "services": {"web": }')
        assert response.success is False
        assert response.error.startswith("Unsupported or malformed input: ")
        assert response.issues[0].line == 1
        assert response.issues[0].severity == ValidationSeverity.error

    def test_deep_nesting(self) -> None:
        response = render_diagram("[" * 50_000 + "]" * 50_000)
        assert response.success is False
        assert response.error == "Unsupported or malformed input: Document is nested too deeply to parse"

    def test_validation_errors_block(self) -> None:
        response = render_diagram("version: '3'\nservices:\n  web: nginx\n")
        assert response.success is False
        assert response.format == IaCFormat.docker_compose
        assert response.error == "Validation failed: Invalid service configuration for: web"
        assert response.markup is None

    def test_unexpected_failure_is_caught(self) -> None:
        with patch("archviz.pipeline.parse", side_effect=RuntimeError("boom")):
            response = render_diagram(COMPOSE)
        assert response.success is False
        assert response.error == "Unexpected error: boom"

    def test_generator_failure_is_reported(self) -> None:
        with patch("archviz.pipeline.generate") as fake:
            fake.return_value.success = False
            fake.return_value.error = "Failed to generate diagram: nope"
            response = render_diagram(COMPOSE)
        assert response.success is False
        assert response.error == "Failed to generate diagram: nope"

    def test_idempotent(self) -> None:
        assert render_diagram(COMPOSE).markup == render_diagram(COMPOSE).markup
