"""Tests for generator dispatch and failure handling."""

from __future__ import annotations

from unittest.mock import patch

from archviz.generator import GENERATORS, generate
from archviz.parser import IaCFormat, ParsedDocument


class TestGenerate:
    def test_every_known_format_has_a_generator(self) -> None:
        assert set(GENERATORS) == set(IaCFormat) - {IaCFormat.unknown}

    def test_unknown_format(self) -> None:
        result = generate(ParsedDocument(format=IaCFormat.unknown))
        assert result.success is False
        assert result.error == "Unsupported format: unknown"

    def test_generator_exception_is_reported(self) -> None:
        def boom(doc: ParsedDocument):
            raise RuntimeError("kaput")

        with patch.dict(GENERATORS, {IaCFormat.kubernetes: boom}):
            result = generate(ParsedDocument(format=IaCFormat.kubernetes, tree={"kind": "Pod"}))
        assert result.success is False
        assert result.error == "Failed to generate diagram: kaput"

    def test_empty_tree_still_renders(self) -> None:
        result = generate(ParsedDocument(format=IaCFormat.docker_compose))
        assert result.success is True
        assert result.markup.startswith("flowchart TD\n")
