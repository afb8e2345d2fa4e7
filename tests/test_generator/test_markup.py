"""Tests for Mermaid markup assembly and sanitising."""

from __future__ import annotations

import re

from archviz.generator import DiagramKind, MermaidDiagram, sanitize_id, sanitize_label

SAFE_ID = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


class TestSanitizeId:
    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_id("Microsoft.Web/sites_app web") == "Microsoft_Web_sites_app_web"

    def test_collapses_and_trims_underscores(self) -> None:
        assert sanitize_id("__a...b__") == "a_b"

    def test_leading_digit(self) -> None:
        assert sanitize_id("3tier") == "n3tier"

    def test_leading_hyphen(self) -> None:
        assert sanitize_id("-x") == "n-x"

    def test_empty(self) -> None:
        assert sanitize_id("") == "n"
        assert sanitize_id("!!!") == "n"

    def test_always_safe_and_idempotent(self) -> None:
        for raw in ["[resourceId('a', 'b')]_dep", "ñandú", "1.2.3", "ok-id", " spaced out "]:
            once = sanitize_id(raw)
            assert SAFE_ID.match(once)
            assert sanitize_id(once) == once


class TestSanitizeLabel:
    def test_quotes_and_newlines(self) -> None:
        assert sanitize_label('say "hi"\nthere\r\nfriend') == "say &quot;hi&quot;<br/>there<br/>friend"

    def test_strips(self) -> None:
        assert sanitize_label("  x  ") == "x"


class TestMermaidDiagram:
    def test_layout(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart, ("network",))
        diagram.open_group("Group", "My Group")
        node_id = diagram.node("a.b", ["<b>a</b>", "detail"], "network")
        diagram.close_group()
        diagram.node("c", ["c"])
        diagram.edge("a.b", "c", "uses")
        diagram.edge("c", "a.b", dotted=True)

        assert node_id == "a_b"
        lines = diagram.render().splitlines()
        assert lines[0] == "flowchart TD"
        assert lines[1] == '    subgraph Group["My Group"]'
        assert lines[2] == '        a_b["<b>a</b><br/>detail"]'
        assert lines[3] == "        class a_b network"
        assert lines[4] == "    end"
        assert lines[5] == '    c["c"]'
        assert lines[6] == "    a_b -->|uses| c"
        assert lines[7] == "    c -.-> a_b"
        assert lines[8] == ""
        assert lines[9].startswith("    classDef network fill:")

    def test_duplicate_edges_once(self) -> None:
        diagram = MermaidDiagram(DiagramKind.graph)
        diagram.edge("a", "b")
        diagram.edge("a", "b")
        diagram.edge("a", "b", "label")
        assert diagram.edge_count == 2
        assert diagram.render().startswith("graph TD\n")

    def test_counts(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        diagram.node("a", ["a"])
        diagram.node("b", ["b"])
        assert diagram.node_count == 2

    def test_labelled_edges_have_no_gap_after_arrow(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        diagram.edge("db", "api", "depends on")
        diagram.edge("api", "net", "connects to", dotted=True)
        markup = diagram.render()
        assert "    db -->|depends on| api\n" in markup
        assert "    api -.->|connects to| net\n" in markup
        assert "--> |" not in markup
        assert "-.-> |" not in markup


class TestReservedIds:
    def test_keywords_are_prefixed(self) -> None:
        assert sanitize_id("end") == "n_end"
        assert sanitize_id("End") == "n_End"
        assert sanitize_id("subgraph") == "n_subgraph"
        assert sanitize_id("classDef") == "n_classDef"

    def test_prefixed_keyword_is_stable(self) -> None:
        assert sanitize_id(sanitize_id("end")) == "n_end"

    def test_ordinary_words_untouched(self) -> None:
        assert sanitize_id("endpoint") == "endpoint"
        assert sanitize_id("backend") == "backend"

    def test_edges_use_the_prefixed_id(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        diagram.node("end", ["end"])
        diagram.edge("start", "end")
        markup = diagram.render()
        assert '    n_end["end"]' in markup
        assert "    start --> n_end\n" in markup


class TestGroupIdCollisions:
    def test_group_renamed_when_a_node_takes_its_id(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        diagram.open_group("Services", "Services")
        diagram.node("Services", ["Services"])
        diagram.close_group()
        lines = diagram.render().splitlines()
        assert lines[1] == '    subgraph Services_group["Services"]'
        assert lines[2] == '        Services["Services"]'

    def test_edge_endpoints_count_as_taken(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        diagram.open_group("Volumes", "Volumes")
        diagram.close_group()
        diagram.edge("Volumes", "db")
        assert 'subgraph Volumes_group["Volumes"]' in diagram.render()

    def test_duplicate_group_ids(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        for _ in range(2):
            diagram.open_group("G", "G")
            diagram.close_group()
        markup = diagram.render()
        assert 'subgraph G["G"]' in markup
        assert 'subgraph G_group["G"]' in markup

    def test_nested_group_indentation(self) -> None:
        diagram = MermaidDiagram(DiagramKind.flowchart)
        diagram.open_group("outer", "Outer")
        diagram.open_group("inner", "Inner")
        diagram.close_group()
        diagram.close_group()
        lines = diagram.render().splitlines()
        assert lines[1] == '    subgraph outer["Outer"]'
        assert lines[2] == '        subgraph inner["Inner"]'
        assert lines[3] == "        end"
        assert lines[4] == "    end"
