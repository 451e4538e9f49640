"""Tests for Graph Serialization module."""

from pathlib import Path

from linetrace.graph.serialize import (
    TRANSLATED_HEADER,
    graph_summary,
    serialize_category_counts,
    serialize_graph,
    serialize_vertex,
    translated_edge_rows,
    write_translated_edges,
)
from tests.core.graph_test_helpers import build_graph, make_edge, make_node


class TestSerializeVertex:
    def test_vertex_fields(self, chain_graph):
        data = serialize_vertex(chain_graph.find_by_line(5))

        assert data == {
            "id": "5",
            "lineNumber": 5,
            "lineType": "assert",
            "assignmentVariable": "",
            "nodeCategories": ["ExplicitAssertion"],
            "content": "assert y > 1",
            "externalDependencyCount": 1,
            "externalDependencies": {"lemmas.vpr": [12]},
        }

    def test_no_external_key_without_dependencies(self, chain_graph):
        assert "externalDependencies" not in serialize_vertex(chain_graph.find_by_line(4))


class TestSerializeGraph:
    def test_elements(self, chain_graph):
        elements = serialize_graph(chain_graph)

        assert [n["data"]["id"] for n in elements["nodes"]] == ["2", "4", "5", "6"]
        assert [
            (e["data"]["source"], e["data"]["target"]) for e in elements["edges"]
        ] == [("2", "4"), ("4", "5"), ("4", "6")]
        assert [e["data"]["id"] for e in elements["edges"]] == ["e0", "e1", "e2"]

    def test_category_counts(self, chain_graph):
        counts = serialize_category_counts(chain_graph)

        assert counts["ExplicitAssertion"] == 1
        assert counts["Infeasible"] == 0

    def test_summary(self, chain_graph):
        summary = graph_summary(chain_graph)

        assert summary["file"] == "main.vpr"
        assert summary["vertices"] == 4
        assert summary["edges"] == 3
        assert summary["raw_edges"] == 3
        assert summary["external_lines"] == 1
        assert "Infeasible" not in summary["categories"]


class TestTranslatedEdges:
    def test_rows_dedupe_on_label(self):
        graph = build_graph(
            [
                make_node("a1", line=1),
                make_node("a2", line=1),
                make_node("b", "Assertion", "Implicit", line=2),
            ],
            [make_edge("a1", "b", "uses"), make_edge("a2", "b", "uses"), make_edge("a2", "b", "frame")],
        )

        assert translated_edge_rows(graph) == ["1,2,frame", "1,2,uses"]

    def test_rows_use_raw_edges(self, chain_graph):
        assert translated_edge_rows(chain_graph) == ["2,4,uses", "4,5,uses", "5,6,uses"]

    def test_unlabelled_edge(self):
        graph = build_graph(
            [make_node("a", line=1), make_node("b", "Assertion", "Implicit", line=2)],
            [make_edge("a", "b")],
        )

        assert translated_edge_rows(graph) == ["1,2,"]

    def test_write(self, chain_graph, tmp_path: Path):
        path = tmp_path / "edges_translated.csv"

        count = write_translated_edges(chain_graph, path, header="")

        assert count == 3
        assert path.read_text(encoding="utf-8").split("\n")[0] == TRANSLATED_HEADER
