"""Tests for the graph page generator and line highlighting."""

from pathlib import Path

from linetrace.graph.categories import Category
from linetrace.html.generator import GraphViewGenerator, build_filter_toggles
from linetrace.html.highlighting import get_pygments_css, highlight_file_content, highlight_line_contents


class TestHighlighting:
    def test_one_html_line_per_source_line(self):
        result = highlight_file_content("main.py", "x = 1\ny = 2")

        assert len(result["lines"]) == 2
        assert result["language"] == "python"

    def test_unknown_extension_uses_text(self):
        result = highlight_file_content("main.unknownext", "a < b")

        assert result["language"] == "text"
        assert len(result["lines"]) == 1
        assert "a &lt; b" in result["lines"][0]

    def test_line_contents_keep_numbers(self):
        highlighted = highlight_line_contents("main.vpr", {2: "a", 5: "b < c"})

        assert set(highlighted) == {2, 5}
        assert "&lt;" in highlighted[5]

    def test_empty_contents(self):
        assert highlight_line_contents("main.vpr", {}) == {}

    def test_css_is_scoped(self):
        assert ".highlight" in get_pygments_css()


class TestFilterToggles:
    def test_counts_and_labels(self, chain_graph):
        toggles = {t.name: t for t in build_filter_toggles(chain_graph)}

        assert list(toggles) == [
            "ExplicitAssumption",
            "ImplicitAssumption",
            "ExplicitAssertion",
            "ImplicitAssertion",
        ]
        assert toggles["ExplicitAssertion"].count == 1
        assert toggles["ExplicitAssertion"].label == "Explicit Assertions"
        assert all(t.enabled for t in toggles.values())

    def test_disabled_toggle(self, chain_graph):
        enabled = frozenset(Category) - {Category.IMPLICIT_ASSUMPTION}

        toggles = {t.name: t for t in build_filter_toggles(chain_graph, enabled)}

        assert not toggles["ImplicitAssumption"].enabled
        assert toggles["ExplicitAssumption"].enabled


class TestGraphViewGenerator:
    def test_static_page(self, chain_graph):
        html = GraphViewGenerator(chain_graph, version="9.9").generate()

        assert "<title>main.vpr - Line Dependencies</title>" in html
        assert "const LIVE = false;" in html
        assert '"lineNumber": 5' in html
        assert "linetrace 9.9" in html
        assert "linetrace serve" in html

    def test_live_page(self, chain_graph):
        html = GraphViewGenerator(chain_graph).generate(live=True)

        assert "const LIVE = true;" in html
        assert "/api/select" in html

    def test_write(self, chain_graph, tmp_path: Path):
        path = GraphViewGenerator(chain_graph).write(tmp_path / "out" / "graph.html")

        assert path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
