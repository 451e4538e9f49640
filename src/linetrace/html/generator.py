"""HTML Generator for line dependency graphs.

Renders the graph page from a LineGraph with Jinja2. The page embeds
the element JSON and highlighted line contents; highlight queries are
always answered by the server (``linetrace serve``), so a page written
by ``linetrace view`` shows the graph, tooltips and category counts but
no neighbour highlighting.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape

from linetrace import __version__
from linetrace.graph.categories import FILTER_GROUPS, Category
from linetrace.graph.serialize import serialize_graph
from linetrace.html.highlighting import get_pygments_css, highlight_line_contents

if TYPE_CHECKING:
    from linetrace.graph.builder import LineGraph

TEMPLATE_NAME = "graph_view.html.j2"

FILTER_LABELS = {
    Category.EXPLICIT_ASSUMPTION: "Explicit Assumptions",
    Category.IMPLICIT_ASSUMPTION: "Implicit Assumptions",
    Category.EXPLICIT_ASSERTION: "Explicit Assertions",
    Category.IMPLICIT_ASSERTION: "Implicit Assertions",
}


@dataclass
class FilterToggle:
    """One checkbox of the filter panel."""

    name: str
    label: str
    count: int
    enabled: bool = True


def build_filter_toggles(graph: LineGraph, enabled: frozenset[Category] | None = None) -> list[FilterToggle]:
    """Filter panel rows with their vertex counts.

    A toggle's count sums every category it controls, so the assertion
    toggle includes postconditions.
    """
    counts = graph.category_counts()
    toggles = []
    for toggle, members in FILTER_GROUPS.items():
        toggles.append(
            FilterToggle(
                name=toggle.value,
                label=FILTER_LABELS[toggle],
                count=sum(counts.get(member, 0) for member in members),
                enabled=enabled is None or toggle in enabled,
            )
        )
    return toggles


class GraphViewGenerator:
    """Generates the interactive graph page for one LineGraph.

    Args:
        graph: The graph to render.
        version: Version string for display (defaults to the package version).
    """

    def __init__(self, graph: LineGraph, version: str | None = None) -> None:
        self.graph = graph
        self.version = version if version is not None else __version__
        self.env = Environment(
            loader=PackageLoader("linetrace.html", "templates"),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )

    def _highlighted_lines(self) -> dict[str, str]:
        contents = {v.line: v.content for v in self.graph.iter_vertices() if v.content}
        highlighted = highlight_line_contents(self.graph.analyzed_file, contents)
        return {str(line): html for line, html in highlighted.items()}

    def generate(
        self,
        live: bool = False,
        api_base: str = "",
        enabled: frozenset[Category] | None = None,
    ) -> str:
        """Generate the complete HTML page.

        Args:
            live: True when served; enables the highlight API calls.
            api_base: URL prefix of the API (empty for same origin).
            enabled: Filter toggles to show as checked (default: all).

        Returns:
            Complete HTML document as string.
        """
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(
            file_name=self.graph.analyzed_file,
            elements=serialize_graph(self.graph),
            highlighted=self._highlighted_lines(),
            toggles=build_filter_toggles(self.graph, enabled),
            vertex_count=self.graph.vertex_count(),
            edge_count=self.graph.edge_count(),
            live=live,
            api_base=api_base,
            pygments_css=get_pygments_css(),
            version=self.version,
        )

    def write(self, path: Path) -> Path:
        """Write the static page to ``path`` and return it."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.generate(live=False), encoding="utf-8")
        return path


__all__ = ["FilterToggle", "GraphViewGenerator", "build_filter_toggles"]
