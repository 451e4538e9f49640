"""Graph Builder - Projects trace records onto lines of the analyzed file.

This module provides the builder pattern for constructing a LineGraph:
- LineGraphBuilder collects trace nodes, trace edges and line contents
- build() projects nodes to lines, collapses edges, runs bypass
  resolution and indexes cross-file justifications
- LineGraph is the immutable result queried by the highlight engine
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from collections.abc import Iterable, Iterator, Mapping
from pathlib import PurePath
from types import MappingProxyType

from linetrace.graph.bypass import BypassResolver
from linetrace.graph.categories import CANONICAL_TABLE, Category, ClassificationTable
from linetrace.graph.external import ExternalDependencies, ExternalDependencyIndex
from linetrace.graph.LineVertex import LineVertex
from linetrace.graph.records import SourcePosition, TraceEdge, TraceNode
from linetrace.graph.relations import LineEdge

logger = logging.getLogger(__name__)


class LineGraph:
    """Per-line dependency graph of one analyzed file.

    Built once per analysis run by LineGraphBuilder and never mutated
    afterwards. Edges point from the justifying line to the justified line.

    Attributes:
        analyzed_file: Name of the file the graph describes.
    """

    def __init__(
        self,
        analyzed_file: str,
        vertices: Mapping[int, LineVertex],
        edges: Iterable[LineEdge],
        raw_edges: Iterable[LineEdge] = (),
        line_count: int | None = None,
    ) -> None:
        self.analyzed_file = analyzed_file
        self._vertices = MappingProxyType(dict(sorted(vertices.items())))
        self._edges = tuple(edges)
        self._raw_edges = tuple(raw_edges)
        self._line_count = line_count

        incoming: dict[int, set[int]] = {}
        outgoing: dict[int, set[int]] = {}
        for edge in self._edges:
            outgoing.setdefault(edge.source, set()).add(edge.target)
            incoming.setdefault(edge.target, set()).add(edge.source)
        self._incoming = {line: tuple(sorted(s)) for line, s in incoming.items()}
        self._outgoing = {line: tuple(sorted(s)) for line, s in outgoing.items()}

    # Lookup
    def find_by_line(self, line: int) -> LineVertex | None:
        """Return the vertex for ``line``, or None if the line has none."""
        return self._vertices.get(line)

    def __contains__(self, line: object) -> bool:
        return line in self._vertices

    @property
    def line_count(self) -> int | None:
        """Number of lines in the analyzed document, if known."""
        return self._line_count

    # Iteration
    def iter_vertices(self) -> Iterator[LineVertex]:
        """Iterate vertices in line order."""
        yield from self._vertices.values()

    def iter_edges(self) -> Iterator[LineEdge]:
        """Iterate resolved (post-bypass) edges."""
        yield from self._edges

    def iter_raw_edges(self) -> Iterator[LineEdge]:
        """Iterate projected edges before bypass resolution."""
        yield from self._raw_edges

    def vertex_count(self) -> int:
        return len(self._vertices)

    def edge_count(self) -> int:
        return len(self._edges)

    # Neighbourhood
    def incomers(self, line: int) -> tuple[int, ...]:
        """Lines with an edge into ``line`` (its direct causes)."""
        return self._incoming.get(line, ())

    def outgoers(self, line: int) -> tuple[int, ...]:
        """Lines ``line`` has an edge into (its direct effects)."""
        return self._outgoing.get(line, ())

    def predecessors(self, line: int) -> set[int]:
        """All lines from which ``line`` is reachable."""
        return self._closure(line, self._incoming)

    def successors(self, line: int) -> set[int]:
        """All lines reachable from ``line``."""
        return self._closure(line, self._outgoing)

    @staticmethod
    def _closure(start: int, adjacency: Mapping[int, tuple[int, ...]]) -> set[int]:
        seen: set[int] = set()
        queue: deque[int] = deque(adjacency.get(start, ()))
        while queue:
            line = queue.popleft()
            if line in seen:
                continue
            seen.add(line)
            queue.extend(adjacency.get(line, ()))
        return seen

    # Aggregates
    def category_counts(self) -> dict[Category, int]:
        """Number of vertices carrying each category."""
        counts: Counter[Category] = Counter()
        for vertex in self._vertices.values():
            counts.update(vertex.categories)
        return {category: counts.get(category, 0) for category in Category}

    def external_for(self, line: int) -> ExternalDependencies:
        vertex = self._vertices.get(line)
        return vertex.external if vertex else ExternalDependencies()


class LineGraphBuilder:
    """Builder for LineGraph instances.

    Args:
        analyzed_file: File name of the analyzed file as it appears in
            position descriptors (a path is reduced to its name).
        table: Classification table of the trace producer.
    """

    def __init__(
        self,
        analyzed_file: str,
        table: ClassificationTable = CANONICAL_TABLE,
    ) -> None:
        self.analyzed_file = PurePath(analyzed_file).name
        self.table = table
        self._positions: dict[str, SourcePosition] = {}
        self._categories: dict[int, set[Category]] = {}
        self._edges: list[TraceEdge] = []
        self._contents: dict[int, str] = {}
        self._line_count: int | None = None

    def is_analyzed_file(self, name: str) -> bool:
        return name == self.analyzed_file or PurePath(name).name == self.analyzed_file

    def add_node(self, node: TraceNode) -> None:
        """Register a trace node's position and, if local, its category."""
        self._positions[node.id] = node.position
        if self.is_analyzed_file(node.source_file):
            category = self.table.classify(node.kind, node.subtype)
            self._categories.setdefault(node.source_line, set()).add(category)

    def add_nodes(self, nodes: Iterable[TraceNode]) -> None:
        for node in nodes:
            self.add_node(node)

    def add_edges(self, edges: Iterable[TraceEdge]) -> None:
        self._edges.extend(edges)

    def set_line_contents(self, contents: Mapping[int, str], line_count: int | None = None) -> None:
        """Attach the analyzed file's line texts.

        Args:
            contents: Line number -> trimmed source text.
            line_count: Document length; defaults to the highest line number.
        """
        self._contents = dict(contents)
        self._line_count = line_count if line_count is not None else max(contents, default=0)

    def _project_edges(self, external: ExternalDependencyIndex) -> list[LineEdge]:
        """Project trace edges onto lines, filling the external index."""
        labels: dict[tuple[int, int], set[str]] = {}

        for edge in self._edges:
            source = self._positions.get(edge.source_id)
            target = self._positions.get(edge.target_id)
            if source is None or target is None:
                continue
            if not self.is_analyzed_file(target.file):
                continue
            if not self.is_analyzed_file(source.file):
                external.add(target.line, source.file, source.line)
                continue
            if source.line == target.line:
                continue
            edge_labels = labels.setdefault((source.line, target.line), set())
            if edge.label:
                edge_labels.add(edge.label)

        return [
            LineEdge(source=s, target=t, labels=frozenset(edge_labels))
            for (s, t), edge_labels in labels.items()
        ]

    def build(self) -> LineGraph:
        """Build the LineGraph.

        Returns:
            Immutable LineGraph with resolved edges and external index.
        """
        external = ExternalDependencyIndex()
        raw_edges = self._project_edges(external)
        categories = {line: frozenset(cats) for line, cats in self._categories.items()}

        resolved = BypassResolver(raw_edges, categories).resolve()

        # Both endpoints of every raw edge stay visible, bypassed or not
        lines: set[int] = set()
        for edge in raw_edges:
            lines.add(edge.source)
            lines.add(edge.target)
        for edge in resolved:
            lines.add(edge.source)
            lines.add(edge.target)

        vertices = {
            line: LineVertex(
                line=line,
                categories=categories.get(line) or frozenset({Category.UNKNOWN}),
                content=self._contents.get(line, ""),
                external=external.for_line(line),
            )
            for line in lines
        }

        logger.info(
            "Built line graph for %s: %d vertices, %d edges (%d before bypass), %d lines with external dependencies",
            self.analyzed_file,
            len(vertices),
            len(resolved),
            len(raw_edges),
            len(external),
        )
        return LineGraph(
            analyzed_file=self.analyzed_file,
            vertices=vertices,
            edges=resolved,
            raw_edges=raw_edges,
            line_count=self._line_count,
        )


__all__ = ["LineGraph", "LineGraphBuilder"]
