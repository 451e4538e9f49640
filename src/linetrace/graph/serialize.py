"""Graph Serialization - Export LineGraph for the view and for disk.

This module provides functions to serialize a LineGraph to the element
JSON consumed by the graph view, and to the deduplicated
``sourceLine,targetLine,label`` edge file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from linetrace.graph.builder import LineGraph
    from linetrace.graph.LineVertex import LineVertex

TRANSLATED_HEADER = "source,target,label"


def serialize_vertex(vertex: LineVertex) -> dict[str, Any]:
    """Serialize a LineVertex to a JSON-compatible dict.

    Args:
        vertex: The vertex to serialize.

    Returns:
        Dict with the element data of the vertex.
    """
    result: dict[str, Any] = {
        "id": vertex.id,
        "lineNumber": vertex.line,
        "lineType": vertex.line_type,
        "assignmentVariable": vertex.assignment_variable,
        "nodeCategories": sorted(c.value for c in vertex.categories),
        "content": vertex.content,
        "externalDependencyCount": vertex.external_dependency_count,
    }
    if vertex.external:
        result["externalDependencies"] = vertex.external.detail()
    return result


def serialize_graph(graph: LineGraph) -> dict[str, Any]:
    """Serialize a LineGraph to graph-view elements.

    Args:
        graph: The graph to serialize.

    Returns:
        Dict with ``nodes`` and ``edges`` element lists.
    """
    return {
        "nodes": [{"data": serialize_vertex(v)} for v in graph.iter_vertices()],
        "edges": [
            {"data": {"id": f"e{i}", "source": str(e.source), "target": str(e.target)}}
            for i, e in enumerate(graph.iter_edges())
        ],
    }


def serialize_category_counts(graph: LineGraph) -> dict[str, int]:
    """Per-category vertex counts, keyed by category name."""
    return {category.value: count for category, count in graph.category_counts().items()}


def graph_summary(graph: LineGraph) -> dict[str, Any]:
    """Small status summary used by the CLI and the status endpoint."""
    return {
        "file": graph.analyzed_file,
        "vertices": graph.vertex_count(),
        "edges": graph.edge_count(),
        "raw_edges": sum(1 for _ in graph.iter_raw_edges()),
        "lines": graph.line_count,
        "external_lines": sum(1 for v in graph.iter_vertices() if v.external),
        "categories": {
            name: count for name, count in serialize_category_counts(graph).items() if count
        },
    }


def translated_edge_rows(graph: LineGraph) -> list[str]:
    """Rows of the translated edge file, without header.

    One row per distinct (source, target, label) of the projected edges,
    in first-seen order with labels sorted.
    """
    rows: list[str] = []
    for edge in graph.iter_raw_edges():
        for label in sorted(edge.labels) or [""]:
            rows.append(f"{edge.source},{edge.target},{label}")
    return rows


def write_translated_edges(graph: LineGraph, path: Path, header: str = TRANSLATED_HEADER) -> int:
    """Write the translated edge file.

    Args:
        graph: Built graph whose projected edges are written.
        path: Destination file.
        header: Header row (normally the trace edge file's header).

    Returns:
        Number of rows written (excluding header).
    """
    rows = translated_edge_rows(graph)
    path.write_text("\n".join([header or TRANSLATED_HEADER, *rows]), encoding="utf-8")
    return len(rows)


__all__ = [
    "TRANSLATED_HEADER",
    "graph_summary",
    "serialize_category_counts",
    "serialize_graph",
    "serialize_vertex",
    "translated_edge_rows",
    "write_translated_edges",
]
