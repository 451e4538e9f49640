"""Test helpers for black-box graph testing.

This module provides factories for trace records and string conversion
helpers for testing the graph through observable output rather than
internal state.
"""

from __future__ import annotations

from pathlib import Path

from linetrace.graph.builder import LineGraph, LineGraphBuilder
from linetrace.graph.categories import NodeKind
from linetrace.graph.records import SourcePosition, TraceEdge, TraceNode

# === Constants ===

ANALYZED = "main.vpr"

NODE_HEADER_V1 = "id#kind#subtype#expression#origin#position"
NODE_HEADER_V2 = "id#kind#subtype#expression#origin#label#position"
EDGE_HEADER = "source,target,label"


# === Record Factories ===


def make_node(
    node_id: str,
    kind: str = "Assumption",
    subtype: str = "Explicit",
    line: int = 1,
    file: str = ANALYZED,
) -> TraceNode:
    """Factory for trace nodes.

    Args:
        node_id: Node identifier (e.g., "n1")
        kind: Assumption, Assertion, Infeasible
        subtype: Explicit, Implicit, ImplicitPostcondition, ...
        line: 1-based source line
        file: Source file name
    """
    return TraceNode(
        id=node_id,
        kind=NodeKind.parse(kind),
        subtype=subtype,
        position=SourcePosition(file=file, line=line),
    )


def make_edge(source_id: str, target_id: str, label: str = "") -> TraceEdge:
    """Factory for "target established using source" edges."""
    return TraceEdge(source_id=source_id, target_id=target_id, label=label)


def build_graph(
    nodes: list[TraceNode],
    edges: list[TraceEdge],
    analyzed_file: str = ANALYZED,
    contents: dict[int, str] | None = None,
) -> LineGraph:
    """Build a LineGraph from trace records."""
    builder = LineGraphBuilder(analyzed_file)
    builder.add_nodes(nodes)
    builder.add_edges(edges)
    if contents:
        builder.set_line_contents(contents)
    return builder.build()


# === Record File Factories ===


def node_row(
    node_id: str,
    kind: str = "Assumption",
    subtype: str = "Explicit",
    line: int = 1,
    file: str = ANALYZED,
    schema: str = "v2",
) -> str:
    """One ``#``-delimited node row for the given schema."""
    middle = ["x > 0", "method m"] if schema == "v1" else ["x > 0", "method m", "lbl"]
    return "#".join([node_id, kind, subtype, *middle, f"({file} @ line {line})"])


def write_trace(
    export_dir: Path,
    node_rows: list[str],
    edge_rows: list[str],
    node_header: str = NODE_HEADER_V2,
) -> Path:
    """Write nodes.csv and edges.csv into ``export_dir``."""
    export_dir.mkdir(parents=True, exist_ok=True)
    (export_dir / "nodes.csv").write_text("\n".join([node_header, *node_rows]) + "\n", encoding="utf-8")
    (export_dir / "edges.csv").write_text("\n".join([EDGE_HEADER, *edge_rows]) + "\n", encoding="utf-8")
    return export_dir


# === String Helpers ===


def edges_string(graph: LineGraph) -> str:
    """Resolved edges as a sorted, comma-separated string (e.g. "1->3, 2->7")."""
    return ", ".join(f"{e.source}->{e.target}" for e in sorted(graph.iter_edges(), key=lambda e: e.key))


def raw_edges_string(graph: LineGraph) -> str:
    """Projected edges before bypass, sorted."""
    return ", ".join(f"{e.source}->{e.target}" for e in sorted(graph.iter_raw_edges(), key=lambda e: e.key))


def vertices_string(graph: LineGraph) -> str:
    """Vertex lines as a comma-separated string."""
    return ", ".join(str(v.line) for v in graph.iter_vertices())


def categories_string(graph: LineGraph, line: int) -> str:
    """Sorted category names of one vertex."""
    vertex = graph.find_by_line(line)
    if vertex is None:
        return ""
    return ", ".join(sorted(c.value for c in vertex.categories))
