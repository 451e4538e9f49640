"""Graph module - Line dependency graph built from a verification trace.

Exports:
- Category: Closed tag set for trace nodes and vertices
- NodeKind: Kinds of trace nodes
- SourcePosition, TraceNode, TraceEdge: Ingest records
- LineVertex: One line of the analyzed file
- LineEdge: Directed justification edge between lines
- ExternalDependencies: Cross-file justifications of one line
- Direction, Depth, HighlightResult: Query modes and results

Note: LineGraph is in linetrace.graph.builder (use graph.factory.build_graph() to construct)
"""

from linetrace.graph.categories import Category, NodeKind
from linetrace.graph.external import ExternalDependencies, ExternalDependencyIndex
from linetrace.graph.LineVertex import LineVertex
from linetrace.graph.query import Depth, Direction, HighlightResult
from linetrace.graph.records import SourcePosition, TraceEdge, TraceNode
from linetrace.graph.relations import LineEdge

__all__ = [
    "Category",
    "Depth",
    "Direction",
    "ExternalDependencies",
    "ExternalDependencyIndex",
    "HighlightResult",
    "LineEdge",
    "LineVertex",
    "NodeKind",
    "SourcePosition",
    "TraceEdge",
    "TraceNode",
]
