"""Records - Node and edge records read from a verification trace.

This module provides the ingest-level data structures:
- SourcePosition: file name and 1-based line of a trace node
- TraceNode: one proof-obligation fact with its kind and position
- TraceEdge: "target was established using source"
"""

from __future__ import annotations

from dataclasses import dataclass, field

from linetrace.graph.categories import NodeKind


@dataclass(frozen=True)
class SourcePosition:
    """Location of a trace node in a source file.

    Attributes:
        file: File name as printed by the verifier (e.g. "list.vpr").
        line: 1-based line number.
    """

    file: str
    line: int

    def __str__(self) -> str:
        """Return string representation for display."""
        return f"{self.file} @ line {self.line}"


@dataclass(frozen=True)
class TraceNode:
    """A single node record from the trace.

    Attributes:
        id: Identifier, unique within one trace.
        kind: Assumption, Assertion, Infeasible or Other.
        subtype: Raw subtype (Explicit, Implicit, ImplicitPostcondition, ...).
        position: Where the node points in the source.
        details: Schema-specific fields between subtype and position.
    """

    id: str
    kind: NodeKind
    subtype: str
    position: SourcePosition
    details: tuple[str, ...] = field(default_factory=tuple)

    @property
    def source_file(self) -> str:
        return self.position.file

    @property
    def source_line(self) -> int:
        return self.position.line


@dataclass(frozen=True)
class TraceEdge:
    """A justification relation between two trace nodes.

    Attributes:
        source_id: Node the target was established with.
        target_id: Node that was established.
        label: Relation label from the trace producer.
    """

    source_id: str
    target_id: str
    label: str = ""


__all__ = ["SourcePosition", "TraceEdge", "TraceNode"]
