"""Trace parsers - Record-level ingest of verifier output.

This module provides the shared result types for the record parsers:
- SkippedRow: A row dropped during parsing, with the reason
- NodeParseResult: Parsed node records plus diagnostics
- EdgeParseResult: Parsed edge records plus diagnostics

Parsers never raise for a bad row; they record it and continue.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from linetrace.graph.records import SourcePosition, TraceEdge, TraceNode

if TYPE_CHECKING:
    from linetrace.graph.parsers.nodes import TraceSchema


class SkipReason(Enum):
    """Why a row was dropped."""

    FIELD_COUNT = "field_count"
    POSITION = "position"


@dataclass(frozen=True)
class SkippedRow:
    """A row that could not take part in the line graph.

    Attributes:
        line_number: 1-based row number in the record file.
        reason: Why the row was dropped.
        raw: The original row text.
    """

    line_number: int
    reason: SkipReason
    raw: str


@dataclass
class NodeParseResult:
    """Result of parsing node records.

    Attributes:
        schema: The schema the rows were read with.
        nodes: Successfully parsed nodes, in file order.
        skipped: Rows dropped from the line map.
    """

    schema: TraceSchema
    nodes: list[TraceNode] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    def __iter__(self) -> Iterator[TraceNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def positions(self) -> dict[str, SourcePosition]:
        """Build the node id -> position map (later records win)."""
        return {node.id: node.position for node in self.nodes}


@dataclass
class EdgeParseResult:
    """Result of parsing edge records."""

    header: str = ""
    edges: list[TraceEdge] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    def __iter__(self) -> Iterator[TraceEdge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)


__all__ = [
    "EdgeParseResult",
    "NodeParseResult",
    "SkipReason",
    "SkippedRow",
]
