"""Highlight queries - Direct and indirect neighbours of a selected line.

This is the single traversal used by every front end: the editor-side
decorations, the graph view and the CLI all receive the same
HighlightResult for the same (graph, line, direction, depth, filter).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from linetrace.graph.builder import LineGraph
from linetrace.graph.categories import ALL_CATEGORIES, Category


class Direction(Enum):
    """Which way to walk from the selected line.

    - CAUSES: incoming edges, "what justifies this line"
    - EFFECTS: outgoing edges, "what this line justifies"
    """

    CAUSES = "causes"
    EFFECTS = "effects"

    @property
    def toggled(self) -> Direction:
        return Direction.EFFECTS if self is Direction.CAUSES else Direction.CAUSES


class Depth(Enum):
    """How far to walk: immediate neighbours, or the full closure too."""

    DIRECT = "direct"
    INDIRECT = "indirect"


@dataclass(frozen=True)
class HighlightResult:
    """Lines to report for one selection.

    Attributes:
        line: Selected line (0 means "nothing selected").
        direct: Visible immediate neighbours, ascending.
        indirect: Visible non-immediate neighbours, ascending.
        direction: Direction the neighbours were computed in.
        out_of_range: True if ``line`` lies outside the document.
        sequence: Request sequence number assigned by the session.
    """

    line: int
    direct: tuple[int, ...] = ()
    indirect: tuple[int, ...] = ()
    direction: Direction = Direction.CAUSES
    out_of_range: bool = False
    sequence: int | None = None

    @classmethod
    def empty(cls, line: int, direction: Direction, out_of_range: bool = False) -> HighlightResult:
        return cls(line=line, direction=direction, out_of_range=out_of_range)

    @property
    def is_clear(self) -> bool:
        return self.line == 0

    def with_sequence(self, sequence: int) -> HighlightResult:
        return HighlightResult(
            line=self.line,
            direct=self.direct,
            indirect=self.indirect,
            direction=self.direction,
            out_of_range=self.out_of_range,
            sequence=sequence,
        )

    def to_message(self) -> dict[str, Any]:
        """Serialize to the result-out message shape."""
        return {
            "line": self.line,
            "direct": list(self.direct),
            "indirect": list(self.indirect),
            "direction": self.direction.value,
        }


def run_query(
    graph: LineGraph,
    line: int,
    direction: Direction = Direction.CAUSES,
    depth: Depth = Depth.DIRECT,
    enabled: Iterable[Category] = ALL_CATEGORIES,
) -> HighlightResult:
    """Compute the neighbours of ``line``.

    Args:
        graph: Built line graph (not modified).
        line: Selected line.
        direction: CAUSES or EFFECTS.
        depth: DIRECT, or INDIRECT for direct plus transitive neighbours.
        enabled: Categories a neighbour must share at least one of.

    Returns:
        HighlightResult; empty when ``line`` has no vertex.
    """
    if line not in graph:
        return HighlightResult.empty(line, direction)

    enabled = frozenset(enabled)
    if direction is Direction.CAUSES:
        direct = set(graph.incomers(line))
    else:
        direct = set(graph.outgoers(line))

    indirect: set[int] = set()
    if depth is Depth.INDIRECT:
        closure = graph.predecessors(line) if direction is Direction.CAUSES else graph.successors(line)
        indirect = closure - direct - {line}

    def visible(candidate: int) -> bool:
        vertex = graph.find_by_line(candidate)
        return vertex is not None and vertex.is_visible(enabled)

    return HighlightResult(
        line=line,
        direct=tuple(sorted(n for n in direct if visible(n))),
        indirect=tuple(sorted(n for n in indirect if visible(n))),
        direction=direction,
    )


class HighlightQueryEngine:
    """Query engine holding the three UI mode values.

    ``direction``, ``depth`` and ``category_filter`` are plain attributes
    callers set directly; :meth:`query` reads them and nothing else.

    Args:
        graph: Built line graph.
        direction: Initial direction.
        depth: Initial depth.
        category_filter: Initially enabled categories (default: all).
    """

    def __init__(
        self,
        graph: LineGraph,
        direction: Direction = Direction.CAUSES,
        depth: Depth = Depth.DIRECT,
        category_filter: Iterable[Category] | None = None,
    ) -> None:
        self.graph = graph
        self.direction = direction
        self.depth = depth
        self.category_filter: frozenset[Category] = (
            ALL_CATEGORIES if category_filter is None else frozenset(category_filter)
        )

    def query(self, line: int) -> HighlightResult:
        """Run the query for ``line`` under the current modes."""
        return run_query(self.graph, line, self.direction, self.depth, self.category_filter)

    def enable(self, category: Category) -> None:
        self.category_filter = self.category_filter | {category}

    def disable(self, category: Category) -> None:
        self.category_filter = self.category_filter - {category}


__all__ = [
    "Depth",
    "Direction",
    "HighlightQueryEngine",
    "HighlightResult",
    "run_query",
]
