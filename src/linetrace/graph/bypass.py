"""BypassResolver - Credit edges to the real causes of explicit assertions.

An ExplicitAssertion line is itself proved from other facts, so showing
it as the source of a dependency hides the actual justification. The
resolver rewrites every raw edge ``(s, t)`` whose source is an explicit
assertion into edges from the assertion's upstream causes to ``t``.

Resolution walks the raw reverse adjacency with an explicit stack, so deep
or cyclic traces neither recurse without bound nor loop.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from linetrace.graph.categories import Category
from linetrace.graph.relations import LineEdge

logger = logging.getLogger(__name__)

BYPASS_CATEGORY = Category.EXPLICIT_ASSERTION


class BypassResolver:
    """Rewrites raw line edges around explicit assertions.

    Args:
        raw_edges: Deduplicated intra-file edges before bypass.
        categories: Line -> categories for the analyzed file.
    """

    def __init__(
        self,
        raw_edges: Iterable[LineEdge],
        categories: Mapping[int, frozenset[Category]],
    ) -> None:
        self.raw_edges = list(raw_edges)
        self.categories = categories
        parents: dict[int, set[int]] = {}
        for edge in self.raw_edges:
            parents.setdefault(edge.target, set()).add(edge.source)
        self._parents = {line: sorted(sources) for line, sources in parents.items()}

    def should_bypass(self, line: int) -> bool:
        return BYPASS_CATEGORY in self.categories.get(line, frozenset())

    def parents(self, line: int) -> list[int]:
        """Raw sources of edges into ``line``, ascending."""
        return self._parents.get(line, [])

    def real_sources(self, line: int) -> list[int]:
        """Resolve the lines that should be credited instead of ``line``.

        A line that is not an explicit assertion is its own real source, as
        is an explicit assertion without parents. Otherwise the parents are
        resolved in turn. Each line is visited at most once per resolution;
        if every path runs back into visited lines, ``line`` itself is kept.

        Args:
            line: Source line of a raw edge.

        Returns:
            Distinct real source lines in depth-first order.
        """
        visited: set[int] = set()
        found: list[int] = []
        stack = [line]

        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)

            if not self.should_bypass(current):
                found.append(current)
                continue

            parents = self.parents(current)
            if not parents:
                found.append(current)
                continue

            # Reversed so the smallest parent is explored first
            stack.extend(p for p in reversed(parents) if p not in visited)

        if not found:
            logger.debug("Cyclic bypass chain at line %d, keeping it as source", line)
            return [line]
        return found

    def resolve(self) -> list[LineEdge]:
        """Rewrite all raw edges.

        Returns:
            Resolved edges without self-edges or duplicate (source, target)
            pairs, in first-seen order.
        """
        labels: dict[tuple[int, int], set[str]] = {}

        for edge in self.raw_edges:
            for source in self.real_sources(edge.source):
                if source == edge.target:
                    continue
                labels.setdefault((source, edge.target), set()).update(edge.labels)

        resolved = [
            LineEdge(source=source, target=target, labels=frozenset(edge_labels))
            for (source, target), edge_labels in labels.items()
        ]
        logger.debug("Bypass resolved %d raw edges into %d", len(self.raw_edges), len(resolved))
        return resolved


__all__ = ["BYPASS_CATEGORY", "BypassResolver"]
