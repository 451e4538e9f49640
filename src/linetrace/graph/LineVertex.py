"""LineVertex - One source line of the analyzed file as a graph vertex.

Many trace nodes can point at the same line; their categories are unioned
onto the single vertex for that line.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from linetrace.graph.categories import Category
from linetrace.graph.external import EMPTY, ExternalDependencies
from linetrace.utilities.line_type import line_type


@dataclass(frozen=True)
class LineVertex:
    """A vertex of the line graph.

    Attributes:
        line: 1-based line number, unique per graph.
        categories: Union of the categories of all trace nodes on the line
            ({Unknown} when none were in the analyzed file).
        content: Trimmed source text of the line.
        external: Justifications coming from other files.
    """

    line: int
    categories: frozenset[Category] = field(default_factory=lambda: frozenset({Category.UNKNOWN}))
    content: str = ""
    external: ExternalDependencies = EMPTY

    @property
    def id(self) -> str:
        """Element id used by the graph view."""
        return str(self.line)

    @property
    def line_type(self) -> str:
        return line_type(self.content)[0]

    @property
    def assignment_variable(self) -> str:
        return line_type(self.content)[1]

    @property
    def external_dependency_count(self) -> int:
        return self.external.count

    def is_visible(self, enabled: frozenset[Category]) -> bool:
        """True if at least one of the vertex's categories is enabled."""
        return not self.categories.isdisjoint(enabled)


__all__ = ["LineVertex"]
