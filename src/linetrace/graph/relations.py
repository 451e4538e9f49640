"""Relations - Directed edges between line vertices.

A LineEdge says "the target line is justified by the source line". Edge
identity is the (source, target) pair; justification labels are carried
along but never make two edges distinct.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineEdge:
    """A directed edge between two lines of the analyzed file.

    Attributes:
        source: Justifying line.
        target: Justified line.
        labels: Trace labels of the collapsed raw edges (not part of identity).
    """

    source: int
    target: int
    labels: frozenset[str] = field(default_factory=frozenset, compare=False)

    def __post_init__(self) -> None:
        if self.source == self.target:
            raise ValueError(f"Self-edge on line {self.source}")

    @property
    def key(self) -> tuple[int, int]:
        return (self.source, self.target)

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


__all__ = ["LineEdge"]
