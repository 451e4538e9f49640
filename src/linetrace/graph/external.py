"""ExternalDependencyIndex - Cross-file justifications per line.

For every line of the analyzed file, records which lines of *other* files
were used to establish it. Kept apart from the intra-file graph: it is
shown on demand and never walked by the query engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExternalDependencies:
    """Cross-file justifications of one line.

    Attributes:
        by_file: File name -> strictly increasing source line numbers.
    """

    by_file: Mapping[str, tuple[int, ...]] = field(default_factory=dict)

    @property
    def count(self) -> int:
        """Total distinct justifying lines, summed over files."""
        return sum(len(lines) for lines in self.by_file.values())

    def __bool__(self) -> bool:
        return bool(self.by_file)

    def files(self) -> list[str]:
        return sorted(self.by_file)

    def detail(self) -> dict[str, list[int]]:
        """Return a JSON-compatible file -> lines map."""
        return {name: list(self.by_file[name]) for name in self.files()}

    def disclosures(self) -> list[dict[str, Any]]:
        """Return one ``{file, lines}`` message per file."""
        return [{"file": name, "lines": list(self.by_file[name])} for name in self.files()]


EMPTY = ExternalDependencies()


class ExternalDependencyIndex:
    """Accumulates cross-file justifications during graph construction."""

    def __init__(self) -> None:
        self._index: dict[int, dict[str, set[int]]] = {}

    def add(self, target_line: int, source_file: str, source_line: int) -> None:
        """Record that ``source_file:source_line`` justifies ``target_line``."""
        self._index.setdefault(target_line, {}).setdefault(source_file, set()).add(source_line)

    def for_line(self, line: int) -> ExternalDependencies:
        """Freeze the external dependencies of one line."""
        files = self._index.get(line)
        if not files:
            return EMPTY
        return ExternalDependencies(
            by_file={name: tuple(sorted(lines)) for name, lines in files.items()}
        )

    def __len__(self) -> int:
        return len(self._index)


__all__ = ["EMPTY", "ExternalDependencies", "ExternalDependencyIndex"]
