"""Analysis session - Per-run state shared by all front ends.

An AnalysisSession owns the LineGraph of one analysis run together with
the query modes and the current selection. Front ends (server, CLI,
editor integrations) hold a reference to the session instead of sharing
module-level state; a new analysis run creates a new session.

Selections arrive from two independent triggers: a pointer activation in
the graph view and a cursor move in the editor. The session numbers every
request in arrival order and only results newer than the last published
one are published, so the last trigger wins. A client may number its own
requests too; a request older than one already seen from the same origin
is dropped. Cursor moves that echo a pointer-driven highlight within a
short window are ignored.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path
from typing import Any

from linetrace.config import DEFAULT_CONFIG, get_config
from linetrace.graph.builder import LineGraph
from linetrace.graph.categories import ALL_CATEGORIES, Category, expand_filter_groups, parse_categories
from linetrace.graph.factory import analyze_file
from linetrace.graph.query import Depth, Direction, HighlightQueryEngine, HighlightResult

logger = logging.getLogger(__name__)


class Origin(Enum):
    """Where a selection request came from."""

    CURSOR = "cursor"
    POINTER = "pointer"


class AnalysisSession:
    """State of one analysis run.

    Args:
        graph: The built line graph.
        analyzed_file: Path of the analyzed file.
        workspace: Root used to find files named in external dependencies.
        config: Configuration dict (defaults when None).
        line_count: Document length; defaults to the graph's line count.
        clock: Monotonic clock in seconds (injectable for tests).
    """

    def __init__(
        self,
        graph: LineGraph,
        analyzed_file: Path,
        workspace: Path | None = None,
        config: dict[str, Any] | None = None,
        line_count: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        config = config or DEFAULT_CONFIG
        query_config = {**DEFAULT_CONFIG["query"], **config.get("query", {})}

        self.graph = graph
        self.analyzed_file = analyzed_file
        self.workspace = workspace or analyzed_file.parent
        self.config = config
        self.line_count = line_count if line_count is not None else graph.line_count
        self.engine = HighlightQueryEngine(
            graph,
            direction=Direction(query_config["direction"]),
            depth=Depth(query_config["depth"]),
            category_filter=ALL_CATEGORIES - parse_categories(query_config["exclude"]),
        )
        self.filter_enables_indirect = bool(query_config["filter_enables_indirect"])
        self.suppress_seconds = float(query_config.get("suppress_ms", 100)) / 1000.0
        self._clock = clock

        self.highlights_enabled = True
        self.closed = False
        self.selected_line: int | None = None
        self.current: HighlightResult | None = None
        self.build_time = time.time()

        self._sequence = 0
        self._published = 0
        self._client_sequences: dict[Origin, int] = {}
        self._suppress_until = 0.0

    @classmethod
    def from_file(
        cls,
        source: Path,
        workspace: Path | None = None,
        config: dict[str, Any] | None = None,
    ) -> AnalysisSession | None:
        """Run a full analysis of ``source`` and open a session on it.

        Returns:
            The session, or None if no trace records are available.
        """
        config = config or get_config(start_dir=workspace or source.parent)
        workspace = workspace or source.parent
        graph = analyze_file(source, workspace, config)
        if graph is None:
            return None
        return cls(graph, source, workspace=workspace, config=config)

    # ─────────────────────────────────────────────────────────────────────
    # Mode fields
    # ─────────────────────────────────────────────────────────────────────

    @property
    def direction(self) -> Direction:
        return self.engine.direction

    @property
    def depth(self) -> Depth:
        return self.engine.depth

    @property
    def category_filter(self) -> frozenset[Category]:
        return self.engine.category_filter

    @property
    def active(self) -> bool:
        return self.highlights_enabled and not self.closed

    # ─────────────────────────────────────────────────────────────────────
    # Sequencing
    # ─────────────────────────────────────────────────────────────────────

    def next_sequence(self) -> int:
        """Issue the next request sequence number (arrival order)."""
        self._sequence += 1
        return self._sequence

    def accept_client_sequence(self, origin: Origin, requested: int | None) -> bool:
        """Check a client's own request number against the last one seen from ``origin``.

        Returns:
            False if ``requested`` is not newer than the last number seen.
        """
        if requested is None:
            return True
        last = self._client_sequences.get(origin, 0)
        if requested <= last:
            logger.debug("Dropping out-of-order %s request %d (last %d)", origin.value, requested, last)
            return False
        self._client_sequences[origin] = requested
        return True

    def publish(self, result: HighlightResult) -> bool:
        """Make ``result`` the current highlight if it is the newest.

        Returns:
            True if published, False if a newer result was already published.
        """
        if result.sequence is None or result.sequence <= self._published:
            logger.debug("Dropping stale result for line %d (seq %s)", result.line, result.sequence)
            return False
        self._published = result.sequence
        self.current = result
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Selection triggers
    # ─────────────────────────────────────────────────────────────────────

    def in_range(self, line: int) -> bool:
        if self.line_count is None:
            return line >= 1
        return 1 <= line <= self.line_count

    def select(
        self,
        line: int,
        origin: Origin = Origin.CURSOR,
        sequence: int | None = None,
    ) -> HighlightResult | None:
        """Handle a selection from either trigger.

        Line 0 clears the selection. A pointer activation of the already
        selected line clears it too.

        Args:
            line: Selected 1-based line.
            origin: CURSOR or POINTER.
            sequence: Client's own request number (optional); a request not
                newer than the last one from the same origin is dropped.

        Returns:
            The published result, or None if the session is inactive, the
            request was suppressed or arrived out of order.
        """
        if not self.active:
            return None

        if origin is Origin.CURSOR and self._clock() < self._suppress_until:
            logger.debug("Ignoring cursor selection of line %d during highlight update", line)
            return None

        if not self.accept_client_sequence(origin, sequence):
            return None
        seq = self.next_sequence()

        if line == 0 or (origin is Origin.POINTER and line == self.selected_line):
            result = HighlightResult.empty(0, self.direction).with_sequence(seq)
            if self.publish(result):
                self.selected_line = None
                return result
            return None

        if not self.in_range(line):
            logger.debug("Line %d is out of range (document has %s lines)", line, self.line_count)
            result = HighlightResult.empty(line, self.direction, out_of_range=True).with_sequence(seq)
            if not self.publish(result):
                return None
            self.selected_line = None
            return result

        result = self.engine.query(line).with_sequence(seq)
        if not self.publish(result):
            return None

        self.selected_line = line
        if origin is Origin.POINTER:
            self._suppress_until = self._clock() + self.suppress_seconds
        logger.debug(
            "Highlighted line %d: direct %s, indirect %s (%s)",
            line,
            list(result.direct),
            list(result.indirect),
            result.direction.value,
        )
        return result

    def select_from_cursor(self, line: int, sequence: int | None = None) -> HighlightResult | None:
        return self.select(line, Origin.CURSOR, sequence)

    def select_from_pointer(self, line: int, sequence: int | None = None) -> HighlightResult | None:
        return self.select(line, Origin.POINTER, sequence)

    def refresh(self) -> HighlightResult | None:
        """Re-run the query for the current selection under the current modes."""
        if not self.active or self.selected_line is None:
            return None
        result = self.engine.query(self.selected_line).with_sequence(self.next_sequence())
        return result if self.publish(result) else None

    # ─────────────────────────────────────────────────────────────────────
    # Mode changes (each re-reports the current selection)
    # ─────────────────────────────────────────────────────────────────────

    def set_direction(self, direction: Direction) -> HighlightResult | None:
        self.engine.direction = direction
        return self.refresh()

    def toggle_direction(self) -> HighlightResult | None:
        return self.set_direction(self.direction.toggled)

    def set_depth(self, depth: Depth) -> HighlightResult | None:
        self.engine.depth = depth
        return self.refresh()

    def set_filter(self, enabled: Iterable[Category]) -> HighlightResult | None:
        """Replace the enabled categories and re-run the current query."""
        self.engine.category_filter = frozenset(enabled)
        if self.filter_enables_indirect:
            self.engine.depth = Depth.INDIRECT
        return self.refresh()

    def set_filter_toggles(self, toggles: Iterable[Category]) -> HighlightResult | None:
        """Set the filter from filter-panel toggles (see FILTER_GROUPS)."""
        return self.set_filter(expand_filter_groups(set(toggles)))

    # ─────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────

    def _is_analyzed(self, path: Path | str) -> bool:
        return Path(path).resolve() == self.analyzed_file.resolve()

    def document_changed(self, path: Path | str) -> None:
        """The analyzed document was edited: highlights stay off until re-analysis."""
        if self._is_analyzed(path):
            logger.info("%s changed, highlights disabled until re-analysis", self.analyzed_file.name)
            self.highlights_enabled = False
            self.current = None

    def active_file_changed(self, path: Path | str) -> None:
        """Another file became active: drop the current highlight."""
        if not self._is_analyzed(path):
            self.current = None

    def close(self) -> None:
        """Discard the session (panel closed)."""
        self.closed = True
        self.highlights_enabled = False
        self.current = None
        self.selected_line = None

    # ─────────────────────────────────────────────────────────────────────
    # External dependencies
    # ─────────────────────────────────────────────────────────────────────

    def external_disclosure(self, line: int) -> list[dict[str, Any]]:
        """``{file, lines}`` messages for the cross-file justifications of ``line``."""
        return self.graph.external_for(line).disclosures()

    def resolve_external_file(self, file_name: str) -> Path | None:
        """Find ``file_name`` under the workspace (first match wins)."""
        matches = sorted(self.workspace.glob(f"**/{file_name}"))
        if not matches:
            logger.warning("Could not find file: %s", file_name)
            return None
        return matches[0]

    @staticmethod
    def open_file_request(file_name: str, line: int | None = None) -> dict[str, Any]:
        """Build the ``{openFile, line?}`` navigation request."""
        request: dict[str, Any] = {"openFile": file_name}
        if line is not None and line > 0:
            request["line"] = line
        return request

    def status(self) -> dict[str, Any]:
        return {
            "file": str(self.analyzed_file),
            "enabled": self.active,
            "direction": self.direction.value,
            "depth": self.depth.value,
            "filter": sorted(c.value for c in self.category_filter),
            "selected": self.selected_line,
            "lines": self.line_count,
        }


__all__ = ["AnalysisSession", "Origin"]
