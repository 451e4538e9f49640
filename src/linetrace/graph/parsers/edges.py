"""EdgeRecordParser - Parser for comma-delimited edge records.

Edge records are ``sourceId,targetId,label`` rows after one header row.
"""

from __future__ import annotations

import logging

from linetrace.graph.parsers import EdgeParseResult, SkippedRow, SkipReason
from linetrace.graph.records import TraceEdge

logger = logging.getLogger(__name__)

MIN_EDGE_FIELDS = 3


class EdgeRecordParser:
    """Parser for edge record files."""

    def parse(self, text: str) -> EdgeParseResult:
        """Parse edge records.

        Rows with fewer than three fields are skipped; blank rows are
        ignored.

        Args:
            text: Full content of the edge record file.

        Returns:
            EdgeParseResult with the edges and the skipped rows.
        """
        rows = text.split("\n")
        result = EdgeParseResult(header=rows[0].strip() if rows else "")

        for index, row in enumerate(rows[1:], start=2):
            line = row.strip()
            if not line:
                continue
            parts = line.split(",")
            if len(parts) < MIN_EDGE_FIELDS:
                logger.debug("Skipping edge row %d: %d fields", index, len(parts))
                result.skipped.append(SkippedRow(index, SkipReason.FIELD_COUNT, row))
                continue
            result.edges.append(
                TraceEdge(
                    source_id=parts[0].strip(),
                    target_id=parts[1].strip(),
                    label=parts[2].strip(),
                )
            )

        return result


__all__ = ["EdgeRecordParser", "MIN_EDGE_FIELDS"]
