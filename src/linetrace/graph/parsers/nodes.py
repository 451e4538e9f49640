"""NodeRecordParser - Versioned parser for ``#``-delimited node records.

Node records look like::

    id # kind # subtype # ... # positionDescriptor

where the number of fields depends on the trace producer version. Each
supported layout is a TraceSchema; rows are read with a fixed position
index and rejected when they are too short, never index-shifted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from linetrace.exceptions import ConfigError, TraceFormatError
from linetrace.graph.categories import V1_TABLE, V2_TABLE, ClassificationTable, NodeKind
from linetrace.graph.parsers import NodeParseResult, SkippedRow, SkipReason
from linetrace.graph.records import SourcePosition, TraceNode

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "#"

# "(file.vpr @ line 4)" at the end of the descriptor, or "file.vpr @ line 4"
PAREN_POSITION_PATTERN = re.compile(r"\(([^()]+?)\s+@\s+line\s+(\d+)\)\s*$")
PLAIN_POSITION_PATTERN = re.compile(r"^(.+?)\s+@\s+line\s+(\d+)\s*$")


@dataclass(frozen=True)
class TraceSchema:
    """Layout of one node-record version.

    Attributes:
        name: Version label used in configuration.
        field_count: Minimum number of ``#``-separated fields per row.
        position_index: Index of the position descriptor field.
        table: Classification table of the producer.
    """

    name: str
    field_count: int
    position_index: int
    table: ClassificationTable


V1_SCHEMA = TraceSchema(name="v1", field_count=6, position_index=5, table=V1_TABLE)
V2_SCHEMA = TraceSchema(name="v2", field_count=7, position_index=6, table=V2_TABLE)

SCHEMAS: dict[str, TraceSchema] = {schema.name: schema for schema in (V1_SCHEMA, V2_SCHEMA)}


def get_schema(name: str) -> TraceSchema:
    """Look up a schema by name.

    Raises:
        ConfigError: If no schema has that name.
    """
    try:
        return SCHEMAS[name]
    except KeyError:
        valid = ", ".join(sorted(SCHEMAS))
        raise ConfigError(f"unknown trace schema '{name}' (expected one of: {valid})") from None


def detect_schema(header: str) -> TraceSchema | None:
    """Pick the schema whose field count matches a header row.

    Args:
        header: First row of the node record file.

    Returns:
        The matching TraceSchema, or None if no schema has that width.
    """
    if not header.strip():
        return None
    width = len(header.split(FIELD_SEPARATOR))
    for schema in SCHEMAS.values():
        if schema.field_count == width:
            return schema
    return None


def resolve_schema(name: str, header: str, fallback: str | None = "v2") -> TraceSchema:
    """Resolve the configured schema name against a header row.

    ``auto`` detects from the header and falls back to ``fallback``.

    Raises:
        TraceFormatError: If detection fails and there is no fallback.
    """
    if name != "auto":
        return get_schema(name)
    detected = detect_schema(header)
    if detected is None:
        if not fallback:
            width = len(header.split(FIELD_SEPARATOR)) if header.strip() else 0
            raise TraceFormatError(f"node header has {width} fields, which matches no known schema")
        logger.info("Node header matches no known schema, using %s", fallback)
        return get_schema(fallback)
    return detected


def parse_position(descriptor: str) -> SourcePosition | None:
    """Extract (file, line) from a trailing position descriptor.

    Accepts ``<file> @ line <N>`` or ``(<file> @ line <N>)``.

    Args:
        descriptor: Raw position field.

    Returns:
        SourcePosition, or None if the descriptor does not match or the
        line is not positive.
    """
    text = descriptor.strip()
    match = PAREN_POSITION_PATTERN.search(text) or PLAIN_POSITION_PATTERN.match(text)
    if not match:
        return None
    line = int(match.group(2))
    if line < 1:
        return None
    return SourcePosition(file=match.group(1).strip(), line=line)


class NodeRecordParser:
    """Parser for node record files.

    Args:
        schema: Fixed schema, or None to detect from the header row.
        fallback: Schema name used when detection fails.
    """

    def __init__(self, schema: TraceSchema | None = None, fallback: str | None = "v2") -> None:
        self.schema = schema
        self.fallback = fallback

    def parse(self, text: str) -> NodeParseResult:
        """Parse node records (first row is a header).

        Args:
            text: Full content of the node record file.

        Returns:
            NodeParseResult with the nodes and the skipped rows.
        """
        rows = text.split("\n")
        header = rows[0] if rows else ""
        schema = self.schema or resolve_schema("auto", header, self.fallback)
        result = NodeParseResult(schema=schema)

        for index, row in enumerate(rows[1:], start=2):
            if not row.strip():
                continue
            parts = row.split(FIELD_SEPARATOR)
            if len(parts) < schema.field_count:
                logger.debug("Skipping node row %d: %d fields, need %d", index, len(parts), schema.field_count)
                result.skipped.append(SkippedRow(index, SkipReason.FIELD_COUNT, row))
                continue

            position = parse_position(parts[schema.position_index])
            if position is None:
                logger.debug("Skipping node row %d: unparseable position %r", index, parts[schema.position_index])
                result.skipped.append(SkippedRow(index, SkipReason.POSITION, row))
                continue

            result.nodes.append(
                TraceNode(
                    id=parts[0].strip(),
                    kind=NodeKind.parse(parts[1]),
                    subtype=parts[2].strip(),
                    position=position,
                    details=tuple(p.strip() for p in parts[3 : schema.position_index]),
                )
            )

        if result.skipped:
            logger.info(
                "Parsed %d node records with schema %s, skipped %d",
                len(result.nodes),
                schema.name,
                len(result.skipped),
            )
        return result


__all__ = [
    "NodeRecordParser",
    "SCHEMAS",
    "TraceSchema",
    "V1_SCHEMA",
    "V2_SCHEMA",
    "detect_schema",
    "get_schema",
    "parse_position",
    "resolve_schema",
]
