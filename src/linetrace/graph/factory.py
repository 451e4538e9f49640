"""Graph Factory - Builds a LineGraph from the records of one analysis run.

This module is the single entry point commands and the server use to go
from files on disk to a LineGraph. It handles:
- Exporting the analyzed file's lines to the line-content records
- Reading node and edge records from the export directory
- Writing the translated (line-keyed) edge file
- Graph construction with the configured trace schema

Missing node or edge records are not an error: the run simply has no
graph, which is logged and reported as None.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from linetrace.config import DEFAULT_CONFIG, get_export_dir
from linetrace.graph.builder import LineGraph, LineGraphBuilder
from linetrace.graph.parsers import EdgeParseResult, NodeParseResult
from linetrace.graph.parsers.edges import EdgeRecordParser
from linetrace.graph.parsers.lines import decode_lines, encode_lines
from linetrace.graph.parsers.nodes import NodeRecordParser, resolve_schema
from linetrace.graph.serialize import write_translated_edges

logger = logging.getLogger(__name__)


@dataclass
class TraceRecords:
    """Node and edge records of one run, as parsed."""

    nodes: NodeParseResult
    edges: EdgeParseResult


def _export_settings(config: dict[str, Any] | None) -> dict[str, Any]:
    settings = dict(DEFAULT_CONFIG["export"])
    if config:
        settings.update(config.get("export", {}))
    return settings


def export_lines(source: Path, export_dir: Path, config: dict[str, Any] | None = None) -> Path:
    """Write the line-content records for ``source``.

    Args:
        source: The analyzed source file.
        export_dir: Directory for derived files (created if missing).
        config: Configuration (for the file name).

    Returns:
        Path of the written line-content file.
    """
    export_dir.mkdir(parents=True, exist_ok=True)
    text = source.read_text(encoding="utf-8")
    path = export_dir / _export_settings(config)["lines"]
    path.write_text(encode_lines(text), encoding="utf-8")
    logger.debug("Exported %d lines to %s", text.count("\n") + 1, path)
    return path


def read_line_contents(export_dir: Path, config: dict[str, Any] | None = None) -> dict[int, str]:
    """Read the line-content records (empty when the file is missing)."""
    path = export_dir / _export_settings(config)["lines"]
    if not path.is_file():
        return {}
    return decode_lines(path.read_text(encoding="utf-8"))


def read_trace(export_dir: Path, config: dict[str, Any] | None = None) -> TraceRecords | None:
    """Parse the node and edge records in ``export_dir``.

    Args:
        export_dir: Directory holding the trace records.
        config: Configuration (file names and trace schema).

    Returns:
        TraceRecords, or None if either record file is missing.
    """
    settings = _export_settings(config)
    trace_config = {**DEFAULT_CONFIG["trace"], **(config or {}).get("trace", {})}
    nodes_path = export_dir / settings["nodes"]
    edges_path = export_dir / settings["edges"]

    if not nodes_path.is_file() or not edges_path.is_file():
        logger.warning("Node or edge records not found in %s, no graph available", export_dir)
        return None

    node_text = nodes_path.read_text(encoding="utf-8")
    header = node_text.split("\n", 1)[0]
    schema = resolve_schema(trace_config["schema"], header, trace_config["fallback_schema"])

    nodes = NodeRecordParser(schema).parse(node_text)
    edges = EdgeRecordParser().parse(edges_path.read_text(encoding="utf-8"))
    return TraceRecords(nodes=nodes, edges=edges)


def build_from_records(
    records: TraceRecords,
    analyzed_file: str,
    line_contents: dict[int, str] | None = None,
) -> LineGraph:
    """Run projection, bypass resolution and indexing over parsed records."""
    builder = LineGraphBuilder(analyzed_file, table=records.nodes.schema.table)
    builder.add_nodes(records.nodes)
    builder.add_edges(records.edges)
    if line_contents:
        builder.set_line_contents(line_contents)
    return builder.build()


def build_graph(
    export_dir: Path,
    analyzed_file: str | Path,
    config: dict[str, Any] | None = None,
) -> LineGraph | None:
    """Build a LineGraph from the records in ``export_dir``.

    Args:
        export_dir: Directory holding nodes, edges and line records.
        analyzed_file: The analyzed file (only its name is used).
        config: Configuration dict (defaults when None).

    Returns:
        The LineGraph, or None if the trace records are missing.
    """
    records = read_trace(export_dir, config)
    if records is None:
        return None
    return build_from_records(records, Path(analyzed_file).name, read_line_contents(export_dir, config))


def translate_edges(
    export_dir: Path,
    analyzed_file: str | Path,
    config: dict[str, Any] | None = None,
) -> Path | None:
    """Write the translated edge file for ``analyzed_file``.

    Returns:
        Path of the written file, or None if the trace records are missing.
    """
    records = read_trace(export_dir, config)
    if records is None:
        return None
    graph = build_from_records(records, Path(analyzed_file).name)
    path = export_dir / _export_settings(config)["translated"]
    count = write_translated_edges(graph, path, header=records.edges.header)
    logger.debug("Translated %d edges to line numbers at %s", count, path)
    return path


def analyze_file(
    source: Path,
    workspace: Path | None = None,
    config: dict[str, Any] | None = None,
) -> LineGraph | None:
    """Full analysis run for one source file.

    Exports the line records, writes the translated edge file and builds
    the graph from the export directory of ``workspace``.

    Args:
        source: The analyzed source file.
        workspace: Workspace root (defaults to the file's directory).
        config: Configuration dict.

    Returns:
        The LineGraph, or None if no trace records are available.
    """
    config = config or DEFAULT_CONFIG
    workspace = workspace or source.parent
    export_dir = get_export_dir(config, workspace)

    logger.info("Starting dependency analysis for %s", source.name)
    export_lines(source, export_dir, config)

    records = read_trace(export_dir, config)
    if records is None:
        return None

    graph = build_from_records(records, source.name, read_line_contents(export_dir, config))
    path = export_dir / _export_settings(config)["translated"]
    count = write_translated_edges(graph, path, header=records.edges.header)
    logger.debug("Translated %d edges to line numbers at %s", count, path)

    logger.info("Dependency analysis completed for %s", source.name)
    return graph


__all__ = [
    "TraceRecords",
    "analyze_file",
    "build_from_records",
    "build_graph",
    "export_lines",
    "read_line_contents",
    "read_trace",
    "translate_edges",
]
