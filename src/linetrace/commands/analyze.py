"""
linetrace.commands.analyze - Run a full analysis of one source file.

Exports the line records, writes the translated edge file, builds the
line graph and prints a summary.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from linetrace.config import get_export_dir
from linetrace.graph.factory import analyze_file
from linetrace.graph.serialize import graph_summary
from linetrace.session import AnalysisSession


def resolve_source(args: argparse.Namespace) -> Path | None:
    """Validate the FILE argument; prints an error and returns None if missing."""
    source = Path(args.file)
    if not source.is_file():
        print(f"Error: file not found: {source}", file=sys.stderr)
        return None
    return source


def workspace_for(args: argparse.Namespace) -> Path:
    return args.workspace if args.workspace is not None else Path.cwd()


def report_missing_trace(args: argparse.Namespace) -> None:
    export_dir = get_export_dir(args.settings, workspace_for(args))
    print(f"Error: no trace records found in {export_dir}", file=sys.stderr)


def open_session(args: argparse.Namespace) -> AnalysisSession | None:
    """Analyze FILE and open a session, reporting failures on stderr."""
    source = resolve_source(args)
    if source is None:
        return None
    session = AnalysisSession.from_file(source, workspace_for(args), args.settings)
    if session is None:
        report_missing_trace(args)
    return session


def format_summary(summary: dict[str, Any]) -> str:
    lines = [
        f"Dependency graph for {summary['file']}",
        "=" * 60,
        f"  Lines with obligations: {summary['vertices']}",
        f"  Edges (after bypass):   {summary['edges']}",
        f"  Edges (raw):            {summary['raw_edges']}",
        f"  Lines with external dependencies: {summary['external_lines']}",
    ]
    if summary["categories"]:
        lines.append("")
        lines.append("Categories:")
        for name, count in sorted(summary["categories"].items()):
            lines.append(f"  {name:<32} {count}")
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Run the analyze command."""
    source = resolve_source(args)
    if source is None:
        return 1

    graph = analyze_file(source, workspace_for(args), args.settings)
    if graph is None:
        report_missing_trace(args)
        return 1

    summary = graph_summary(graph)
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(format_summary(summary))
    return 0
