"""
linetrace.commands.view - Write the graph page as a static HTML file.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from linetrace.commands.analyze import report_missing_trace, resolve_source, workspace_for
from linetrace.config import get_export_dir
from linetrace.graph.factory import analyze_file
from linetrace.html.generator import GraphViewGenerator


def default_output(args: argparse.Namespace, source: Path) -> Path:
    return get_export_dir(args.settings, workspace_for(args)) / f"{source.stem}.graph.html"


def run(args: argparse.Namespace) -> int:
    """Run the view command."""
    source = resolve_source(args)
    if source is None:
        return 1

    graph = analyze_file(source, workspace_for(args), args.settings)
    if graph is None:
        report_missing_trace(args)
        return 1

    output = args.output if args.output is not None else default_output(args, source)
    GraphViewGenerator(graph).write(output)
    if not args.quiet:
        print(f"Wrote {output}")
    return 0
