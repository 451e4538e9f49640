"""
linetrace.cli - Command-line interface.

Main entry point for the linetrace CLI tool.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from linetrace import __version__
from linetrace.commands import analyze, config_cmd, external, query, serve, view
from linetrace.config import get_config
from linetrace.exceptions import LinetraceError
from linetrace.graph.categories import ALL_CATEGORIES
from linetrace.utilities.log import resolve_level, setup_logging

logger = logging.getLogger(__name__)

COMMANDS = {
    "analyze": analyze.run,
    "query": query.run,
    "external": external.run,
    "view": view.run,
    "serve": serve.run,
    "config": config_cmd.run,
}


def _add_file_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", type=Path, help="Source file to analyze", metavar="FILE")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="linetrace",
        description="Per-line dependency graphs from verifier traces",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  linetrace analyze src/Main.dfy           # Build the graph, print a summary
  linetrace query src/Main.dfy 12          # What justifies line 12?
  linetrace query src/Main.dfy 12 --effects --indirect
  linetrace external src/Main.dfy 12       # Justifications in other files
  linetrace view src/Main.dfy              # Write a static graph page
  linetrace serve src/Main.dfy             # Interactive graph server

Trace records are read from <workspace>/graphExports/joined
(nodes.csv and edges.csv); see `linetrace config show`.

For detailed command help: linetrace <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"linetrace {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-w",
        "--workspace",
        type=Path,
        help="Workspace root holding the trace records (default: current directory)",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Export lines, translate edges and summarize the graph",
    )
    _add_file_argument(analyze_parser)
    analyze_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output the summary as JSON",
    )

    # query command
    query_parser = subparsers.add_parser(
        "query",
        help="Show the lines related to one line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Categories for --exclude:
  {", ".join(sorted(c.value for c in ALL_CATEGORIES))}
""",
    )
    _add_file_argument(query_parser)
    query_parser.add_argument("line", type=int, help="1-based line number", metavar="LINE")
    query_parser.add_argument(
        "--effects",
        action="store_true",
        help="Show what the line justifies instead of what justifies it",
    )
    query_parser.add_argument(
        "--indirect",
        action="store_true",
        help="Also show transitive dependencies",
    )
    query_parser.add_argument(
        "--exclude",
        action="append",
        help="Hide neighbours of this category (can be repeated)",
        metavar="CATEGORY",
    )

    # external command
    external_parser = subparsers.add_parser(
        "external",
        help="Show the lines in other files a line depends on",
    )
    _add_file_argument(external_parser)
    external_parser.add_argument("line", type=int, help="1-based line number", metavar="LINE")
    external_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # view command
    view_parser = subparsers.add_parser(
        "view",
        help="Write the graph page as static HTML",
    )
    _add_file_argument(view_parser)
    view_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: <export dir>/<name>.graph.html)",
        metavar="PATH",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the interactive graph server",
    )
    _add_file_argument(serve_parser)
    serve_parser.add_argument("--host", help="Bind address (default from [server] host)")
    serve_parser.add_argument("--port", type=int, help="Port (default from [server] port)")

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View configuration (show, path)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration File:
  linetrace looks for .linetrace.toml in the workspace or its parents.
  Any value can be overridden with LINETRACE_<SECTION>_<KEY>.

Quick Start (.linetrace.toml):
  [export]
  dir = "graphExports/joined"

  [trace]
  schema = "auto"                # auto, v1 or v2

  [query]
  direction = "causes"
  exclude = ["ImplicitAssumption"]
""",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_show = config_subparsers.add_parser(
        "show",
        help="Show current configuration",
    )
    config_show.add_argument(
        "--section",
        help="Show only a specific section (e.g., 'query', 'export.dir')",
        metavar="SECTION",
    )
    config_show.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    config_subparsers.add_parser(
        "path",
        help="Show config file location",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        args.settings = get_config(args.config, start_dir=args.workspace)
        level = resolve_level(args.settings.get("logging", {}).get("level"), args.verbose, args.quiet)
        setup_logging(level)
        logger.debug("Running %s with workspace %s", args.command, args.workspace or Path.cwd())
        return COMMANDS[args.command](args)

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except LinetraceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
