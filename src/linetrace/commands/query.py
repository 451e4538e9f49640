"""
linetrace.commands.query - Print the highlight result for one line.
"""

from __future__ import annotations

import argparse
import json
import sys

from linetrace.commands.analyze import open_session
from linetrace.graph.categories import ALL_CATEGORIES, parse_categories
from linetrace.graph.query import Depth, Direction


def run(args: argparse.Namespace) -> int:
    """Run the query command."""
    try:
        excluded = parse_categories(args.exclude or [])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = open_session(args)
    if session is None:
        return 1

    configured_depth = session.depth
    if excluded:
        session.set_filter(ALL_CATEGORIES - excluded)
    if args.effects:
        session.set_direction(Direction.EFFECTS)
    if args.indirect:
        session.set_depth(Depth.INDIRECT)
    elif excluded:
        # set_filter may have switched to indirect
        session.set_depth(configured_depth)

    result = session.select_from_cursor(args.line)
    if result is None:
        print("Error: highlights are disabled", file=sys.stderr)
        return 1
    if result.out_of_range:
        print(
            f"Warning: line {args.line} is outside the document (1-{session.line_count})",
            file=sys.stderr,
        )
    print(json.dumps(result.to_message()))
    return 0
