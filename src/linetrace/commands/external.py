"""
linetrace.commands.external - Show cross-file justifications of one line.
"""

from __future__ import annotations

import argparse
import json

from linetrace.commands.analyze import open_session


def run(args: argparse.Namespace) -> int:
    """Run the external command."""
    session = open_session(args)
    if session is None:
        return 1

    disclosures = session.external_disclosure(args.line)
    if args.json:
        print(json.dumps(disclosures, indent=2))
        return 0

    if not disclosures:
        print(f"Line {args.line} has no external dependencies")
        return 0

    print(f"External dependencies of line {args.line}:")
    for entry in disclosures:
        lines = ", ".join(str(n) for n in entry["lines"])
        print(f"  {entry['file']}: {lines}")
    return 0
