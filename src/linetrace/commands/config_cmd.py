"""
linetrace.commands.config_cmd - Inspect the effective configuration.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import tomlkit

from linetrace.config import find_config_file


def _select_section(config: dict[str, Any], section: str | None) -> Any:
    if not section:
        return config
    value: Any = config
    for part in section.split("."):
        if not isinstance(value, dict) or part not in value:
            raise KeyError(section)
        value = value[part]
    return value


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = args.config_action
    if action == "path":
        path = args.config if args.config is not None else find_config_file(args.workspace or Path.cwd())
        if path is None:
            print("No .linetrace.toml found (using defaults)")
            return 1
        print(path)
        return 0

    if action == "show":
        try:
            value = _select_section(args.settings, args.section)
        except KeyError:
            print(f"Error: unknown section: {args.section}", file=sys.stderr)
            return 1
        if args.json or not isinstance(value, dict):
            print(json.dumps(value, indent=2))
        else:
            print(tomlkit.dumps(value), end="")
        return 0

    print("Usage: linetrace config {show|path}")
    return 1
