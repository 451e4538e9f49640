"""
linetrace.config - Configuration loading and defaults

Configuration lives in ``.linetrace.toml`` (found by walking up from the
working directory) and is merged over ``DEFAULT_CONFIG``. Any leaf value
can be overridden with ``LINETRACE_<SECTION>_<KEY>`` environment
variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from linetrace.config.defaults import DEFAULT_CONFIG
from linetrace.exceptions import ConfigError

CONFIG_FILE_NAME = ".linetrace.toml"
ENV_PREFIX = "LINETRACE_"


def find_config_file(start: Path) -> Path | None:
    """Find the nearest ``.linetrace.toml`` at or above ``start``.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file and merge it over the defaults.

    Args:
        config_path: Path to a ``.linetrace.toml`` file.

    Returns:
        Complete configuration dictionary.

    Raises:
        ConfigError: If the file cannot be parsed.
    """
    try:
        document = tomlkit.parse(config_path.read_text(encoding="utf-8"))
    except ParseError as e:
        raise ConfigError(f"invalid TOML: {e}", key=str(config_path)) from e
    # unwrap() turns tomlkit containers into plain dicts and lists
    return merge_configs(DEFAULT_CONFIG, document.unwrap())


def _try_parse_env_value(raw: str) -> Any:
    """Parse an environment override into a typed value.

    JSON arrays and objects are decoded, ``true``/``false`` become booleans,
    integers become ints. Anything else (including malformed JSON) is
    returned unchanged.
    """
    stripped = raw.strip()
    if stripped.lower() == "true":
        return True
    if stripped.lower() == "false":
        return False
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return raw
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return raw


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``LINETRACE_<SECTION>_<KEY>`` overrides in place.

    The first underscore-separated component after the prefix names the
    section; the remainder (lowercased) names the key, so
    ``LINETRACE_TRACE_FALLBACK_SCHEMA`` sets ``trace.fallback_schema``.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not parts[1]:
            continue
        section, key = parts
        config.setdefault(section, {})
        if not isinstance(config[section], dict):
            raise ConfigError("cannot override a non-table value", key=section)
        config[section][key] = _try_parse_env_value(raw)
    return config


def get_config(config_path: Path | None = None, start_dir: Path | None = None) -> dict[str, Any]:
    """Resolve the effective configuration.

    Priority: environment > explicit ``config_path`` > discovered file >
    defaults.

    Args:
        config_path: Explicit config file (optional).
        start_dir: Where to start discovery (defaults to cwd).

    Returns:
        Configuration dictionary.
    """
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())
    if config_path is not None and config_path.exists():
        config = load_config(config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)
    return _apply_env_overrides(config)


def get_export_dir(config: dict[str, Any], workspace: Path) -> Path:
    """Return the directory holding the trace records for ``workspace``."""
    export_dir = Path(config.get("export", {}).get("dir", DEFAULT_CONFIG["export"]["dir"]))
    if export_dir.is_absolute():
        return export_dir
    return workspace / export_dir


__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "get_export_dir",
    "load_config",
    "merge_configs",
]
