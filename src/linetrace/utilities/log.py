"""Logging setup for the CLI and server.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
entry points call :func:`setup_logging` once.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s"


def resolve_level(level: str | int | None, verbose: bool = False, quiet: bool = False) -> int:
    """Turn CLI flags and a configured level name into a logging level."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    if isinstance(level, int):
        return level
    if level:
        return getattr(logging, str(level).upper(), logging.WARNING)
    return logging.WARNING


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """Configure the root handler and return the package logger.

    Args:
        level: Logging level for the ``linetrace`` logger.

    Returns:
        The ``linetrace`` logger.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logger = logging.getLogger("linetrace")
    logger.setLevel(level)
    return logger
