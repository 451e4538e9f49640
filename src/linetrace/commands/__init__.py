"""
linetrace.commands - CLI command implementations
"""

__all__ = [
    "analyze",
    "config_cmd",
    "external",
    "query",
    "serve",
    "view",
]
