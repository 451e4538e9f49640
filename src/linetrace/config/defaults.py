"""
linetrace.config.defaults - Built-in configuration values.
"""

DEFAULT_CONFIG = {
    "export": {
        # Relative to the workspace root
        "dir": "graphExports/joined",
        "nodes": "nodes.csv",
        "edges": "edges.csv",
        "lines": "lines.csv",
        "translated": "edges_translated.csv",
    },
    "trace": {
        # "auto" picks the schema from the node header row; an empty
        # fallback makes an unrecognised header an error
        "schema": "auto",
        "fallback_schema": "v2",
    },
    "query": {
        "direction": "causes",
        "depth": "direct",
        "exclude": [],
        "filter_enables_indirect": True,
        # Cursor moves within this window after a graph-view selection are echoes
        "suppress_ms": 100,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8080,
    },
    "logging": {
        "level": "WARNING",
    },
}
