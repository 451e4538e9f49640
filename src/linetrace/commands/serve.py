"""
linetrace.commands.serve - Start the graph view server for one file.
"""

from __future__ import annotations

import argparse

from linetrace.commands.analyze import open_session
from linetrace.server import create_app


def run(args: argparse.Namespace) -> int:
    """Run the serve command."""
    session = open_session(args)
    if session is None:
        return 1

    server_config = args.settings.get("server", {})
    host = args.host or server_config.get("host", "127.0.0.1")
    port = args.port or int(server_config.get("port", 8080))

    print(
        f"""
======================================
  linetrace Graph Server
======================================

File:       {session.analyzed_file}
Server:     http://{host}:{port}

Press Ctrl+C to stop
"""
    )

    app = create_app(session, args.settings)
    try:
        app.run(host=host, port=port, debug=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        session.close()

    return 0
