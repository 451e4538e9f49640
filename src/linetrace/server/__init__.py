"""linetrace.server - Flask JSON API for the graph view and editors.

A thin wrapper over one AnalysisSession: every highlight is computed by
the session's query engine, never by the page or the editor.
"""

from linetrace.server.app import create_app

__all__ = ["create_app"]
