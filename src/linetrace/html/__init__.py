"""HTML view of a line dependency graph.

This module renders the interactive graph page shared by the static
``view`` command and the ``serve`` command.
"""

from linetrace.html.generator import GraphViewGenerator

__all__ = ["GraphViewGenerator"]
