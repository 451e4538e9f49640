"""
linetrace - Per-line dependency graphs from program-verification traces

linetrace reads the proof-obligation records and "established-using"
relations emitted by a verifier, projects them onto the source lines of
one analyzed file, and answers "what justifies this line?" and "what
depends on this line?" for interactive front ends.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("linetrace")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "linetrace contributors"
__license__ = "MIT"

from linetrace.graph.builder import LineGraph, LineGraphBuilder
from linetrace.graph.categories import Category
from linetrace.graph.query import Depth, Direction, HighlightQueryEngine, HighlightResult
from linetrace.session import AnalysisSession

__all__ = [
    "__version__",
    "AnalysisSession",
    "Category",
    "Depth",
    "Direction",
    "HighlightQueryEngine",
    "HighlightResult",
    "LineGraph",
    "LineGraphBuilder",
]
