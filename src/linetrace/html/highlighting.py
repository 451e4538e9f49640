"""Syntax highlighting for line tooltips.

Highlights the analyzed file once and splits the result per line, so
multi-line token state (strings, comments) is preserved. Shared by the
static generator and the server.
"""

from __future__ import annotations

from collections.abc import Mapping

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound


def highlight_file_content(file_path: str, raw_content: str) -> dict:
    """Highlight file content using Pygments.

    Args:
        file_path: File name or path (used for lexer detection).
        raw_content: Raw text content of the file.

    Returns:
        Dictionary with keys:
        - ``lines``: list of HTML strings (one per line)
        - ``language``: detected language name (lowercase)
    """
    formatter = HtmlFormatter(nowrap=True)
    try:
        lexer = get_lexer_for_filename(file_path, stripnl=False, ensurenl=False)
        language = lexer.name.lower()
    except ClassNotFound:
        lexer = TextLexer(stripnl=False, ensurenl=False)
        language = "text"

    highlighted_lines = pygments_highlight(raw_content, lexer, formatter).split("\n")
    return {"lines": highlighted_lines, "language": language}


def highlight_line_contents(file_path: str, contents: Mapping[int, str]) -> dict[int, str]:
    """Highlight the trimmed line contents of a graph.

    Lines are joined in order before highlighting; missing line numbers
    are filled with blank lines so the token state follows the file.

    Args:
        file_path: Analyzed file name (lexer detection).
        contents: 1-based line number to trimmed text.

    Returns:
        Line number to highlighted HTML, for the lines in ``contents``.
    """
    if not contents:
        return {}
    last = max(contents)
    text = "\n".join(contents.get(n, "") for n in range(1, last + 1))
    lines = highlight_file_content(file_path, text)["lines"]
    return {n: lines[n - 1] for n in contents if n - 1 < len(lines)}


def get_pygments_css(style: str = "monokai", scope: str = ".highlight") -> str:
    """Generate scoped Pygments CSS for syntax highlighting.

    Args:
        style: Pygments style name (e.g., ``"default"``, ``"monokai"``).
        scope: CSS selector to scope the rules under.
    """
    return HtmlFormatter(style=style).get_style_defs(scope)
