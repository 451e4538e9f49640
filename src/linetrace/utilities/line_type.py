"""Display labels derived from a line's source text.

The graph view shows a short label per vertex: the statement keyword, or
``assignment`` plus the assigned name when the line contains ``:=``.
"""

from __future__ import annotations

import re

ELLIPSIS = "…"
MAX_LINE_TYPE = 10
MAX_ASSIGNMENT_VARIABLE = 11

_FIRST_WORD = re.compile(r"^\S+")
_SECOND_WORD = re.compile(r"^\S+\s+(\S+)")


def line_type(content: str) -> tuple[str, str]:
    """Classify a source line for display.

    Args:
        content: Source text of the line.

    Returns:
        Tuple of (line_type, assignment_variable). ``assignment_variable``
        is empty unless the line assigns with ``:=``.

    Examples:
        >>> line_type("var x: Int := 3")
        ('assignment', 'x')
        >>> line_type("assert x > 0")
        ('assert', '')
    """
    trimmed = content.strip()
    if not trimmed:
        return "other", ""

    match = _FIRST_WORD.match(trimmed)
    kind = match.group(0) if match else "other"
    variable = ""

    if ":=" in content:
        variable = kind
        if kind == "var":
            second = _SECOND_WORD.match(trimmed)
            if second:
                variable = second.group(1).removesuffix(":")
        if len(variable) > MAX_ASSIGNMENT_VARIABLE:
            variable = variable[: MAX_ASSIGNMENT_VARIABLE - 1] + ELLIPSIS
        kind = "assignment"

    if len(kind) > MAX_LINE_TYPE:
        kind = kind[: MAX_LINE_TYPE - 1] + ELLIPSIS
    return kind, variable
