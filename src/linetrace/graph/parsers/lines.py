"""Line-content records - ``lineNumber,"<text>"`` codec.

Each source line is stored trimmed, wrapped in double quotes, with
embedded quotes doubled. Decoding reverses this exactly.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

LINE_RECORD_PATTERN = re.compile(r'^(\d+),"(.*)"\s*$')


def escape_content(text: str) -> str:
    """Escape line content for a record (double every quote)."""
    return text.replace('"', '""')


def unescape_content(escaped: str) -> str:
    """Reverse :func:`escape_content`."""
    return escaped.replace('""', '"')


def encode_line(line_number: int, text: str) -> str:
    """Encode one source line as a record.

    Args:
        line_number: 1-based line number.
        text: Raw source text (trimmed before encoding).

    Returns:
        The record row, without a trailing newline.
    """
    return f'{line_number},"{escape_content(text.strip())}"'


def decode_line(row: str) -> tuple[int, str] | None:
    """Decode one record row.

    Returns:
        Tuple of (line_number, text), or None if the row is malformed.
    """
    match = LINE_RECORD_PATTERN.match(row)
    if not match:
        return None
    return int(match.group(1)), unescape_content(match.group(2))


def encode_lines(source_text: str) -> str:
    """Encode a whole source file, one record per line (no header)."""
    return "\n".join(encode_line(i, line) for i, line in enumerate(source_text.split("\n"), start=1))


def decode_lines(rows: str | Iterable[str]) -> dict[int, str]:
    """Decode line records into a line number -> content map.

    Malformed rows are ignored.
    """
    if isinstance(rows, str):
        rows = rows.strip().split("\n")
    contents: dict[int, str] = {}
    for row in rows:
        decoded = decode_line(row)
        if decoded is not None:
            contents[decoded[0]] = decoded[1]
    return contents


__all__ = [
    "decode_line",
    "decode_lines",
    "encode_line",
    "encode_lines",
    "escape_content",
    "unescape_content",
]
