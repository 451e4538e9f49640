"""
Exception hierarchy for linetrace.

Per-row trace problems never raise; they are reported as skipped rows.
These exceptions cover conditions a caller has to act on.
"""


class LinetraceError(Exception):
    """Base exception for all linetrace errors."""


class ConfigError(LinetraceError):
    """Configuration file or override could not be used."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        if key:
            message = f"{key}: {message}"
        super().__init__(message)


class TraceFormatError(LinetraceError):
    """Trace records match no supported schema."""
