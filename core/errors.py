"""
core/errors.py — Error taxonomy for the tuning engine and sequence parser.

Three families, all ``ValueError`` subclasses so callers that already catch
``ValueError`` (API routes, CLI) keep working:

    FormatError          malformed chord line or chord record
    UnknownSymbolError   unrecognised note name, interval or fundamental
    EmptyInputError      a sequence that yields no chords

Each error carries an ``ErrorKind`` naming the precise condition and, for
parse errors, the 1-based source line number.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Precise failure condition carried by every ChordToolError."""

    # FormatError
    MISSING_COLON = "missing_colon"
    INVALID_DURATION_FORMAT = "invalid_duration_format"
    INVALID_DURATION_VALUE = "invalid_duration_value"
    NO_INTERVALS_SPECIFIED = "no_intervals_specified"
    MISSING_FUNDAMENTAL = "missing_fundamental"
    # UnknownSymbolError
    INVALID_FORMAT = "invalid_format"
    INVALID_NOTE_NAME = "invalid_note_name"
    INVALID_INTERVAL = "invalid_interval"
    UNKNOWN_INTERVAL = "unknown_interval"
    INVALID_FUNDAMENTAL = "invalid_fundamental"
    # EmptyInputError
    EMPTY_SEQUENCE = "empty_sequence"


class ChordToolError(ValueError):
    """Base class for all value-level failures raised by core/.

    Attributes:
        kind:    The precise condition, e.g. ErrorKind.MISSING_COLON
        line:    1-based source line for sequence parse errors, else None
        message: Human-readable message, including the "Line N: " prefix
                 when ``line`` is set
    """

    def __init__(self, kind: ErrorKind, message: str, *, line: int | None = None) -> None:
        self.kind = kind
        self.line = line
        self.message = f"Line {line}: {message}" if line is not None else message
        self._bare_message = message
        super().__init__(self.message)

    def with_line(self, line: int) -> ChordToolError:
        """Return a copy of this error (same class and kind) tagged with a line number."""
        return type(self)(self.kind, self._bare_message, line=line)


class FormatError(ChordToolError):
    """Malformed line or chord record: missing colon, bad duration, no intervals."""


class UnknownSymbolError(ChordToolError):
    """Unrecognised note name, interval token or fundamental."""


class EmptyInputError(ChordToolError):
    """The input sequence contained no chord lines."""
