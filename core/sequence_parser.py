"""
core/sequence_parser.py — Chord-sequence text → ParsedChord records.

Grammar, one chord per line:

    <fundamental> ":" <part> ("," <part>)*

    C4: 1,3,5, duration=2
    440: 1,b3,5, duration=1.5
    C#3: 1,3,5,7,9

Parts are interval symbols or a single ``duration=<positive number>`` keyword
(case-insensitive, whitespace around ``=`` allowed, recognised anywhere among
the parts). Duration defaults to 1. Blank lines and lines starting with
``#`` or ``//`` are comments.

Parsing fails fast: the first bad line aborts the whole sequence with an
error tagged by its 1-based line number. Interval symbols are not checked
here; the tuning engine rejects unknown ones.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence

from core.errors import ChordToolError, EmptyInputError, ErrorKind, FormatError
from core.text import is_comment_or_blank, parse_leading_float
from core.tuning.types import ParsedChord

DEFAULT_DURATION: float = 1.0

_DURATION_KEYWORD = "duration"
_DURATION_RE = re.compile(r"duration\s*=\s*([0-9.]+)", re.IGNORECASE)
_FORMAT_HINT = 'Expected format: "A4: 1,3,5, duration=2"'

EXAMPLE_SEQUENCE: str = """# Major chord progression in C
C4: 1,3,5, duration=2
F4: 1,3,5, duration=2
G4: 1,3,5, duration=2
C4: 1,3,5, duration=4

# Minor progression in A
A3: 1,b3,5, duration=1.5
D4: 1,b3,5, duration=1.5
E4: 1,3,5, duration=1.5
A3: 1,b3,5, duration=3

# Extended jazz voicing
# Using Hz input and compound intervals
440: 1,3,5,7,9,11, duration=4"""


# ---------------------------------------------------------------------------
# Line parsing
# ---------------------------------------------------------------------------


def _parse_duration(part: str) -> float:
    match = _DURATION_RE.search(part)
    if match is None:
        raise FormatError(
            ErrorKind.INVALID_DURATION_FORMAT,
            f'Invalid duration format: {part}. Expected format: "duration=2"',
        )
    raw = match.group(1)
    value = parse_leading_float(raw)
    if value is None or not math.isfinite(value) or value <= 0:
        raise FormatError(
            ErrorKind.INVALID_DURATION_VALUE,
            f"Invalid duration value: {raw}. Must be a positive number.",
        )
    return value


def parse_chord_line(line: str) -> ParsedChord | None:
    """
    Parse a single chord line.

    Args:
        line: e.g. "A4: 1,3,5, duration=2"

    Returns:
        ParsedChord, or None for blank and comment lines

    Raises:
        FormatError: missing colon, malformed or non-positive duration,
            or no interval parts
    """
    if is_comment_or_blank(line):
        return None
    line = line.strip()

    fundamental, colon, remainder = line.partition(":")
    if not colon:
        raise FormatError(ErrorKind.MISSING_COLON, f"Invalid format: Missing colon. {_FORMAT_HINT}")
    fundamental = fundamental.strip()

    intervals: list[str] = []
    duration = DEFAULT_DURATION
    for part in (p.strip() for p in remainder.split(",")):
        if part.lower().startswith(_DURATION_KEYWORD):
            duration = _parse_duration(part)
        elif part:
            intervals.append(part)

    if not intervals:
        raise FormatError(
            ErrorKind.NO_INTERVALS_SPECIFIED,
            f"No intervals specified for fundamental {fundamental}",
        )

    return ParsedChord(fundamental=fundamental, intervals=tuple(intervals), duration=duration)


# ---------------------------------------------------------------------------
# Sequence parsing
# ---------------------------------------------------------------------------


def parse_chord_sequence(text: str) -> tuple[ParsedChord, ...]:
    """
    Parse a multi-line chord sequence.

    Args:
        text: One chord per line; comments and blank lines are skipped

    Returns:
        Tuple of ParsedChord in source order (never empty)

    Raises:
        FormatError:     first malformed line, message prefixed "Line N: "
        EmptyInputError: no chord lines at all
    """
    chords: list[ParsedChord] = []
    for number, line in enumerate(text.split("\n"), start=1):
        try:
            chord = parse_chord_line(line)
        except ChordToolError as exc:
            raise exc.with_line(number) from exc
        if chord is not None:
            chords.append(chord)

    if not chords:
        raise EmptyInputError(ErrorKind.EMPTY_SEQUENCE, "No valid chords found in input")
    return tuple(chords)


# ---------------------------------------------------------------------------
# Standalone validation (programmatically built chords)
# ---------------------------------------------------------------------------


def validate_chord(chord: ParsedChord | Mapping[str, object]) -> bool:
    """
    Assert that a chord record is well formed.

    Usable independently of the line parser, e.g. for chords built from
    keyboard selections or received as JSON.

    Args:
        chord: ParsedChord or a mapping with ``fundamental``, ``intervals``
               and ``duration`` keys

    Returns:
        True if valid

    Raises:
        FormatError: empty fundamental, empty intervals, or a duration that is
            not a finite number > 0
    """
    if isinstance(chord, Mapping):
        fundamental = chord.get("fundamental")
        intervals = chord.get("intervals")
        duration = chord.get("duration")
    else:
        fundamental = chord.fundamental
        intervals = chord.intervals
        duration = chord.duration

    if not isinstance(fundamental, str) or not fundamental:
        raise FormatError(ErrorKind.MISSING_FUNDAMENTAL, "Missing fundamental")

    if isinstance(intervals, str) or not isinstance(intervals, Sequence) or not intervals:
        raise FormatError(ErrorKind.NO_INTERVALS_SPECIFIED, "No intervals specified")

    if (
        isinstance(duration, bool)
        or not isinstance(duration, (int, float))
        or not math.isfinite(duration)
        or duration <= 0
    ):
        raise FormatError(ErrorKind.INVALID_DURATION_VALUE, "Invalid duration")

    return True
