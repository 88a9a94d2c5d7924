"""
core/tuning/notes.py — Note names and fundamentals → frequencies.

Note names are letter + optional accidental + signed octave: "A4", "C#3",
"Bb5", "E-1". They resolve through 12-TET from A4 = 440 Hz, which anchors the
Pythagorean chord built on top of them.

Flat spellings resolve through NOTE_ALIASES to the canonical sharp spelling,
so "C#" and "Db" always share one semitone entry.
"""

from __future__ import annotations

import math
import re

from core.errors import ErrorKind, UnknownSymbolError
from core.text import parse_leading_float

A4_FREQUENCY: float = 440.0
A4_OCTAVE: int = 4

# Canonical note name → semitone offset from A in the same octave
NOTE_SEMITONES: dict[str, int] = {
    "C": -9,
    "C#": -8,
    "D": -7,
    "D#": -6,
    "E": -5,
    "F": -4,
    "F#": -3,
    "G": -2,
    "G#": -1,
    "A": 0,
    "A#": 1,
    "B": 2,
}

NOTE_ALIASES: dict[str, str] = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

_NOTE_RE = re.compile(r"^([A-G][#b]?)(-?\d+)$")


def note_name_to_frequency(note: str) -> float:
    """
    Convert a note name to its 12-TET frequency (A4 = 440 Hz).

    Args:
        note: e.g. "A4", "C#3", "Bb5"

    Returns:
        Frequency in Hz: 440 * 2 ** (semitones_from_A4 / 12)

    Raises:
        UnknownSymbolError: INVALID_FORMAT if ``note`` is not letter +
            accidental + octave; INVALID_NOTE_NAME for spellings outside the
            table (E#, Fb, B#, Cb)
    """
    match = _NOTE_RE.match(note)
    if match is None:
        raise UnknownSymbolError(
            ErrorKind.INVALID_FORMAT,
            f"Invalid note format: {note}. Use format like A4, C#3, Bb5",
        )

    name = NOTE_ALIASES.get(match.group(1), match.group(1))
    if name not in NOTE_SEMITONES:
        raise UnknownSymbolError(ErrorKind.INVALID_NOTE_NAME, f"Invalid note name: {match.group(1)}")

    semitones = NOTE_SEMITONES[name] + (int(match.group(2)) - A4_OCTAVE) * 12
    return A4_FREQUENCY * 2 ** (semitones / 12)


def resolve_fundamental(fundamental: str | float) -> float:
    """
    Resolve a fundamental given as a note name or a frequency in Hz.

    Strings are tried as note names first, then as a leading numeric literal
    ("440", "261.63", "440Hz"). Numbers are taken literally.

    Raises:
        UnknownSymbolError: INVALID_FUNDAMENTAL if neither reading succeeds or
            the frequency is not a finite positive number
    """
    if isinstance(fundamental, str):
        try:
            return note_name_to_frequency(fundamental)
        except UnknownSymbolError:
            value = parse_leading_float(fundamental)
    else:
        value = float(fundamental)

    if value is None or not math.isfinite(value) or value <= 0:
        raise UnknownSymbolError(ErrorKind.INVALID_FUNDAMENTAL, f"Invalid fundamental: {fundamental}")
    return value
