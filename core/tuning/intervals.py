"""
core/tuning/intervals.py — Interval symbols → Pythagorean ratios and 12-TET semitones.

Interval symbols are scale-degree names with an optional accidental:
"1", "b3", "#4", "b7", "9", "#11", "13". Degrees above 8 are compound
intervals: a simple degree plus whole octaves.

Compounding rule (shared by both tunings):
    octaves     = (degree - 1) // 7
    base degree = ((degree - 1) % 7) + 1
    e.g. 9 → 2 + 1 octave, 11 → 4 + 1 octave, 15 → 1 + 2 octaves

Enharmonic spellings are resolved through INTERVAL_ALIASES to a single
canonical key, so "#4" and "b5" can never drift apart. Pythagorean tuning
does not distinguish the augmented 4th from the diminished 5th: both are
729/512.

Exports:
    PYTHAGOREAN_RATIOS     canonical symbol → exact Fraction
    SEMITONES              canonical symbol → 12-TET semitone count
    INTERVAL_ALIASES       alternate spelling → canonical symbol

    interval_fraction(symbol) → Fraction
    interval_ratio(symbol) → float
    interval_semitones(symbol) → int
    equal_temperament_ratio(symbol) → float
    equal_temperament_frequency(fundamental, symbol) → float
    semitones_to_scale_degree(semitones) → str
"""

from __future__ import annotations

import re
from fractions import Fraction

from core.errors import ErrorKind, UnknownSymbolError

# ---------------------------------------------------------------------------
# Base tables (one octave, canonical spellings)
# ---------------------------------------------------------------------------

PYTHAGOREAN_RATIOS: dict[str, Fraction] = {
    "1": Fraction(1, 1),  # unison
    "b2": Fraction(256, 243),  # minor 2nd (limma)
    "2": Fraction(9, 8),  # major 2nd
    "b3": Fraction(32, 27),  # minor 3rd
    "3": Fraction(81, 64),  # major 3rd (ditone)
    "4": Fraction(4, 3),  # perfect 4th
    "#4": Fraction(729, 512),  # augmented 4th / tritone
    "5": Fraction(3, 2),  # perfect 5th
    "b6": Fraction(128, 81),  # minor 6th
    "6": Fraction(27, 16),  # major 6th
    "b7": Fraction(16, 9),  # minor 7th
    "7": Fraction(243, 128),  # major 7th
    "8": Fraction(2, 1),  # octave
}

SEMITONES: dict[str, int] = {
    "1": 0,
    "b2": 1,
    "2": 2,
    "b3": 3,
    "3": 4,
    "4": 5,
    "#4": 6,
    "5": 7,
    "b6": 8,
    "6": 9,
    "b7": 10,
    "7": 11,
    "8": 12,
}

INTERVAL_ALIASES: dict[str, str] = {
    "b5": "#4",
}

# Semitones within an octave → preferred spelling for display/building
_SEMITONE_TO_DEGREE: tuple[str, ...] = (
    "1",
    "b2",
    "2",
    "b3",
    "3",
    "4",
    "b5",
    "5",
    "b6",
    "6",
    "b7",
    "7",
)

_INTERVAL_RE = re.compile(r"^([#b]?)(\d+)$")
_OCTAVE_SPAN = 7  # diatonic degrees per octave


# ---------------------------------------------------------------------------
# Symbol resolution
# ---------------------------------------------------------------------------


def _canonical(symbol: str) -> str | None:
    """Return the canonical base-table key for ``symbol``, or None."""
    key = INTERVAL_ALIASES.get(symbol, symbol)
    return key if key in PYTHAGOREAN_RATIOS else None


def _decompose(symbol: str) -> tuple[str, int]:
    """
    Resolve an interval symbol to (canonical base key, octaves above it).

    Args:
        symbol: Stripped interval symbol, e.g. "5", "b9", "#11"

    Returns:
        (base_key, octaves) — e.g. "#11" → ("#4", 1), "15" → ("1", 2)

    Raises:
        UnknownSymbolError: INVALID_INTERVAL if the symbol is not
            accidental + digits; UNKNOWN_INTERVAL for a simple degree that is
            not in the table (no fallback) or a compound whose derived base
            interval is not in the table.
    """
    direct = _canonical(symbol)
    if direct is not None:
        return direct, 0

    match = _INTERVAL_RE.match(symbol)
    if match is None:
        raise UnknownSymbolError(ErrorKind.INVALID_INTERVAL, f"Invalid interval: {symbol}")

    accidental, digits = match.group(1), match.group(2)
    degree = int(digits)
    if degree <= 8:
        raise UnknownSymbolError(ErrorKind.UNKNOWN_INTERVAL, f"Unknown interval: {symbol}")

    octaves = (degree - 1) // _OCTAVE_SPAN
    base_symbol = f"{accidental}{((degree - 1) % _OCTAVE_SPAN) + 1}"
    base = _canonical(base_symbol)
    if base is None:
        raise UnknownSymbolError(
            ErrorKind.UNKNOWN_INTERVAL,
            f"Unknown compound interval: {symbol} (derived from {base_symbol})",
        )
    return base, octaves


# ---------------------------------------------------------------------------
# Pythagorean ratios
# ---------------------------------------------------------------------------


def interval_fraction(symbol: str) -> Fraction:
    """
    Exact Pythagorean ratio of an interval symbol.

    Args:
        symbol: e.g. "3", "b7", "9", "#11" (surrounding whitespace ignored)

    Returns:
        Fraction relative to the fundamental, e.g. "3" → 81/64, "9" → 9/4

    Raises:
        UnknownSymbolError: for unparseable or unknown symbols
    """
    base, octaves = _decompose(symbol.strip())
    return PYTHAGOREAN_RATIOS[base] * (2**octaves)


def interval_ratio(symbol: str) -> float:
    """Pythagorean ratio of ``symbol`` as a float (a single exact division)."""
    return float(interval_fraction(symbol))


# ---------------------------------------------------------------------------
# Equal temperament (comparison reference only)
# ---------------------------------------------------------------------------


def interval_semitones(symbol: str) -> int:
    """12-TET semitone count of ``symbol``, e.g. "5" → 7, "b9" → 13, "15" → 24."""
    base, octaves = _decompose(symbol.strip())
    return SEMITONES[base] + 12 * octaves


def equal_temperament_ratio(symbol: str) -> float:
    """12-TET frequency ratio of ``symbol``: 2 ** (semitones / 12)."""
    return 2 ** (interval_semitones(symbol) / 12)


def equal_temperament_frequency(fundamental: float, symbol: str) -> float:
    """
    Frequency of ``symbol`` above ``fundamental`` in 12-tone equal temperament.

    Used solely as the comparison reference for the Pythagorean output.

    Args:
        fundamental: Fundamental frequency in Hz
        symbol:      Interval symbol, e.g. "3"

    Returns:
        fundamental * 2 ** (semitones / 12)
    """
    return fundamental * equal_temperament_ratio(symbol)


# ---------------------------------------------------------------------------
# Inverse mapping (keyboard builder)
# ---------------------------------------------------------------------------


def semitones_to_scale_degree(semitones: int) -> str:
    """
    Spell a semitone distance above the fundamental as an interval symbol.

    Compound distances add 7 degrees per octave: 14 → "9", 17 → "11".
    The tritone is spelled "b5".

    Raises:
        UnknownSymbolError: for negative distances (notes below the fundamental)
    """
    if semitones < 0:
        raise UnknownSymbolError(
            ErrorKind.UNKNOWN_INTERVAL,
            f"Cannot spell {semitones} semitones: note is below the fundamental",
        )
    octaves, within = divmod(semitones, 12)
    degree = _SEMITONE_TO_DEGREE[within]
    if octaves == 0:
        return degree
    accidental = degree.rstrip("0123456789")
    number = int(degree[len(accidental) :])
    return f"{accidental}{number + octaves * _OCTAVE_SPAN}"
