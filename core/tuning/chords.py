"""
core/tuning/chords.py — Chords and sequences → Pythagorean and 12-TET frequencies.

Pure functions. A single unresolvable interval invalidates the whole chord;
a single bad chord invalidates the whole sequence.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from core.tuning.intervals import equal_temperament_frequency, interval_ratio
from core.tuning.notes import resolve_fundamental
from core.tuning.types import (
    ChordResult,
    EqualTemperamentNote,
    NoteComparison,
    ParsedChord,
    PythagoreanNote,
    ResolvedChord,
)


def cents_difference(freq_a: float, freq_b: float) -> float:
    """Signed distance in cents from ``freq_b`` to ``freq_a`` (positive = a is sharp)."""
    return 1200 * math.log2(freq_a / freq_b)


def chord_frequencies(fundamental: str | float, intervals: Sequence[str]) -> ChordResult:
    """
    Resolve every interval of a chord against its fundamental.

    Args:
        fundamental: Note name ("C4") or frequency ("440", 440.0)
        intervals:   Interval symbols in order, duplicates allowed

    Returns:
        ChordResult with Pythagorean and 12-TET notes in input order

    Raises:
        UnknownSymbolError: bad fundamental or any unknown interval
    """
    fundamental_freq = resolve_fundamental(fundamental)

    pythagorean: list[PythagoreanNote] = []
    equal: list[EqualTemperamentNote] = []
    for interval in intervals:
        ratio = interval_ratio(interval)
        pythagorean.append(
            PythagoreanNote(interval=interval, frequency=fundamental_freq * ratio, ratio=ratio)
        )
        equal.append(
            EqualTemperamentNote(
                interval=interval,
                frequency=equal_temperament_frequency(fundamental_freq, interval),
            )
        )

    return ChordResult(
        fundamental_freq=fundamental_freq,
        pythagorean_notes=tuple(pythagorean),
        equal_temperament_notes=tuple(equal),
    )


def compare_notes(result: ChordResult) -> tuple[NoteComparison, ...]:
    """Pair each Pythagorean note with its 12-TET counterpart and cents deviation."""
    return tuple(
        NoteComparison(
            interval=py.interval,
            ratio=py.ratio,
            pythagorean_freq=py.frequency,
            equal_temperament_freq=et.frequency,
            cents=cents_difference(py.frequency, et.frequency),
        )
        for py, et in zip(result.pythagorean_notes, result.equal_temperament_notes)
    )


def resolve_chord(chord: ParsedChord) -> ResolvedChord:
    """Compute the frequencies of one parsed chord."""
    return ResolvedChord(
        fundamental=chord.fundamental,
        duration=chord.duration,
        result=chord_frequencies(chord.fundamental, chord.intervals),
    )


def resolve_sequence(chords: Sequence[ParsedChord]) -> tuple[ResolvedChord, ...]:
    """Resolve a parsed sequence, preserving chord order."""
    return tuple(resolve_chord(chord) for chord in chords)
