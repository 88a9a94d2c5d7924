"""
core/tuning/ — Pure Pythagorean tuning engine.

Exports:
    Types:     ParsedChord, PythagoreanNote, EqualTemperamentNote,
               NoteComparison, ChordResult, ResolvedChord
    Notes:     note_name_to_frequency, resolve_fundamental
    Intervals: interval_ratio, interval_fraction, interval_semitones,
               equal_temperament_ratio, equal_temperament_frequency,
               semitones_to_scale_degree
    Chords:    chord_frequencies, cents_difference, compare_notes,
               resolve_chord, resolve_sequence
"""

from core.tuning.chords import (
    cents_difference,
    chord_frequencies,
    compare_notes,
    resolve_chord,
    resolve_sequence,
)
from core.tuning.intervals import (
    equal_temperament_frequency,
    equal_temperament_ratio,
    interval_fraction,
    interval_ratio,
    interval_semitones,
    semitones_to_scale_degree,
)
from core.tuning.notes import note_name_to_frequency, resolve_fundamental
from core.tuning.types import (
    ChordResult,
    EqualTemperamentNote,
    NoteComparison,
    ParsedChord,
    PythagoreanNote,
    ResolvedChord,
)

__all__ = [
    # Types
    "ParsedChord",
    "PythagoreanNote",
    "EqualTemperamentNote",
    "NoteComparison",
    "ChordResult",
    "ResolvedChord",
    # Notes
    "note_name_to_frequency",
    "resolve_fundamental",
    # Intervals
    "interval_ratio",
    "interval_fraction",
    "interval_semitones",
    "equal_temperament_ratio",
    "equal_temperament_frequency",
    "semitones_to_scale_degree",
    # Chords
    "chord_frequencies",
    "cents_difference",
    "compare_notes",
    "resolve_chord",
    "resolve_sequence",
]
