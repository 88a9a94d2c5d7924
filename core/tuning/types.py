"""
core/tuning/types.py — Frozen value objects for the tuning engine.

All types are immutable frozen dataclasses, computed in one pass per parse and
replaced wholesale (never mutated) by the next one.

Types:
    ParsedChord           — one chord line as written: fundamental token, intervals, duration
    PythagoreanNote       — an interval resolved to a Pythagorean frequency and ratio
    EqualTemperamentNote  — the same interval in 12-TET, for comparison
    NoteComparison        — one Pythagorean/12-TET pair with its cents deviation
    ChordResult           — all notes of one chord over a resolved fundamental
    ResolvedChord         — a ParsedChord paired with its ChordResult
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# ParsedChord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedChord:
    """A chord exactly as written in the sequence text.

    Attributes:
        fundamental: Raw fundamental token, e.g. "C4", "C#3" or "440"
        intervals:   Interval symbols in written order, duplicates kept,
                     e.g. ("1", "b3", "5")
        duration:    Duration multiplier (> 0), scaled by the base duration
    """

    fundamental: str
    intervals: tuple[str, ...]
    duration: float = 1.0

    def __post_init__(self) -> None:
        # Accept any sequence from callers but always store a tuple.
        if not isinstance(self.intervals, tuple):
            object.__setattr__(self, "intervals", tuple(self.intervals))


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PythagoreanNote:
    """An interval resolved against a fundamental in Pythagorean tuning."""

    interval: str  # e.g. "b7"
    frequency: float  # Hz
    ratio: float  # multiplier relative to the fundamental, e.g. 16/9


@dataclass(frozen=True)
class EqualTemperamentNote:
    """The 12-TET counterpart of a PythagoreanNote."""

    interval: str
    frequency: float  # Hz


@dataclass(frozen=True)
class NoteComparison:
    """One row of the frequency analysis table.

    Attributes:
        interval:               Interval symbol, e.g. "3"
        ratio:                  Pythagorean ratio, e.g. 1.265625 (81/64)
        pythagorean_freq:       Pythagorean frequency in Hz
        equal_temperament_freq: 12-TET frequency in Hz
        cents:                  Signed deviation, positive = Pythagorean sharp
    """

    interval: str
    ratio: float
    pythagorean_freq: float
    equal_temperament_freq: float
    cents: float


# ---------------------------------------------------------------------------
# ChordResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordResult:
    """All notes of one chord over a resolved fundamental frequency.

    Note order matches the input interval order in both tuples.
    """

    fundamental_freq: float
    pythagorean_notes: tuple[PythagoreanNote, ...]
    equal_temperament_notes: tuple[EqualTemperamentNote, ...] = field(default_factory=tuple)

    @property
    def frequencies(self) -> tuple[float, ...]:
        """Pythagorean frequencies in interval order (what playback consumes)."""
        return tuple(n.frequency for n in self.pythagorean_notes)

    @property
    def intervals(self) -> tuple[str, ...]:
        return tuple(n.interval for n in self.pythagorean_notes)


# ---------------------------------------------------------------------------
# ResolvedChord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedChord:
    """A parsed chord together with its computed frequencies.

    This is the unit the MIDI encoder and the playback collaborator consume:
    it exposes ``duration``, ``pythagorean_notes`` and ``equal_temperament_notes``.
    """

    fundamental: str
    duration: float
    result: ChordResult

    @property
    def fundamental_freq(self) -> float:
        return self.result.fundamental_freq

    @property
    def intervals(self) -> tuple[str, ...]:
        return self.result.intervals

    @property
    def pythagorean_notes(self) -> tuple[PythagoreanNote, ...]:
        return self.result.pythagorean_notes

    @property
    def equal_temperament_notes(self) -> tuple[EqualTemperamentNote, ...]:
        return self.result.equal_temperament_notes

    @property
    def frequencies(self) -> tuple[float, ...]:
        return self.result.frequencies
