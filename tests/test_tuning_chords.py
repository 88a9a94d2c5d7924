"""
Tests for core/tuning/chords.py and core/tuning/types.py.

Tests cover:
    - chord_frequencies: Pythagorean + 12-TET notes, order, duplicates
    - cents_difference: sign, zero, antisymmetry
    - compare_notes: frequency analysis rows
    - resolve_sequence: ParsedChord → ResolvedChord
    - Value objects are frozen
"""

from __future__ import annotations

import dataclasses

import pytest

from core.errors import UnknownSymbolError
from core.tuning import (
    ParsedChord,
    cents_difference,
    chord_frequencies,
    compare_notes,
    resolve_chord,
    resolve_sequence,
)

# ---------------------------------------------------------------------------
# cents_difference
# ---------------------------------------------------------------------------


class TestCentsDifference:
    @pytest.mark.parametrize("freq", [27.5, 261.6256, 440.0, 4186.0])
    def test_same_frequency_is_zero(self, freq: float) -> None:
        assert cents_difference(freq, freq) == 0

    def test_octave_is_1200(self) -> None:
        assert cents_difference(880.0, 440.0) == pytest.approx(1200.0)

    def test_sharp_is_positive(self) -> None:
        assert cents_difference(441.0, 440.0) > 0

    @pytest.mark.parametrize(("a", "b"), [(440.0, 466.16), (261.63, 392.0), (100.0, 99.0)])
    def test_antisymmetric(self, a: float, b: float) -> None:
        assert cents_difference(a, b) == pytest.approx(-cents_difference(b, a))

    def test_pythagorean_third_is_sharp_of_tempered(self) -> None:
        assert cents_difference(81 / 64, 2 ** (4 / 12)) == pytest.approx(7.82, abs=0.01)


# ---------------------------------------------------------------------------
# chord_frequencies
# ---------------------------------------------------------------------------


class TestChordFrequencies:
    def test_a_major_pythagorean(self) -> None:
        result = chord_frequencies("A4", ["1", "3", "5"])
        assert result.fundamental_freq == 440
        assert result.frequencies == (440.0, 556.875, 660.0)

    def test_ratios_recorded(self) -> None:
        result = chord_frequencies("A4", ["1", "3", "5"])
        assert [n.ratio for n in result.pythagorean_notes] == [1.0, 81 / 64, 1.5]

    def test_equal_temperament_reference(self) -> None:
        result = chord_frequencies("A4", ["1", "5", "8"])
        et = [n.frequency for n in result.equal_temperament_notes]
        assert et[0] == 440.0
        assert et[1] == pytest.approx(659.2551, abs=1e-3)
        assert et[2] == 880.0

    def test_numeric_fundamental(self) -> None:
        result = chord_frequencies("440", ["5"])
        assert result.fundamental_freq == 440.0
        assert result.frequencies == (660.0,)

    def test_float_fundamental(self) -> None:
        result = chord_frequencies(100.0, ["8", "15"])
        assert result.frequencies == (200.0, 400.0)

    def test_order_and_duplicates_preserved(self) -> None:
        result = chord_frequencies("A4", ["5", "1", "5"])
        assert result.intervals == ("5", "1", "5")
        assert result.frequencies == (660.0, 440.0, 660.0)

    def test_note_orders_match(self) -> None:
        result = chord_frequencies("C4", ["1", "b3", "5", "b7", "9"])
        assert [n.interval for n in result.equal_temperament_notes] == list(result.intervals)

    def test_unknown_interval_fails_whole_chord(self) -> None:
        with pytest.raises(UnknownSymbolError, match="Unknown interval: #5"):
            chord_frequencies("C4", ["1", "3", "#5"])

    def test_invalid_fundamental(self) -> None:
        with pytest.raises(UnknownSymbolError, match="Invalid fundamental: X9"):
            chord_frequencies("X9", ["1"])


# ---------------------------------------------------------------------------
# compare_notes
# ---------------------------------------------------------------------------


class TestCompareNotes:
    def test_rows_follow_interval_order(self) -> None:
        rows = compare_notes(chord_frequencies("C4", ["1", "3", "5"]))
        assert [r.interval for r in rows] == ["1", "3", "5"]

    def test_cents_values(self) -> None:
        rows = compare_notes(chord_frequencies("C4", ["1", "b3", "3", "5"]))
        cents = [round(r.cents, 2) for r in rows]
        assert cents == [0.0, -5.87, 7.82, 1.96]

    def test_unison_and_octave_are_pure(self) -> None:
        rows = compare_notes(chord_frequencies("A4", ["1", "8"]))
        assert all(r.cents == pytest.approx(0.0, abs=1e-9) for r in rows)


# ---------------------------------------------------------------------------
# resolve_sequence
# ---------------------------------------------------------------------------


class TestResolveSequence:
    def test_resolved_chord_exposes_encoder_fields(self) -> None:
        resolved = resolve_chord(ParsedChord("A4", ("1", "5"), 2.0))
        assert resolved.duration == 2.0
        assert resolved.fundamental == "A4"
        assert resolved.fundamental_freq == 440
        assert [n.frequency for n in resolved.pythagorean_notes] == [440.0, 660.0]
        assert len(resolved.equal_temperament_notes) == 2

    def test_preserves_order(self) -> None:
        chords = (
            ParsedChord("C4", ("1",), 1.0),
            ParsedChord("F4", ("1",), 1.0),
            ParsedChord("G4", ("1",), 1.0),
        )
        assert [c.fundamental for c in resolve_sequence(chords)] == ["C4", "F4", "G4"]

    def test_first_bad_chord_fails(self) -> None:
        chords = (ParsedChord("C4", ("1",), 1.0), ParsedChord("C4", ("#9",), 1.0))
        with pytest.raises(UnknownSymbolError):
            resolve_sequence(chords)


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


class TestValueObjects:
    def test_parsed_chord_is_frozen(self) -> None:
        chord = ParsedChord("C4", ("1",), 1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            chord.duration = 2.0  # type: ignore[misc]

    def test_parsed_chord_stores_tuple(self) -> None:
        chord = ParsedChord("C4", ["1", "3"], 1.0)  # type: ignore[arg-type]
        assert chord.intervals == ("1", "3")

    def test_chord_result_is_frozen(self) -> None:
        result = chord_frequencies("A4", ["1"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.fundamental_freq = 1.0  # type: ignore[misc]
