"""
core/midi.py — Resolved chords → Standard MIDI File bytes.

Renders a chord sequence twice: once in Pythagorean tuning (each note bent
away from its nearest 12-TET pitch with a pitch-wheel message) and once in
plain equal temperament as a reference. No I/O: returns bytes; writing files
is ingestion/midi_export.py's job.

Design:
    - SMF format 1, 480 ticks per quarter note, exactly two tracks
    - Track 0: set-tempo meta event, end-of-track
    - Track 1: for each chord, (pitch bend +) note-on per note at delta 0,
      then note-offs; only the first note-off carries the chord length
    - Note i of a chord plays on channel min(i, 15), so per-note bends do not
      collide; notes 17+ share channel 15
    - Pitch bend assumes a ±2 semitone (±200 cent) bend range on the receiver
    - Channel and meta messages are encoded with mido, one status byte per
      event (no running status); core/smf.py writes VLQs and chunks

The encoder trusts its input: frequencies and durations are not validated.
Out-of-range note numbers are masked to 7 bits and the set-tempo value to
24 bits, so the file stays well formed for any positive tempo.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import mido

from core.smf import DEFAULT_DIVISION, MidiEvent, encode_midi_file

# ---------------------------------------------------------------------------
# MIDI constants
# ---------------------------------------------------------------------------

TICKS_PER_QUARTER: int = DEFAULT_DIVISION
A4_MIDI_NOTE: int = 69
A4_FREQUENCY: float = 440.0
NOTE_VELOCITY: int = 80
MAX_CHANNEL: int = 15

PITCH_BEND_CENTER: int = 8192
PITCH_BEND_MAX: int = 16383
PITCH_BEND_RANGE_CENTS: float = 200.0  # ±2 semitones
PITCH_BEND_THRESHOLD_CENTS: float = 0.5
"""Notes within this many cents of a semitone get no pitch-bend message."""

_MICROSECONDS_PER_MINUTE: int = 60_000_000
TEMPO_MASK: int = 0xFFFFFF
"""Set-tempo carries 3 data bytes; slower than ~3.58 BPM wraps."""


# ---------------------------------------------------------------------------
# Input protocols
# ---------------------------------------------------------------------------


class FrequencyNote(Protocol):
    @property
    def frequency(self) -> float: ...


class PythagoreanChord(Protocol):
    """Anything with a duration multiplier and Pythagorean notes (e.g. ResolvedChord)."""

    @property
    def duration(self) -> float: ...

    @property
    def pythagorean_notes(self) -> Sequence[FrequencyNote]: ...


class EqualTemperamentChord(Protocol):
    @property
    def duration(self) -> float: ...

    @property
    def equal_temperament_notes(self) -> Sequence[FrequencyNote]: ...


# ---------------------------------------------------------------------------
# Frequency → MIDI pitch
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MidiPitch:
    """Nearest MIDI note plus the remaining deviation in cents (-50..+50)."""

    note: int
    cents: float


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def frequency_to_midi(frequency: float) -> MidiPitch:
    """
    Map a frequency to its nearest MIDI note and cents deviation.

    midi_float = 69 + 12 * log2(f / 440); note = round(midi_float);
    cents = (midi_float - note) * 100.

    Example:
        >>> frequency_to_midi(440.0)
        MidiPitch(note=69, cents=0.0)
    """
    midi_float = A4_MIDI_NOTE + 12 * math.log2(frequency / A4_FREQUENCY)
    note = _round_half_up(midi_float)
    return MidiPitch(note=note, cents=(midi_float - note) * 100)


def cents_to_pitch_bend(cents: float) -> int:
    """
    Quantize a cents deviation to a 14-bit pitch-bend value.

    Centered at 8192 with a ±200 cent range, clamped to [0, 16383].
    """
    value = _round_half_up(PITCH_BEND_CENTER + cents / PITCH_BEND_RANGE_CENTS * PITCH_BEND_CENTER)
    return max(0, min(PITCH_BEND_MAX, value))


def tempo_to_microseconds(tempo: float) -> int:
    """BPM → microseconds per quarter note, e.g. 120 → 500_000."""
    return _round_half_up(_MICROSECONDS_PER_MINUTE / tempo)


def duration_to_ticks(duration: float, base_duration: float, tempo: float) -> int:
    """
    Chord length in ticks.

    ticks = duration × base_duration (s) × 480 × tempo / 60, never negative.
    """
    ticks_per_second = TICKS_PER_QUARTER * tempo / 60
    return max(0, _round_half_up(duration * base_duration * ticks_per_second))


# ---------------------------------------------------------------------------
# Event builders
# ---------------------------------------------------------------------------


def _channel_for(note_index: int) -> int:
    return min(note_index, MAX_CHANNEL)


def _event(delta_ticks: int, message: mido.Message | mido.MetaMessage) -> MidiEvent:
    return MidiEvent(delta_ticks=delta_ticks, data=bytes(message.bytes()))


def _tempo_track(tempo: float) -> list[MidiEvent]:
    return [
        _event(0, mido.MetaMessage("set_tempo", tempo=tempo_to_microseconds(tempo) & TEMPO_MASK)),
        _event(0, mido.MetaMessage("end_of_track")),
    ]


def _note_track(
    chords: Sequence[tuple[Sequence[float], float]],
    *,
    base_duration: float,
    tempo: float,
    pitch_bend: bool,
) -> list[MidiEvent]:
    """
    Build the note track from (frequencies, duration multiplier) pairs.

    All notes of a chord start together and stop together: note-ons at
    delta 0, first note-off after the chord length, the rest at delta 0.
    """
    events: list[MidiEvent] = []

    for frequencies, duration in chords:
        pitches = [frequency_to_midi(f) for f in frequencies]

        for index, pitch in enumerate(pitches):
            channel = _channel_for(index)
            if pitch_bend and abs(pitch.cents) > PITCH_BEND_THRESHOLD_CENTS:
                bend = cents_to_pitch_bend(pitch.cents)
                events.append(
                    _event(0, mido.Message("pitchwheel", channel=channel, pitch=bend - PITCH_BEND_CENTER))
                )
            events.append(
                _event(
                    0,
                    mido.Message(
                        "note_on", channel=channel, note=pitch.note & 0x7F, velocity=NOTE_VELOCITY
                    ),
                )
            )

        length = duration_to_ticks(duration, base_duration, tempo)
        for index, pitch in enumerate(pitches):
            events.append(
                _event(
                    length if index == 0 else 0,
                    mido.Message("note_off", channel=_channel_for(index), note=pitch.note & 0x7F, velocity=0),
                )
            )

    events.append(_event(0, mido.MetaMessage("end_of_track")))
    return events


def _render(
    chords: Sequence[tuple[Sequence[float], float]],
    *,
    base_duration: float,
    tempo: float,
    pitch_bend: bool,
) -> bytes:
    tracks = [
        _tempo_track(tempo),
        _note_track(chords, base_duration=base_duration, tempo=tempo, pitch_bend=pitch_bend),
    ]
    return encode_midi_file(tracks, division=TICKS_PER_QUARTER)


# ---------------------------------------------------------------------------
# Public generators
# ---------------------------------------------------------------------------


def generate_pythagorean_midi(
    chords: Sequence[PythagoreanChord],
    base_duration: float = 1.0,
    tempo: float = 120.0,
) -> bytes:
    """
    Render chords in Pythagorean tuning using per-note pitch bend.

    Args:
        chords:        Resolved chords (``duration`` + ``pythagorean_notes``)
        base_duration: Seconds per duration unit (default 1.0)
        tempo:         Tempo in BPM (default 120)

    Returns:
        SMF format 1 file bytes. Play back with a ±2 semitone bend range.
    """
    pairs = [([n.frequency for n in c.pythagorean_notes], c.duration) for c in chords]
    return _render(pairs, base_duration=base_duration, tempo=tempo, pitch_bend=True)


def generate_equal_temperament_midi(
    chords: Sequence[EqualTemperamentChord],
    base_duration: float = 1.0,
    tempo: float = 120.0,
) -> bytes:
    """Render the 12-TET reference version of the same chords (no pitch bend)."""
    pairs = [([n.frequency for n in c.equal_temperament_notes], c.duration) for c in chords]
    return _render(pairs, base_duration=base_duration, tempo=tempo, pitch_bend=False)
