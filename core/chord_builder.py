"""
core/chord_builder.py — Build chord lines from piano-keyboard selections.

The keyboard flow: the first key pressed becomes the fundamental, later keys
toggle chord tones on and off, and "add to sequence" writes the selection as
a chord line ("C4: 1,3,5, duration=1").

Session state is an immutable BuilderState; every transition is a pure
function returning a new state, so the UI layer holds the only reference.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal

from core.errors import ErrorKind, FormatError
from core.sequence_parser import validate_chord
from core.tuning.intervals import semitones_to_scale_degree
from core.tuning.notes import note_name_to_frequency
from core.tuning.types import ParsedChord


@dataclass(frozen=True)
class BuilderState:
    """Keyboard selection: a fundamental key plus toggled chord-tone keys."""

    fundamental: str | None = None
    selected: tuple[str, ...] = ()


def select_key(state: BuilderState, note: str) -> BuilderState:
    """First key sets the fundamental; later keys toggle in or out of the selection."""
    if state.fundamental is None:
        return BuilderState(fundamental=note)
    if note in state.selected:
        return replace(state, selected=tuple(n for n in state.selected if n != note))
    return replace(state, selected=state.selected + (note,))


def new_chord(state: BuilderState) -> BuilderState:
    """Discard the current selection and start over."""
    return BuilderState()


def to_parsed_chord(state: BuilderState, duration: float = 1.0) -> ParsedChord:
    """
    Convert the selection into a chord record.

    Selected notes are ordered by pitch, measured in whole semitones from the
    fundamental and spelled as scale degrees (a 3rd is "3", a tritone "b5",
    a 9th "9").

    Raises:
        FormatError: no fundamental or no selected notes, or invalid duration
        UnknownSymbolError: a selected note below the fundamental
    """
    if state.fundamental is None:
        raise FormatError(ErrorKind.MISSING_FUNDAMENTAL, "Select a fundamental first")
    if not state.selected:
        raise FormatError(
            ErrorKind.NO_INTERVALS_SPECIFIED,
            "Please select fundamental and at least one interval note",
        )

    fundamental_freq = note_name_to_frequency(state.fundamental)
    ordered = sorted(state.selected, key=note_name_to_frequency)
    intervals = tuple(
        semitones_to_scale_degree(round(12 * math.log2(note_name_to_frequency(n) / fundamental_freq)))
        for n in ordered
    )

    chord = ParsedChord(fundamental=state.fundamental, intervals=intervals, duration=duration)
    validate_chord(chord)
    return chord


def _format_duration(duration: float) -> str:
    # Plain positional decimal: the duration pattern has no exponent form.
    text = format(Decimal(repr(duration)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def chord_line(state: BuilderState, duration: float = 1.0) -> str:
    """Render the selection as a sequence line, e.g. "C4: 1,3,5, duration=1"."""
    chord = to_parsed_chord(state, duration)
    return f"{chord.fundamental}: {','.join(chord.intervals)}, duration={_format_duration(chord.duration)}"


def append_chord_line(text: str, state: BuilderState, duration: float = 1.0) -> str:
    """Append the selection's chord line to existing sequence text."""
    line = chord_line(state, duration)
    return f"{text}\n{line}" if text else line
