"""
Shared fixtures for the test suite.

Centralizes reusable test infrastructure so individual test files
don't need to repeat parsing and environment boilerplate.
"""

from __future__ import annotations

import pytest

from core.sequence_parser import parse_chord_sequence
from core.tuning import resolve_sequence
from core.tuning.types import ResolvedChord

# ---------------------------------------------------------------------------
# Chord fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def c_major() -> tuple[ResolvedChord, ...]:
    """Resolved C4 major triad lasting two duration units."""
    return resolve_sequence(parse_chord_sequence("C4: 1,3,5, duration=2"))


@pytest.fixture()
def a_octaves() -> tuple[ResolvedChord, ...]:
    """A4 unison + octave: both notes land exactly on 12-TET pitches."""
    return resolve_sequence(parse_chord_sequence("A4: 1,8"))


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove CHORD_TOOL_* variables so defaults apply."""
    for name in ("CHORD_TOOL_TEMPO", "CHORD_TOOL_BASE_DURATION", "CHORD_TOOL_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
