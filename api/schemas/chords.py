"""
api/schemas/chords.py — Pydantic request/response schemas for chord endpoints.

Covers:
    /chords/example        — ExampleResponse
    /chords/parse          — ParseRequest / ParseResponse
    /chords/midi           — MidiExportRequest (binary response)
    /chords/builder/line   — BuilderLineRequest / BuilderLineResponse
"""

from typing import Literal

from pydantic import BaseModel, Field

Tuning = Literal["pythagorean", "equal_temperament"]

# ---------------------------------------------------------------------------
# Shared sub-schemas
# ---------------------------------------------------------------------------


class PythagoreanNoteOut(BaseModel):
    """A single interval resolved in Pythagorean tuning."""

    interval: str
    frequency: float = Field(..., gt=0.0)
    ratio: float = Field(..., gt=0.0)


class EqualTemperamentNoteOut(BaseModel):
    """The 12-TET reference for one interval."""

    interval: str
    frequency: float = Field(..., gt=0.0)


class ComparisonOut(BaseModel):
    """One row of the frequency analysis table."""

    interval: str
    ratio: float
    pythagorean_freq: float
    equal_temperament_freq: float
    cents: float


class ChordOut(BaseModel):
    """A parsed chord with its computed frequencies."""

    fundamental: str
    fundamental_freq: float
    intervals: list[str]
    duration: float
    pythagorean_notes: list[PythagoreanNoteOut]
    equal_temperament_notes: list[EqualTemperamentNoteOut]
    comparisons: list[ComparisonOut]


# ---------------------------------------------------------------------------
# /chords/example
# ---------------------------------------------------------------------------


class ExampleResponse(BaseModel):
    """Response body for GET /chords/example."""

    text: str


# ---------------------------------------------------------------------------
# /chords/parse
# ---------------------------------------------------------------------------


class ParseRequest(BaseModel):
    """Request body for POST /chords/parse."""

    text: str = Field(
        ...,
        description='Chord sequence, one chord per line, e.g. "C4: 1,3,5, duration=2".',
    )


class ParseResponse(BaseModel):
    """Response body for POST /chords/parse."""

    count: int = Field(..., ge=1)
    chords: list[ChordOut]


# ---------------------------------------------------------------------------
# /chords/midi
# ---------------------------------------------------------------------------


class MidiExportRequest(BaseModel):
    """Request body for POST /chords/midi."""

    text: str
    tuning: Tuning = Field(
        default="pythagorean",
        description="'pythagorean' (pitch-bent) or 'equal_temperament' (reference).",
    )
    base_duration: float = Field(
        default=1.0,
        gt=0.0,
        le=60.0,
        description="Seconds per chord duration unit.",
    )
    tempo: float = Field(default=120.0, gt=0.0, le=960.0, description="Tempo in BPM.")


# ---------------------------------------------------------------------------
# /chords/builder/line
# ---------------------------------------------------------------------------


class BuilderLineRequest(BaseModel):
    """Request body for POST /chords/builder/line — keyboard selection to text."""

    fundamental: str = Field(..., min_length=1, description='Fundamental key, e.g. "C4".')
    notes: list[str] = Field(..., min_length=1, description='Selected keys, e.g. ["E4", "G4"].')
    duration: float = Field(default=1.0, gt=0.0)
    text: str = Field(default="", description="Existing sequence text to append to.")


class BuilderLineResponse(BaseModel):
    """Response body for POST /chords/builder/line."""

    line: str
    text: str
