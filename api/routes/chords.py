"""
api/routes/chords.py — Chord sequence endpoints.

Endpoints:
    GET  /chords/example       — Example sequence text
    POST /chords/parse         — Text → chords with Pythagorean and 12-TET frequencies
    POST /chords/midi          — Text → .mid file (Pythagorean or 12-TET)
    POST /chords/builder/line  — Keyboard selection → chord line

No database, no external services — pure core/ computation. Parse and tuning
errors are returned as 422 with the message verbatim.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from api.schemas.chords import (
    BuilderLineRequest,
    BuilderLineResponse,
    ChordOut,
    ComparisonOut,
    EqualTemperamentNoteOut,
    ExampleResponse,
    MidiExportRequest,
    ParseRequest,
    ParseResponse,
    PythagoreanNoteOut,
)
from core.chord_builder import BuilderState, append_chord_line, chord_line, select_key
from core.errors import ChordToolError
from core.midi import generate_equal_temperament_midi, generate_pythagorean_midi
from core.sequence_parser import EXAMPLE_SEQUENCE
from core.tuning import compare_notes
from core.tuning.types import ResolvedChord
from ingestion.midi_export import (
    EQUAL_TEMPERAMENT_FILENAME,
    PYTHAGOREAN_FILENAME,
    process_sequence,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chords", tags=["chords"])

MIDI_MEDIA_TYPE = "audio/midi"


def _chord_out(chord: ResolvedChord) -> ChordOut:
    return ChordOut(
        fundamental=chord.fundamental,
        fundamental_freq=chord.fundamental_freq,
        intervals=list(chord.intervals),
        duration=chord.duration,
        pythagorean_notes=[
            PythagoreanNoteOut(interval=n.interval, frequency=n.frequency, ratio=n.ratio)
            for n in chord.pythagorean_notes
        ],
        equal_temperament_notes=[
            EqualTemperamentNoteOut(interval=n.interval, frequency=n.frequency)
            for n in chord.equal_temperament_notes
        ],
        comparisons=[
            ComparisonOut(
                interval=row.interval,
                ratio=row.ratio,
                pythagorean_freq=row.pythagorean_freq,
                equal_temperament_freq=row.equal_temperament_freq,
                cents=row.cents,
            )
            for row in compare_notes(chord.result)
        ],
    )


def _process(text: str) -> tuple[ResolvedChord, ...]:
    try:
        return process_sequence(text)
    except ChordToolError as exc:
        logger.info("Rejected chord sequence (%s): %s", exc.kind.value, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# GET /chords/example
# ---------------------------------------------------------------------------


@router.get("/example", response_model=ExampleResponse)
def get_example() -> ExampleResponse:
    """Return the built-in example chord sequence."""
    return ExampleResponse(text=EXAMPLE_SEQUENCE)


# ---------------------------------------------------------------------------
# POST /chords/parse
# ---------------------------------------------------------------------------


@router.post("/parse", response_model=ParseResponse)
def parse_chords(request: ParseRequest) -> ParseResponse:
    """Parse a chord sequence and compute its frequencies.

    Raises:
        422: Malformed line, unknown symbol, or empty sequence.
    """
    chords = _process(request.text)
    logger.info("Parsed %d chord(s)", len(chords))
    return ParseResponse(count=len(chords), chords=[_chord_out(c) for c in chords])


# ---------------------------------------------------------------------------
# POST /chords/midi
# ---------------------------------------------------------------------------


@router.post("/midi", response_class=Response)
def export_midi(request: MidiExportRequest) -> Response:
    """Render a chord sequence to a Standard MIDI File.

    The Pythagorean file needs a ±2 semitone pitch-bend range on the synth.

    Raises:
        422: Invalid chord sequence or parameters.
    """
    chords = _process(request.text)

    if request.tuning == "pythagorean":
        data = generate_pythagorean_midi(chords, request.base_duration, request.tempo)
        filename = PYTHAGOREAN_FILENAME
    else:
        data = generate_equal_temperament_midi(chords, request.base_duration, request.tempo)
        filename = EQUAL_TEMPERAMENT_FILENAME

    logger.info("Rendered %s MIDI: %d chord(s), %d bytes", request.tuning, len(chords), len(data))
    return Response(
        content=data,
        media_type=MIDI_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# POST /chords/builder/line
# ---------------------------------------------------------------------------


@router.post("/builder/line", response_model=BuilderLineResponse)
def build_line(request: BuilderLineRequest) -> BuilderLineResponse:
    """Turn a piano-keyboard selection into a chord line and append it to text.

    Raises:
        422: Unknown key name or a key below the fundamental.
    """
    state = BuilderState()
    for note in [request.fundamental, *request.notes]:
        state = select_key(state, note)

    try:
        line = chord_line(state, request.duration)
        text = append_chord_line(request.text, state, request.duration)
    except ChordToolError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return BuilderLineResponse(line=line, text=text)
