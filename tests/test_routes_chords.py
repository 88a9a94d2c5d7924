"""
Tests for api/routes/chords.py.

Covers:
    GET  /health              — liveness
    GET  /chords/example      — example text
    POST /chords/parse        — frequencies and comparisons
    POST /chords/midi         — binary .mid response
    POST /chords/builder/line — keyboard selection → chord line

Strategy:
    - TestClient (synchronous) against the real FastAPI app.
    - Nothing is mocked: every route is pure core/ computation.
"""

from __future__ import annotations

import io

import mido
import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.sequence_parser import EXAMPLE_SEQUENCE

client = TestClient(app)


class TestHealth:
    def test_ok(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# GET /chords/example
# ---------------------------------------------------------------------------


class TestExample:
    def test_returns_example_text(self) -> None:
        resp = client.get("/chords/example")
        assert resp.status_code == 200
        assert resp.json()["text"] == EXAMPLE_SEQUENCE


# ---------------------------------------------------------------------------
# POST /chords/parse
# ---------------------------------------------------------------------------


class TestParse:
    def test_a_major(self) -> None:
        resp = client.post("/chords/parse", json={"text": "A4: 1,3,5, duration=2"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["count"] == 1
        chord = body["chords"][0]
        assert chord["fundamental"] == "A4"
        assert chord["fundamental_freq"] == 440.0
        assert chord["intervals"] == ["1", "3", "5"]
        assert chord["duration"] == 2.0
        assert [n["frequency"] for n in chord["pythagorean_notes"]] == [440.0, 556.875, 660.0]
        assert [n["ratio"] for n in chord["pythagorean_notes"]] == [1.0, 1.265625, 1.5]

    def test_comparisons(self) -> None:
        resp = client.post("/chords/parse", json={"text": "C4: 1,3,5"})
        rows = resp.json()["chords"][0]["comparisons"]
        assert [r["interval"] for r in rows] == ["1", "3", "5"]
        assert rows[1]["cents"] == pytest.approx(7.82, abs=0.01)

    def test_example_sequence(self) -> None:
        resp = client.post("/chords/parse", json={"text": EXAMPLE_SEQUENCE})
        assert resp.status_code == 200
        assert resp.json()["count"] == 9

    def test_format_error_is_422(self) -> None:
        resp = client.post("/chords/parse", json={"text": "C4: 1\nF4 1,3"})
        assert resp.status_code == 422
        assert resp.json()["detail"].startswith("Line 2: Invalid format: Missing colon")

    def test_unknown_interval_is_422(self) -> None:
        resp = client.post("/chords/parse", json={"text": "C4: 1,#5"})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Unknown interval: #5"

    def test_empty_sequence_is_422(self) -> None:
        resp = client.post("/chords/parse", json={"text": "# nothing"})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "No valid chords found in input"

    def test_missing_text_is_422(self) -> None:
        assert client.post("/chords/parse", json={}).status_code == 422


# ---------------------------------------------------------------------------
# POST /chords/midi
# ---------------------------------------------------------------------------


class TestMidi:
    def test_pythagorean_default(self) -> None:
        resp = client.post("/chords/midi", json={"text": "C4: 1,3,5"})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "audio/midi"
        assert 'filename="pythagorean_chords.mid"' in resp.headers["content-disposition"]
        mid = mido.MidiFile(file=io.BytesIO(resp.content))
        assert any(m.type == "pitchwheel" for m in mid.tracks[1])

    def test_equal_temperament(self) -> None:
        resp = client.post("/chords/midi", json={"text": "C4: 1,3,5", "tuning": "equal_temperament"})
        assert resp.status_code == 200
        assert 'filename="equal_temperament_chords.mid"' in resp.headers["content-disposition"]
        mid = mido.MidiFile(file=io.BytesIO(resp.content))
        assert not any(m.type == "pitchwheel" for m in mid.tracks[1])

    def test_tempo_applied(self) -> None:
        resp = client.post("/chords/midi", json={"text": "A4: 1", "tempo": 60})
        mid = mido.MidiFile(file=io.BytesIO(resp.content))
        assert mid.tracks[0][0].tempo == 1_000_000

    def test_very_slow_tempo_is_rendered(self) -> None:
        resp = client.post("/chords/midi", json={"text": "A4: 1", "tempo": 2})
        assert resp.status_code == 200
        mid = mido.MidiFile(file=io.BytesIO(resp.content))
        assert mid.tracks[0][0].tempo == 13_222_784

    def test_bytes_start_with_header(self) -> None:
        resp = client.post("/chords/midi", json={"text": "A4: 1"})
        assert resp.content[:4] == b"MThd"

    def test_invalid_sequence_is_422(self) -> None:
        assert client.post("/chords/midi", json={"text": "A4 1"}).status_code == 422

    @pytest.mark.parametrize(
        "payload",
        [
            {"text": "A4: 1", "tuning": "just"},
            {"text": "A4: 1", "tempo": 0},
            {"text": "A4: 1", "base_duration": -1},
        ],
    )
    def test_bad_parameters_are_422(self, payload: dict) -> None:
        assert client.post("/chords/midi", json=payload).status_code == 422


# ---------------------------------------------------------------------------
# POST /chords/builder/line
# ---------------------------------------------------------------------------


class TestBuilderLine:
    def test_major_triad(self) -> None:
        resp = client.post("/chords/builder/line", json={"fundamental": "C4", "notes": ["C4", "E4", "G4"]})
        assert resp.status_code == 200
        assert resp.json() == {"line": "C4: 1,3,5, duration=1", "text": "C4: 1,3,5, duration=1"}

    def test_appends_to_text(self) -> None:
        resp = client.post(
            "/chords/builder/line",
            json={"fundamental": "G4", "notes": ["B4", "D5"], "duration": 2, "text": "C4: 1,3,5"},
        )
        assert resp.json()["text"] == "C4: 1,3,5\nG4: 3,5, duration=2"

    def test_small_duration_round_trips_through_parse(self) -> None:
        resp = client.post(
            "/chords/builder/line",
            json={"fundamental": "C4", "notes": ["E4"], "duration": 0.00001},
        )
        line = resp.json()["line"]
        assert line == "C4: 3, duration=0.00001"
        parsed = client.post("/chords/parse", json={"text": line}).json()
        assert parsed["chords"][0]["duration"] == 0.00001

    def test_key_below_fundamental_is_422(self) -> None:
        resp = client.post("/chords/builder/line", json={"fundamental": "C4", "notes": ["A3"]})
        assert resp.status_code == 422
        assert "below the fundamental" in resp.json()["detail"]

    def test_unknown_key_is_422(self) -> None:
        resp = client.post("/chords/builder/line", json={"fundamental": "C4", "notes": ["X4"]})
        assert resp.status_code == 422

    def test_empty_notes_is_422(self) -> None:
        resp = client.post("/chords/builder/line", json={"fundamental": "C4", "notes": []})
        assert resp.status_code == 422
