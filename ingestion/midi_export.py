"""
ingestion/midi_export.py — Chord-sequence text → .mid files on disk.

This module is the I/O boundary of the pipeline:
    text → core/sequence_parser.py → core/tuning/ → core/midi.py → files

Usage:
    from ingestion.midi_export import export_chord_sequence
    result = export_chord_sequence(text, "out/")

    # or from the shell
    python -m ingestion.midi_export chords.txt --out-dir out/ --tempo 90
    echo "C4: 1,3,5" | chord-tool - --show-frequencies

Output files:
    pythagorean_chords.mid        Pythagorean tuning via per-note pitch bend
    equal_temperament_chords.mid  12-TET reference, no pitch bend

Environment (a .env file is honoured by the CLI):
    CHORD_TOOL_TEMPO          default tempo in BPM
    CHORD_TOOL_BASE_DURATION  default seconds per duration unit
    CHORD_TOOL_OUTPUT_DIR     default output directory
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from core.config import DEFAULT_CONFIG, ExportConfig
from core.errors import ChordToolError
from core.midi import generate_equal_temperament_midi, generate_pythagorean_midi
from core.sequence_parser import EXAMPLE_SEQUENCE, parse_chord_sequence
from core.tuning import compare_notes, resolve_sequence
from core.tuning.types import ResolvedChord
from infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PYTHAGOREAN_FILENAME: str = "pythagorean_chords.mid"
EQUAL_TEMPERAMENT_FILENAME: str = "equal_temperament_chords.mid"

ENV_TEMPO: str = "CHORD_TOOL_TEMPO"
ENV_BASE_DURATION: str = "CHORD_TOOL_BASE_DURATION"
ENV_OUTPUT_DIR: str = "CHORD_TOOL_OUTPUT_DIR"


@dataclass(frozen=True)
class ExportResult:
    """Paths written by export_chord_sequence() and the sequence they encode."""

    pythagorean_path: Path
    equal_temperament_path: Path
    chords: tuple[ResolvedChord, ...]

    @property
    def chord_count(self) -> int:
        return len(self.chords)


# ---------------------------------------------------------------------------
# Configuration from the environment
# ---------------------------------------------------------------------------


def _env_float(environ: Mapping[str, str], name: str) -> float | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return None


def load_export_config(environ: Mapping[str, str] | None = None) -> ExportConfig:
    """
    Build an ExportConfig from CHORD_TOOL_* environment variables.

    Unset, unparseable or out-of-range values fall back to DEFAULT_CONFIG
    with a warning.
    """
    env = os.environ if environ is None else environ
    overrides = {
        "tempo": _env_float(env, ENV_TEMPO),
        "base_duration": _env_float(env, ENV_BASE_DURATION),
    }
    config = DEFAULT_CONFIG
    for name, value in overrides.items():
        try:
            config = config.with_overrides(**{name: value})
        except ValueError as exc:
            logger.warning("Ignoring environment override for %s: %s", name, exc)
    return config


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def process_sequence(text: str) -> tuple[ResolvedChord, ...]:
    """Parse chord text and resolve every chord to frequencies.

    Raises:
        ChordToolError: the first parse or tuning failure, unchanged
    """
    resolved = resolve_sequence(parse_chord_sequence(text))
    logger.debug("Resolved %d chord(s)", len(resolved))
    return resolved


def write_midi(data: bytes, path: str | Path) -> Path:
    """Write MIDI bytes to ``path``, creating parent directories. Returns the path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    logger.info("Wrote %s (%d bytes)", target, len(data))
    return target


def export_chord_sequence(
    text: str,
    output_dir: str | Path,
    config: ExportConfig = DEFAULT_CONFIG,
) -> ExportResult:
    """Render chord text to both MIDI files in ``output_dir``.

    Args:
        text:       Chord sequence text (one chord per line)
        output_dir: Directory for the two .mid files; created if missing
        config:     Base duration and tempo

    Returns:
        ExportResult with both paths and the resolved chords

    Raises:
        ChordToolError: invalid sequence text (nothing is written)
        OSError: output_dir not writable
    """
    chords = process_sequence(text)
    out = Path(output_dir)

    pythagorean = generate_pythagorean_midi(chords, config.base_duration, config.tempo)
    equal = generate_equal_temperament_midi(chords, config.base_duration, config.tempo)

    result = ExportResult(
        pythagorean_path=write_midi(pythagorean, out / PYTHAGOREAN_FILENAME),
        equal_temperament_path=write_midi(equal, out / EQUAL_TEMPERAMENT_FILENAME),
        chords=chords,
    )
    logger.info(
        "Exported %d chord(s) at %.1f BPM, %.3fs per unit",
        result.chord_count,
        config.tempo,
        config.base_duration,
    )
    return result


# ---------------------------------------------------------------------------
# Frequency analysis table
# ---------------------------------------------------------------------------


def format_frequency_table(chords: Sequence[ResolvedChord]) -> str:
    """Render the Pythagorean vs 12-TET comparison for every chord as plain text."""
    lines: list[str] = []
    for number, chord in enumerate(chords, start=1):
        if lines:
            lines.append("")
        lines.append(
            f"{number}. Chord: {chord.fundamental} ({chord.fundamental_freq:.2f} Hz)"
            f" - Duration: {chord.duration:g}"
        )
        lines.append(f"   {'Interval':<9}{'Ratio':>10}{'Pythagorean':>14}{'Equal Temp.':>14}{'Cents':>9}")
        for row in compare_notes(chord.result):
            lines.append(
                f"   {row.interval:<9}{row.ratio:>10.4f}"
                f"{row.pythagorean_freq:>11.2f} Hz{row.equal_temperament_freq:>11.2f} Hz"
                f"{row.cents:>+9.2f}"
            )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chord-tool",
        description="Render a chord sequence to Pythagorean and equal-temperament MIDI files.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Chord sequence file, or '-' for stdin.",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Use the built-in example sequence instead of an input file.",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help=f"Output directory (default: ${ENV_OUTPUT_DIR} or the current directory).",
    )
    parser.add_argument("--tempo", type=float, default=None, help="Tempo in BPM.")
    parser.add_argument(
        "--base-duration",
        type=float,
        default=None,
        help="Seconds per duration unit.",
    )
    parser.add_argument(
        "--show-frequencies",
        action="store_true",
        help="Print the frequency comparison table to stdout.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and run the export. Returns the process exit code."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.example and args.input is None:
        parser.error("an input file (or '-') is required unless --example is given")

    try:
        config = load_export_config().with_overrides(
            tempo=args.tempo, base_duration=args.base_duration
        )
    except ValueError as exc:
        parser.error(str(exc))

    output_dir = args.out_dir or os.getenv(ENV_OUTPUT_DIR) or "."

    try:
        text = EXAMPLE_SEQUENCE if args.example else _read_input(args.input)
        result = export_chord_sequence(text, output_dir, config)
    except ChordToolError as exc:
        logger.error("Invalid chord sequence: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        logger.error("Export failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.show_frequencies:
        print(format_frequency_table(result.chords))
    return 0


if __name__ == "__main__":
    sys.exit(main())
