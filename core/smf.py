"""
core/smf.py — Standard MIDI File container encoding.

Byte-level layer of the MIDI encoder: a growable big-endian writer,
variable-length quantities, and header/track chunks. Knows nothing about
chords or tuning; core/midi.py builds the events that go in here.

File layout:
    "MThd" | len=6 (u32) | format (u16) | track count (u16) | division (u16)
    "MTrk" | len (u32)   | <delta VLQ><event bytes> ...      (one per track)

All multi-byte integers are big-endian.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

HEADER_ID: bytes = b"MThd"
TRACK_ID: bytes = b"MTrk"
HEADER_LENGTH: int = 6
DEFAULT_DIVISION: int = 480
"""Ticks per quarter note."""

FORMAT_MULTI_TRACK: int = 1
"""SMF format 1: several tracks played simultaneously."""

END_OF_TRACK: bytes = b"\xff\x2f\x00"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MidiEvent:
    """One track event: ticks since the previous event plus its raw bytes."""

    delta_ticks: int
    data: bytes

    def __post_init__(self) -> None:
        if self.delta_ticks < 0:
            raise ValueError(f"delta_ticks must be non-negative, got {self.delta_ticks}")


# ---------------------------------------------------------------------------
# Variable-length quantities
# ---------------------------------------------------------------------------


def encode_vlq(value: int) -> bytes:
    """
    Encode a non-negative integer as a MIDI variable-length quantity.

    7 bits per byte, most significant group first; every byte except the
    last has its high bit set.

    Example:
        >>> encode_vlq(0x80).hex()
        '8100'
    """
    if value < 0:
        raise ValueError(f"VLQ value must be non-negative, got {value}")

    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class ByteWriter:
    """Append-only byte buffer with fixed-width big-endian and VLQ writes."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def write(self, data: bytes | Iterable[int]) -> ByteWriter:
        self._buffer.extend(data)
        return self

    def write_uint8(self, value: int) -> ByteWriter:
        self._buffer.extend(struct.pack(">B", value))
        return self

    def write_uint16(self, value: int) -> ByteWriter:
        self._buffer.extend(struct.pack(">H", value))
        return self

    def write_uint32(self, value: int) -> ByteWriter:
        self._buffer.extend(struct.pack(">I", value))
        return self

    def write_vlq(self, value: int) -> ByteWriter:
        self._buffer.extend(encode_vlq(value))
        return self

    def getvalue(self) -> bytes:
        """Finalize: return an immutable copy of everything written so far."""
        return bytes(self._buffer)


# ---------------------------------------------------------------------------
# Chunks
# ---------------------------------------------------------------------------


def encode_header_chunk(
    track_count: int,
    division: int = DEFAULT_DIVISION,
    fmt: int = FORMAT_MULTI_TRACK,
) -> bytes:
    """Encode the 14-byte MThd chunk."""
    return (
        ByteWriter()
        .write(HEADER_ID)
        .write_uint32(HEADER_LENGTH)
        .write_uint16(fmt)
        .write_uint16(track_count)
        .write_uint16(division)
        .getvalue()
    )


def encode_events(events: Iterable[MidiEvent]) -> bytes:
    """Encode a track body: each event as <delta VLQ><raw bytes>."""
    writer = ByteWriter()
    for event in events:
        writer.write_vlq(event.delta_ticks).write(event.data)
    return writer.getvalue()


def encode_track_chunk(events: Iterable[MidiEvent]) -> bytes:
    """Encode an MTrk chunk. The caller supplies the end-of-track event."""
    body = encode_events(events)
    return ByteWriter().write(TRACK_ID).write_uint32(len(body)).write(body).getvalue()


def encode_midi_file(
    tracks: Sequence[Sequence[MidiEvent]],
    division: int = DEFAULT_DIVISION,
    fmt: int = FORMAT_MULTI_TRACK,
) -> bytes:
    """
    Encode a complete Standard MIDI File.

    Args:
        tracks:   One event sequence per track, each ending with end-of-track
        division: Ticks per quarter note (default 480)
        fmt:      SMF format (default 1)

    Returns:
        The file as immutable bytes
    """
    writer = ByteWriter().write(encode_header_chunk(len(tracks), division, fmt))
    for track in tracks:
        writer.write(encode_track_chunk(track))
    return writer.getvalue()
