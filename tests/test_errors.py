"""
Tests for core/errors.py — error kinds, line tagging, class hierarchy.
"""

from __future__ import annotations

import pytest

from core.errors import ChordToolError, EmptyInputError, ErrorKind, FormatError, UnknownSymbolError


class TestChordToolError:
    def test_message_without_line(self) -> None:
        exc = FormatError(ErrorKind.MISSING_COLON, "Invalid format")
        assert str(exc) == "Invalid format"
        assert exc.line is None
        assert exc.kind is ErrorKind.MISSING_COLON

    def test_message_with_line(self) -> None:
        exc = FormatError(ErrorKind.MISSING_COLON, "Invalid format", line=4)
        assert str(exc) == "Line 4: Invalid format"
        assert exc.message == "Line 4: Invalid format"

    def test_with_line_keeps_class_and_kind(self) -> None:
        exc = UnknownSymbolError(ErrorKind.UNKNOWN_INTERVAL, "Unknown interval: #5")
        tagged = exc.with_line(2)
        assert type(tagged) is UnknownSymbolError
        assert tagged.kind is ErrorKind.UNKNOWN_INTERVAL
        assert str(tagged) == "Line 2: Unknown interval: #5"

    def test_with_line_does_not_double_prefix(self) -> None:
        exc = FormatError(ErrorKind.MISSING_COLON, "Invalid format", line=1)
        assert str(exc.with_line(7)) == "Line 7: Invalid format"

    @pytest.mark.parametrize("cls", [FormatError, UnknownSymbolError, EmptyInputError])
    def test_hierarchy(self, cls: type[ChordToolError]) -> None:
        assert issubclass(cls, ChordToolError)
        assert issubclass(cls, ValueError)

    def test_kind_values_are_strings(self) -> None:
        assert ErrorKind.EMPTY_SEQUENCE.value == "empty_sequence"
        assert ErrorKind("missing_colon") is ErrorKind.MISSING_COLON
