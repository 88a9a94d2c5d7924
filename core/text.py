"""
Pure text helpers shared by the sequence parser and the tuning engine.

All functions are pure: same input always produces same output, no external state.
"""

import math
import re

# Optional sign, digits with optional fraction (or a bare fraction), optional exponent.
_LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_COMMENT_PREFIXES: tuple[str, ...] = ("#", "//")


def parse_leading_float(text: str) -> float | None:
    """
    Read the numeric literal at the start of ``text``, ignoring any trailing junk.

    Mirrors the lenient number reading users expect from chord input:
    ``"440"``, ``"440.5"`` and ``"440Hz"`` all read as numbers, while
    ``"."`` or ``"abc"`` do not.

    Args:
        text: Raw token, e.g. "1.5" or "440Hz".

    Returns:
        The parsed float, or None if ``text`` does not start with a number.

    Example:
        >>> parse_leading_float("1.2.3")
        1.2
        >>> parse_leading_float("Hz440") is None
        True
    """
    match = _LEADING_FLOAT_RE.match(text)
    if match is None:
        return None
    value = float(match.group(1))
    if math.isnan(value):
        return None
    return value


def is_comment_or_blank(line: str) -> bool:
    """True for an empty line or one starting with ``#`` or ``//`` (after stripping)."""
    stripped = line.strip()
    return not stripped or stripped.startswith(_COMMENT_PREFIXES)
