"""
Configuration dataclasses for MIDI export and playback timing.

These immutable config objects decouple timing parameters from function
signatures, making it easier to define standard configurations and reuse
them across the CLI, the HTTP API and tests.
"""

import dataclasses
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ExportConfig:
    """
    Timing configuration for rendering a chord sequence.

    Attributes:
        base_duration: Seconds represented by a chord duration of 1.
            Defaults to 1.0, so "duration=2" lasts two seconds.
        tempo: Tempo in BPM written to the MIDI tempo track. Defaults to 120.
            Together with base_duration it fixes the chord length in ticks.

    Example:
        >>> config = ExportConfig(base_duration=0.5, tempo=90)
        >>> midi = generate_pythagorean_midi(chords, config.base_duration, config.tempo)
    """

    base_duration: float = 1.0
    tempo: float = 120.0

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not math.isfinite(self.base_duration) or self.base_duration <= 0:
            raise ValueError(f"base_duration must be positive, got {self.base_duration}")
        if not math.isfinite(self.tempo) or self.tempo <= 0:
            raise ValueError(f"tempo must be positive, got {self.tempo}")

    def with_overrides(self, **overrides: float | None) -> "ExportConfig":
        """Return a validated copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


# Pre-defined configurations for common use cases

DEFAULT_CONFIG = ExportConfig()
"""Default configuration: 1 second per duration unit at 120 BPM."""

SLOW_CONFIG = ExportConfig(base_duration=1.0, tempo=60.0)
"""One beat per second, convenient for reading ticks off a DAW grid."""

FAST_CONFIG = ExportConfig(base_duration=0.5, tempo=180.0)
"""Half-second chord units for quick auditioning."""
