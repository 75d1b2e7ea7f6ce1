"""MediaProber interface for duration and audio bitrate extraction."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class MediaProbe:
    """Probe result for one input file."""

    duration_seconds: float
    """Container duration in seconds (always > 0 for accepted files)."""

    audio_bitrate_kbps: float
    """First audio stream bitrate in kilobits/sec (0.0 when unknown)."""


class MediaProber(Protocol):
    """Protocol for media probe implementations."""

    def get_duration(self, path: Path) -> float:
        """Return the container duration in seconds.

        Raises:
            ParseError: If the tool output is not numeric.
            ExternalToolError: If the tool cannot run or fails.
        """
        ...

    def get_audio_bitrate(self, path: Path) -> float:
        """Return the first audio stream bitrate in kilobits/sec.

        Returns 0.0 when the stream reports no determinable bitrate.
        """
        ...

    def probe(self, path: Path) -> MediaProbe:
        """Probe duration and audio bitrate together."""
        ...
