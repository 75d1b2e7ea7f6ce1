"""Stub prober returning fixed values.

Used by tests and to exercise the pipeline without ffprobe installed.
"""

from pathlib import Path

from atem.errors import ParseError
from atem.introspector.interface import MediaProbe


class StubProber:
    """MediaProber that returns a fixed probe and records queried paths."""

    def __init__(
        self,
        duration_seconds: float = 120.0,
        audio_bitrate_kbps: float = 128.0,
    ) -> None:
        self.duration_seconds = duration_seconds
        self.audio_bitrate_kbps = audio_bitrate_kbps
        self.probed_paths: list[Path] = []

    def get_duration(self, path: Path) -> float:
        self.probed_paths.append(path)
        return self.duration_seconds

    def get_audio_bitrate(self, path: Path) -> float:
        self.probed_paths.append(path)
        return self.audio_bitrate_kbps

    def probe(self, path: Path) -> MediaProbe:
        duration = self.get_duration(path)
        if duration <= 0:
            raise ParseError(f"Duration must be positive for {path}, got {duration}")
        return MediaProbe(
            duration_seconds=duration,
            audio_bitrate_kbps=self.get_audio_bitrate(path),
        )
