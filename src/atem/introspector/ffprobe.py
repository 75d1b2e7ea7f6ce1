"""ffprobe-based implementation of the MediaProber protocol."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from atem.errors import ParseError
from atem.introspector.interface import MediaProbe
from atem.introspector.parsers import parse_audio_bitrate, parse_duration

if TYPE_CHECKING:
    from atem.core.cancellation import CancellationToken
    from atem.executor.interface import ToolRunner

logger = logging.getLogger(__name__)


def build_duration_args(path: Path) -> list[str]:
    """ffprobe arguments that print the container duration."""
    return [
        "-v",
        "error",
        "-show_entries",
        "format=duration",
        "-of",
        "csv=p=0",
        str(path),
    ]


def build_audio_bitrate_args(path: Path) -> list[str]:
    """ffprobe arguments that print the first audio stream bitrate."""
    return [
        "-v",
        "error",
        "-select_streams",
        "a:0",
        "-show_entries",
        "stream=bit_rate",
        "-of",
        "csv=p=0",
        str(path),
    ]


class FFprobeProber:
    """ffprobe-based implementation of MediaProber.

    Every query is one ffprobe invocation through the configured ToolRunner,
    so the same prober works with plain subprocesses and bundled binaries.
    """

    def __init__(
        self,
        runner: ToolRunner,
        ffprobe: str | Path = "ffprobe",
        cancel_token: CancellationToken | None = None,
    ) -> None:
        """Initialize the prober.

        Args:
            runner: Runner used to launch ffprobe.
            ffprobe: ffprobe program name or path.
            cancel_token: Optional token passed to every invocation.
        """
        self._runner = runner
        self._ffprobe = ffprobe
        self._cancel_token = cancel_token

    def get_duration(self, path: Path) -> float:
        output = self._runner.run(
            self._ffprobe, build_duration_args(path), self._cancel_token
        )
        duration = parse_duration(output)
        logger.debug("Duration of %s: %.3fs", path, duration)
        return duration

    def get_audio_bitrate(self, path: Path) -> float:
        output = self._runner.run(
            self._ffprobe, build_audio_bitrate_args(path), self._cancel_token
        )
        bitrate = parse_audio_bitrate(output)
        if bitrate == 0.0:
            logger.info("No audio bitrate reported for %s, using 0", path)
        else:
            logger.debug("Audio bitrate of %s: %.3f kbps", path, bitrate)
        return bitrate

    def probe(self, path: Path) -> MediaProbe:
        """Probe duration and audio bitrate.

        Raises:
            ParseError: If output is not numeric or the duration is not
                positive.
            ExternalToolError: If ffprobe cannot run or fails.
        """
        duration = self.get_duration(path)
        if duration <= 0:
            raise ParseError(f"Duration must be positive for {path}, got {duration}")
        audio_bitrate = self.get_audio_bitrate(path)
        return MediaProbe(duration_seconds=duration, audio_bitrate_kbps=audio_bitrate)
