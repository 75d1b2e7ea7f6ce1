"""Two-pass encode data types.

This module defines the encode plan and the per-job two-pass context that
owns the pass statistics directory.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

PASSLOG_PREFIX = "ffmpeg2pass"


@dataclass(frozen=True)
class EncodePlan:
    """Everything both encoder passes need, computed once per job."""

    input_path: Path
    target_video_bitrate_kbps: float
    audio_bitrate_kbps: float
    output_path: Path


@dataclass
class TwoPassContext:
    """Context for two-pass encoding.

    Two-pass encoding requires running ffmpeg twice:
    - Pass 1: Analyze video, output to the null device, write stats files
    - Pass 2: Encode using the stats files for accurate bitrate targeting

    Each job gets its own directory so concurrent jobs never share
    statistics files.
    """

    directory: Path
    """Per-job directory holding the pass statistics files."""

    current_pass: int = 1
    """Current pass number (1 or 2)."""

    _cleaned: bool = field(default=False, repr=False)

    @classmethod
    def create(cls, parent: Path | None = None) -> TwoPassContext:
        """Create a context with a fresh unique directory.

        Args:
            parent: Directory to create it in (None = system temp dir).
        """
        if parent is not None:
            parent.mkdir(parents=True, exist_ok=True)
        directory = Path(tempfile.mkdtemp(prefix="atem-", dir=parent))
        logger.debug("Created pass statistics directory %s", directory)
        return cls(directory=directory)

    @property
    def passlogfile(self) -> Path:
        """Path prefix for pass log files (ffmpeg adds suffixes)."""
        return self.directory / PASSLOG_PREFIX

    def cleanup(self) -> None:
        """Remove the statistics directory and everything in it."""
        if self._cleaned:
            return
        try:
            shutil.rmtree(self.directory)
            logger.debug("Cleaned up pass statistics directory %s", self.directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(
                "Could not clean up pass statistics directory %s: %s",
                self.directory,
                e,
            )
        self._cleaned = True
