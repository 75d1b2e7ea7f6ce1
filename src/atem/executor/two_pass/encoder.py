"""Two-pass encode driver.

Runs ffmpeg twice, strictly in order. Pass 2 reads the statistics written
by pass 1, so it is never started when pass 1 fails or the job is cancelled.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from atem.host import PlatformCapabilities, get_platform_capabilities

from .command import build_pass1_args, build_pass2_args, format_kbps
from .types import EncodePlan, TwoPassContext

if TYPE_CHECKING:
    from atem.core.cancellation import CancellationToken
    from atem.executor.interface import ToolRunner

logger = logging.getLogger(__name__)


class TwoPassEncoder:
    """Drives the two ffmpeg passes for an EncodePlan."""

    def __init__(
        self,
        runner: ToolRunner,
        ffmpeg: str | Path = "ffmpeg",
        capabilities: PlatformCapabilities | None = None,
        temp_directory: Path | None = None,
    ) -> None:
        """Initialize the encoder.

        Args:
            runner: Runner used to launch ffmpeg.
            ffmpeg: ffmpeg program name or path.
            capabilities: Platform capabilities (None = detect).
            temp_directory: Parent for per-job statistics directories
                (None = system temp dir).
        """
        self._runner = runner
        self._ffmpeg = ffmpeg
        self._capabilities = capabilities or get_platform_capabilities()
        self._temp_directory = temp_directory

    def encode(
        self,
        plan: EncodePlan,
        cancel_token: CancellationToken | None = None,
    ) -> Path:
        """Run pass 1 then pass 2.

        Args:
            plan: Encode plan with bitrates and paths.
            cancel_token: Optional token checked before each pass and
                forwarded to the runner.

        Returns:
            The output path written by pass 2.

        Raises:
            ExternalToolError: If either pass fails; nothing is retried.
            JobCancelledError: If the token is set.
        """
        context = TwoPassContext.create(self._temp_directory)
        try:
            self._run_pass(plan, context, cancel_token)
            context.current_pass = 2
            self._run_pass(plan, context, cancel_token)
        finally:
            context.cleanup()
        return plan.output_path

    def _run_pass(
        self,
        plan: EncodePlan,
        context: TwoPassContext,
        cancel_token: CancellationToken | None,
    ) -> None:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(f"before pass {context.current_pass}")

        if context.current_pass == 1:
            args = build_pass1_args(
                plan, context.passlogfile, self._capabilities.null_device
            )
        else:
            args = build_pass2_args(plan, context.passlogfile)

        logger.info(
            "Starting pass %d: video %s, audio %s",
            context.current_pass,
            format_kbps(plan.target_video_bitrate_kbps),
            format_kbps(plan.audio_bitrate_kbps),
        )
        start_time = time.monotonic()
        self._runner.run(self._ffmpeg, args, cancel_token)
        logger.info(
            "Pass %d finished in %.1fs",
            context.current_pass,
            time.monotonic() - start_time,
        )
