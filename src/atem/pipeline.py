"""Conversion job entry point.

One job is a strict sequence: resolve output, probe, compute the budget,
size gate, pass 1, pass 2. Configuration and collaborators are passed in
explicitly; nothing below this module reads the environment.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from atem.budget import evaluate_size_gate, target_video_bitrate_kbps
from atem.config.models import AtemConfig
from atem.core.cancellation import CancellationToken
from atem.executor.runners import get_runner
from atem.executor.two_pass import EncodePlan, TwoPassEncoder, format_kbps
from atem.host import PlatformCapabilities, get_platform_capabilities
from atem.introspector.ffprobe import FFprobeProber
from atem.logging.context import job_context
from atem.output import OutputStrategy, resolve_output_path

if TYPE_CHECKING:
    from atem.executor.interface import ToolRunner
    from atem.introspector.interface import MediaProber

logger = logging.getLogger(__name__)

__all__ = [
    "CancellationToken",
    "ConversionResult",
    "convert_video",
    "new_job_id",
]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one conversion job.

    A rejected job (the size gate refused) has no output path; its
    ``minimum_size_mb`` is the unattainable floor to report to the user.
    """

    input_path: Path
    output_path: Path | None
    minimum_size_mb: float
    target_size_mb: float
    video_bitrate_kbps: float | None = None

    @property
    def rejected(self) -> bool:
        return self.output_path is None

    @property
    def output_dir(self) -> Path | None:
        """Directory containing the output, for file manager integration."""
        return self.output_path.parent if self.output_path is not None else None


def new_job_id() -> str:
    """Short random identifier used to tag a job's log records."""
    return uuid.uuid4().hex[:8]


def convert_video(
    input_path: Path | str,
    target_size_mb: float | None = None,
    config: AtemConfig | None = None,
    *,
    output: Path | str | None = None,
    strategy: OutputStrategy | str | None = None,
    prober: MediaProber | None = None,
    encoder: TwoPassEncoder | None = None,
    runner: ToolRunner | None = None,
    capabilities: PlatformCapabilities | None = None,
    cancel_token: CancellationToken | None = None,
) -> ConversionResult:
    """Convert ``input_path`` so the output lands under ``target_size_mb``.

    Args:
        input_path: Video to convert.
        target_size_mb: Target size in megabytes (None = config default).
        config: Configuration (None = defaults).
        output: Explicit output path (see resolve_output_path).
        strategy: Default output naming (None = config default).
        prober: Prober override (None = ffprobe through the runner).
        encoder: Encoder override (None = ffmpeg through the runner).
        runner: Tool runner (None = selected by config.tools.runner).
        capabilities: Platform capabilities (None = detect).
        cancel_token: Token checked after probing and between passes.

    Returns:
        ConversionResult; ``rejected`` is True when the target is not above
        the minimum deliverable size and nothing was encoded.

    Raises:
        ValueError: If the target size is not positive.
        NoFileStemError: If the input has no base file name.
        ParseError: If probe output is not numeric.
        ExternalToolError: If ffprobe or either ffmpeg pass fails.
        JobCancelledError: If the token is set.
    """
    config = config or AtemConfig()
    capabilities = capabilities or get_platform_capabilities()
    target = target_size_mb if target_size_mb is not None else config.encode.target_size_mb
    if target <= 0:
        raise ValueError(f"Target size must be positive, got {target}")

    input_path = Path(input_path)

    with job_context(new_job_id(), input_path):
        output_path = resolve_output_path(
            input_path,
            output,
            strategy=strategy or config.encode.output_strategy,
        )

        if runner is None and (prober is None or encoder is None):
            runner = get_runner(config.tools, timeout=config.encode.timeout)

        if prober is None:
            prober = FFprobeProber(
                runner,
                config.tools.ffprobe_program(capabilities),
                cancel_token,
            )

        logger.info("Probing %s", input_path)
        probe = prober.probe(input_path)
        logger.info(
            "Duration %.3fs, audio %s",
            probe.duration_seconds,
            format_kbps(probe.audio_bitrate_kbps),
        )
        if cancel_token is not None:
            cancel_token.raise_if_cancelled("after probing")

        gate = evaluate_size_gate(probe, target)
        video_bitrate = target_video_bitrate_kbps(
            target, probe.duration_seconds, probe.audio_bitrate_kbps
        )
        # Targets just above the floor can still leave no room for video
        # once the encoder size factor is applied
        if not gate.passed or video_bitrate <= 0:
            logger.warning(
                "Target %.3f MB leaves no video bitrate (minimum deliverable "
                "size %.4f MB), not encoding",
                target,
                gate.minimum_size_mb,
            )
            return ConversionResult(
                input_path=input_path,
                output_path=None,
                minimum_size_mb=gate.minimum_size_mb,
                target_size_mb=target,
            )

        plan = EncodePlan(
            input_path=input_path,
            target_video_bitrate_kbps=video_bitrate,
            audio_bitrate_kbps=probe.audio_bitrate_kbps,
            output_path=output_path,
        )

        if encoder is None:
            encoder = TwoPassEncoder(
                runner,
                config.tools.ffmpeg_program(capabilities),
                capabilities,
                config.encode.temp_directory,
            )

        encoder.encode(plan, cancel_token)
        logger.info("Wrote %s (target %.3f MB)", output_path, target)

        return ConversionResult(
            input_path=input_path,
            output_path=output_path,
            minimum_size_mb=gate.minimum_size_mb,
            target_size_mb=target,
            video_bitrate_kbps=video_bitrate,
        )
