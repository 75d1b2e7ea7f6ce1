"""ffmpeg argument building for the two encoder passes."""

from __future__ import annotations

from pathlib import Path

from .types import EncodePlan

VIDEO_ENCODER = "libx264"
AUDIO_ENCODER = "aac"
# Cap width at 1280 and keep the aspect ratio
SCALE_FILTER = "scale=1280:-1"
PASS1_FORMAT = "mp4"


def format_kbps(value: float) -> str:
    """Render a bitrate for ffmpeg, e.g. 876.8612 -> '876.861k', 128.0 -> '128k'."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return f"{text}k"


def _common_video_args(plan: EncodePlan, passlogfile: Path) -> list[str]:
    return [
        "-y",
        "-i",
        str(plan.input_path),
        "-c:v",
        VIDEO_ENCODER,
        "-passlogfile",
        str(passlogfile),
        "-filter:v",
        SCALE_FILTER,
        "-b:v",
        format_kbps(plan.target_video_bitrate_kbps),
    ]


def build_pass1_args(
    plan: EncodePlan,
    passlogfile: Path,
    null_device: str,
) -> list[str]:
    """Arguments for the analysis pass: no audio, output discarded."""
    return [
        *_common_video_args(plan, passlogfile),
        "-pass",
        "1",
        "-an",
        "-f",
        PASS1_FORMAT,
        null_device,
    ]


def build_pass2_args(plan: EncodePlan, passlogfile: Path) -> list[str]:
    """Arguments for the output pass: audio re-encoded at the probed rate."""
    return [
        *_common_video_args(plan, passlogfile),
        "-pass",
        "2",
        "-c:a",
        AUDIO_ENCODER,
        "-b:a",
        format_kbps(plan.audio_bitrate_kbps),
        str(plan.output_path),
    ]
