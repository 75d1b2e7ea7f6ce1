"""Bitrate budget arithmetic and the size gate.

Units: bitrates in kilobits/sec, durations in seconds, sizes in megabytes.
Dividing kilobit-seconds by 8192 (8 bits/byte * 1024 KB/MB) gives megabytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from atem.introspector.interface import MediaProbe

KILOBITS_PER_MEGABYTE = 8192.0

# 1.024 ** 2, the MiB/MB factor the encoder's rate control works in
ENCODER_SIZE_FACTOR = 1.048576


def minimum_deliverable_size_mb(audio_rate_kbps: float, duration_s: float) -> float:
    """Size of the output if the video bitrate were zero.

    This is the audio track alone and a floor no positive video bitrate
    can get under.
    """
    return audio_rate_kbps * duration_s / KILOBITS_PER_MEGABYTE


def target_video_bitrate_kbps(
    target_size_mb: float,
    duration_s: float,
    audio_rate_kbps: float,
) -> float:
    """Video bitrate that makes the output land at ``target_size_mb``.

    The result is negative when the target is below the minimum deliverable
    size; callers must run the size gate first.
    """
    total_kbps = (target_size_mb * KILOBITS_PER_MEGABYTE) / (
        ENCODER_SIZE_FACTOR * duration_s
    )
    return total_kbps - audio_rate_kbps


def is_below_minimum(minimum_size_mb: float, target_size_mb: float) -> bool:
    """True only when the floor is strictly below the target.

    Requesting exactly the floor size counts as not compressible.
    """
    return minimum_size_mb < target_size_mb


@dataclass(frozen=True)
class SizeGateResult:
    """Outcome of comparing the minimum deliverable size with the target."""

    passed: bool
    minimum_size_mb: float
    target_size_mb: float


def evaluate_size_gate(probe: MediaProbe, target_size_mb: float) -> SizeGateResult:
    """Decide whether compression can reach ``target_size_mb``.

    A failed gate is a normal outcome: the caller reports
    ``minimum_size_mb`` and performs no encoding.
    """
    minimum = minimum_deliverable_size_mb(
        probe.audio_bitrate_kbps, probe.duration_seconds
    )
    return SizeGateResult(
        passed=is_below_minimum(minimum, target_size_mb),
        minimum_size_mb=minimum,
        target_size_mb=target_size_mb,
    )
