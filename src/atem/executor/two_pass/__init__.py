"""Two-pass encoding: plan, ffmpeg arguments, and the driver."""

from .command import build_pass1_args, build_pass2_args, format_kbps
from .encoder import TwoPassEncoder
from .types import EncodePlan, TwoPassContext

__all__ = [
    "EncodePlan",
    "TwoPassContext",
    "TwoPassEncoder",
    "build_pass1_args",
    "build_pass2_args",
    "format_kbps",
]
