"""Executor module for atem.

- ToolRunner: Protocol for launching external tools
- SubprocessRunner / SidecarRunner: runner implementations
- TwoPassEncoder: drives ffmpeg through both encoder passes
"""

from atem.executor.interface import ToolRunner
from atem.executor.runners import SidecarRunner, SubprocessRunner, get_runner
from atem.executor.two_pass import (
    EncodePlan,
    TwoPassContext,
    TwoPassEncoder,
    build_pass1_args,
    build_pass2_args,
    format_kbps,
)

__all__ = [
    "ToolRunner",
    "SubprocessRunner",
    "SidecarRunner",
    "get_runner",
    "EncodePlan",
    "TwoPassContext",
    "TwoPassEncoder",
    "build_pass1_args",
    "build_pass2_args",
    "format_kbps",
]
