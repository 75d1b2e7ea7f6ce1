"""Core utilities shared across atem modules."""

from atem.core.cancellation import CancellationToken
from atem.core.subprocess_utils import run_command

__all__ = [
    "CancellationToken",
    "run_command",
]
