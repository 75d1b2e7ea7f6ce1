"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    20-29: Input file errors
    30-39: Tool/platform errors
    50-59: Probe output errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for atem CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C or cancelled job

    # Configuration errors (10-19)
    CONFIG_ERROR = 11

    # Input file errors (20-29)
    TARGET_NOT_FOUND = 20
    NO_FILE_STEM = 21

    # Tool/platform errors (30-39)
    TOOL_FAILED = 30
    UNSUPPORTED_PLATFORM = 31

    # Probe output errors (50-59)
    PARSE_ERROR = 51
