"""Parsing of ffprobe csv output."""

from __future__ import annotations

import math

from atem.errors import ParseError

# ffprobe prints this when a field has no value (e.g. VBR or missing audio)
NOT_AVAILABLE = "N/A"

BITS_PER_KILOBIT = 1024.0


def remove_whitespace(text: str) -> str:
    """Remove every whitespace character, not only the surrounding ones."""
    return "".join(text.split())


def _parse_number(value: str, what: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ParseError(f"Expected numeric {what}, got {value!r}") from None
    if not math.isfinite(number):
        raise ParseError(f"Expected finite {what}, got {value!r}")
    return number


def parse_duration(output: str) -> float:
    """Parse ``format=duration`` output into seconds.

    Raises:
        ParseError: If the output is not a number (e.g. an error message).
    """
    return _parse_number(remove_whitespace(output), "duration")


def parse_audio_bitrate(output: str) -> float:
    """Parse ``stream=bit_rate`` output into kilobits/sec.

    ``N/A`` and empty output (no audio stream selected) both map to 0.0.

    Raises:
        ParseError: If the output is neither N/A nor a number.
    """
    value = remove_whitespace(output)
    if value in (NOT_AVAILABLE, ""):
        return 0.0
    return _parse_number(value, "audio bitrate") / BITS_PER_KILOBIT
