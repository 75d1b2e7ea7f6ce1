"""Introspector module for atem.

- MediaProber: Protocol defining the probe interface
- MediaProbe: Duration and audio bitrate of one input file
- FFprobeProber: Production implementation using ffprobe
- StubProber: Stub implementation for testing
"""

from atem.introspector.ffprobe import FFprobeProber
from atem.introspector.interface import MediaProbe, MediaProber
from atem.introspector.parsers import (
    parse_audio_bitrate,
    parse_duration,
    remove_whitespace,
)
from atem.introspector.stub import StubProber

__all__ = [
    "MediaProbe",
    "MediaProber",
    "FFprobeProber",
    "StubProber",
    "parse_audio_bitrate",
    "parse_duration",
    "remove_whitespace",
]
