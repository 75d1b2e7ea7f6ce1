"""Tests for ffprobe csv output parsing."""

import pytest

from atem.errors import ParseError
from atem.introspector.parsers import (
    parse_audio_bitrate,
    parse_duration,
    remove_whitespace,
)


class TestRemoveWhitespace:
    def test_strips_interior_whitespace(self):
        assert remove_whitespace(" 12 3.5\r\n\t") == "123.5"

    def test_empty(self):
        assert remove_whitespace("") == ""


class TestParseDuration:
    def test_parses_seconds(self):
        assert parse_duration("120.033333\n") == pytest.approx(120.033333)

    def test_windows_line_ending(self):
        assert parse_duration("42.5\r\n") == 42.5

    def test_error_text_raises(self):
        with pytest.raises(ParseError, match="duration"):
            parse_duration("clip.mp4: No such file or directory")

    def test_na_raises(self):
        with pytest.raises(ParseError):
            parse_duration("N/A")

    def test_empty_raises(self):
        with pytest.raises(ParseError):
            parse_duration("")

    def test_non_finite_raises(self):
        with pytest.raises(ParseError, match="finite"):
            parse_duration("nan")


class TestParseAudioBitrate:
    def test_converts_bits_to_kilobits(self):
        assert parse_audio_bitrate("131072\n") == 128.0

    def test_fractional_result(self):
        assert parse_audio_bitrate("128000") == pytest.approx(125.0)

    def test_not_available_is_zero(self):
        assert parse_audio_bitrate("N/A\n") == 0.0

    def test_no_audio_stream_is_zero(self):
        assert parse_audio_bitrate("\n") == 0.0

    def test_garbage_raises(self):
        with pytest.raises(ParseError, match="audio bitrate"):
            parse_audio_bitrate("unknown")
