"""Integration tests for the HTTP command surface.

Conversions run through the real pipeline with a recording tool runner in
place of ffprobe/ffmpeg.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import patch

from aiohttp.test_utils import AioHTTPTestCase

from atem import __version__
from atem.config.models import AtemConfig, EncodeConfig
from atem.errors import ExternalToolError
from atem.host import detect_platform
from atem.server.app import create_app

if TYPE_CHECKING:
    from aiohttp import web


class RecordingRunner:
    """Answers ffprobe queries with fixed output and records every call."""

    def __init__(self, duration="120.0", audio_bits="131072", fail_program=None):
        self.duration = duration
        self.audio_bits = audio_bits
        self.fail_program = fail_program
        self.calls: list[tuple[str, list[str]]] = []
        self.spawned: list[tuple[str, list[str]]] = []

    def run(self, program, args, cancel_token=None):
        args = [str(a) for a in args]
        self.calls.append((str(program), args))
        if self.fail_program == str(program):
            raise ExternalToolError(str(program), f"{program} exited with code 1", 1)
        if "format=duration" in args:
            return self.duration
        if "stream=bit_rate" in args:
            return self.audio_bits
        return ""

    def spawn(self, program, args):
        self.spawned.append((str(program), [str(a) for a in args]))


class CommandApiTestCase(AioHTTPTestCase):
    """Base class creating a temp dir with an input video."""

    SYSTEM = "Linux"

    def make_runner(self) -> RecordingRunner:
        return RecordingRunner()

    async def get_application(self) -> web.Application:
        self.work_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.work_dir, True)
        self.video = self.work_dir / "clip.mp4"
        self.video.write_bytes(b"\x00")

        self.runner = self.make_runner()
        config = AtemConfig(encode=EncodeConfig(temp_directory=self.work_dir / "tmp"))
        return create_app(config, self.runner, detect_platform(self.SYSTEM))

    async def post_convert(self, body):
        with patch("atem.output.get_user_videos_dir", return_value=None):
            async with self.client.post("/api/convert", json=body) as response:
                return response.status, await response.json()


class TestHealth(CommandApiTestCase):
    async def test_health(self) -> None:
        async with self.client.get("/health") as response:
            assert response.status == 200
            assert await response.json() == {
                "status": "healthy",
                "version": __version__,
            }


class TestConvertEndpoint(CommandApiTestCase):
    async def test_convert_returns_output_path(self) -> None:
        status, body = await self.post_convert(
            {"input": str(self.video), "target_size_mb": 15.5}
        )

        assert status == 200
        assert body["output_path"] == str(self.work_dir / "clip-8m.mp4")
        assert body["output_dir"] == str(self.work_dir)
        assert abs(body["minimum_size_mb"] - 1.875) < 1e-9
        assert abs(body["video_bitrate_kbps"] - 881.11) < 0.1

        programs = [program for program, _ in self.runner.calls]
        assert programs == ["ffprobe", "ffprobe", "ffmpeg", "ffmpeg"]

    async def test_rejection_returns_empty_paths(self) -> None:
        status, body = await self.post_convert(
            {"input": str(self.video), "target_size_mb": 1.0}
        )

        assert status == 200
        assert body["output_path"] == ""
        assert body["output_dir"] == ""
        assert body["video_bitrate_kbps"] is None
        assert abs(body["minimum_size_mb"] - 1.875) < 1e-9
        assert "ffmpeg" not in [program for program, _ in self.runner.calls]

    async def test_invalid_json(self) -> None:
        async with self.client.post(
            "/api/convert",
            data="{not json",
            headers={"Content-Type": "application/json"},
        ) as response:
            assert response.status == 400
            assert (await response.json())["code"] == "INVALID_JSON"

    async def test_non_utf8_body(self) -> None:
        async with self.client.post(
            "/api/convert",
            data=b"\xff\xfe{",
            headers={"Content-Type": "application/json"},
        ) as response:
            assert response.status == 400
            assert (await response.json())["code"] == "INVALID_JSON"
        assert self.runner.calls == []

    async def test_validation_failed(self) -> None:
        for body in (
            {"input": str(self.video)},
            {"input": str(self.video), "target_size_mb": 0},
            {"input": str(self.video), "target_size_mb": 5, "extra": True},
            {"input": "   ", "target_size_mb": 5},
        ):
            status, payload = await self.post_convert(body)
            assert status == 400, body
            assert payload["code"] == "VALIDATION_FAILED"
            assert payload["details"]

    async def test_missing_input(self) -> None:
        status, body = await self.post_convert(
            {"input": str(self.work_dir / "missing.mp4"), "target_size_mb": 5}
        )
        assert status == 404
        assert body["code"] == "NOT_FOUND"

    async def test_no_file_stem(self) -> None:
        status, body = await self.post_convert({"input": "/", "target_size_mb": 5})
        assert status == 422
        assert body["code"] == "NO_FILE_STEM"


class TestConvertParseError(CommandApiTestCase):
    def make_runner(self) -> RecordingRunner:
        return RecordingRunner(duration="clip.mp4: Invalid data found")

    async def test_parse_error(self) -> None:
        status, body = await self.post_convert(
            {"input": str(self.video), "target_size_mb": 5}
        )
        assert status == 422
        assert body["code"] == "PARSE_ERROR"


class TestConvertToolFailure(CommandApiTestCase):
    def make_runner(self) -> RecordingRunner:
        return RecordingRunner(fail_program="ffmpeg")

    async def test_pass1_failure(self) -> None:
        status, body = await self.post_convert(
            {"input": str(self.video), "target_size_mb": 15.5}
        )

        assert status == 502
        assert body["code"] == "EXTERNAL_TOOL_ERROR"
        ffmpeg_calls = [args for program, args in self.runner.calls if program == "ffmpeg"]
        assert len(ffmpeg_calls) == 1


class TestRevealUnsupported(CommandApiTestCase):
    async def test_linux_reveal_unsupported(self) -> None:
        async with self.client.post(
            "/api/reveal", json={"path": str(self.video)}
        ) as response:
            assert response.status == 501
            body = await response.json()
            assert body["code"] == "UNSUPPORTED_PLATFORM"
        assert self.runner.spawned == []


class TestRevealMacos(CommandApiTestCase):
    SYSTEM = "Darwin"

    async def test_reveal_spawns_finder(self) -> None:
        async with self.client.post(
            "/api/reveal", json={"path": str(self.video)}
        ) as response:
            assert response.status == 204
        assert self.runner.spawned == [("open", ["-R", str(self.video)])]

    async def test_reveal_requires_path(self) -> None:
        async with self.client.post("/api/reveal", json={}) as response:
            assert response.status == 400
            assert (await response.json())["code"] == "VALIDATION_FAILED"
