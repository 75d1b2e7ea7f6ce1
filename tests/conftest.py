"""Shared test fixtures for atem."""

import shutil
import tempfile
from pathlib import Path

import pytest

from atem.errors import ExternalToolError
from atem.host import PlatformCapabilities, RevealStrategy


class FakeRunner:
    """ToolRunner that records invocations instead of launching processes.

    ``outputs`` maps a program name to the stdout returned for it (a list
    is consumed in order). ``fail_on_call`` makes the n-th run() call
    (1-based) raise ExternalToolError.
    """

    def __init__(self, outputs=None, fail_on_call=None):
        self.outputs = dict(outputs or {})
        self.fail_on_call = fail_on_call
        self.calls = []
        self.spawned = []

    def run(self, program, args, cancel_token=None):
        self.calls.append((str(program), [str(a) for a in args]))
        if self.fail_on_call == len(self.calls):
            raise ExternalToolError(
                str(program), f"{program} exited with code 1", returncode=1
            )
        output = self.outputs.get(str(program), "")
        if isinstance(output, list):
            return output.pop(0)
        return output

    def spawn(self, program, args):
        self.spawned.append((str(program), [str(a) for a in args]))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def fake_runner():
    """Runner with ffprobe answering 120s duration and 131072 bps audio."""
    return FakeRunner(outputs={"ffprobe": ["120.000000\n", "131072\n"]})


@pytest.fixture
def linux_caps() -> PlatformCapabilities:
    return PlatformCapabilities(
        os_family="linux",
        null_device="/dev/null",
        reveal_strategy=RevealStrategy.UNSUPPORTED,
    )


@pytest.fixture
def windows_caps() -> PlatformCapabilities:
    return PlatformCapabilities(
        os_family="windows",
        null_device="nul",
        reveal_strategy=RevealStrategy.EXPLORER_SELECT,
        executable_suffix=".exe",
    )


@pytest.fixture
def macos_caps() -> PlatformCapabilities:
    return PlatformCapabilities(
        os_family="macos",
        null_device="/dev/null",
        reveal_strategy=RevealStrategy.FINDER_REVEAL,
    )


@pytest.fixture
def runner_factory():
    """Build FakeRunner instances inside tests."""
    return FakeRunner
