"""Tests for core/subprocess_utils.py."""

import subprocess
import sys
import threading

import pytest

from atem.core import CancellationToken, run_command
from atem.errors import JobCancelledError

PYTHON = sys.executable


class TestRunCommand:
    """Tests for run_command function."""

    def test_successful_command(self):
        """Test running a successful command."""
        stdout, stderr, rc = run_command([PYTHON, "-c", "print('hello')"])
        assert rc == 0
        assert "hello" in stdout

    def test_captures_stderr(self):
        stdout, stderr, rc = run_command(
            [PYTHON, "-c", "import sys; sys.stderr.write('oops')"]
        )
        assert rc == 0
        assert stderr == "oops"

    def test_failed_command(self):
        """Test running a command that fails."""
        _, _, rc = run_command([PYTHON, "-c", "raise SystemExit(3)"])
        assert rc == 3

    def test_path_objects_converted(self, temp_dir):
        """Test that Path objects in args are converted to strings."""
        script = temp_dir / "hello.py"
        script.write_text("print('from file')")
        stdout, _, rc = run_command([PYTHON, script])
        assert rc == 0
        assert "from file" in stdout

    def test_missing_executable_raises_oserror(self):
        with pytest.raises(FileNotFoundError):
            run_command(["/nonexistent/definitely-not-a-tool"])

    def test_timeout_kills_process(self):
        """Test that timeout is respected."""
        with pytest.raises(subprocess.TimeoutExpired):
            run_command(
                [PYTHON, "-c", "import time; time.sleep(10)"],
                timeout=0.3,
                poll_interval=0.05,
            )

    def test_cancel_token_kills_process(self):
        token = CancellationToken()
        timer = threading.Timer(0.2, token.cancel)
        timer.start()
        try:
            with pytest.raises(JobCancelledError):
                run_command(
                    [PYTHON, "-c", "import time; time.sleep(10)"],
                    cancel_token=token,
                    poll_interval=0.05,
                )
        finally:
            timer.cancel()

    def test_uncancelled_token_lets_command_finish(self):
        stdout, _, rc = run_command(
            [PYTHON, "-c", "print('done')"],
            cancel_token=CancellationToken(),
        )
        assert rc == 0
        assert "done" in stdout
