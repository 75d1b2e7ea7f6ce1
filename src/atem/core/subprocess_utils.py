"""Subprocess utilities for external tool invocation.

This module provides the subprocess wrapper used by the tool runners for
consistent timeout handling, encoding, and cancellation when invoking
ffprobe and ffmpeg.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import time
from pathlib import Path
from typing import TYPE_CHECKING

from atem.errors import JobCancelledError

if TYPE_CHECKING:
    from atem.core.cancellation import CancellationToken

logger = logging.getLogger(__name__)

POLL_INTERVAL: float = 0.5


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    cancel_token: CancellationToken | None = None,
    poll_interval: float = POLL_INTERVAL,
) -> tuple[str, str, int]:
    """Run external command and wait for it to exit.

    The process is polled every ``poll_interval`` seconds so that a
    cancellation token or timeout can stop it while it runs.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds (None = no limit).
        cancel_token: Optional token; when set the process is killed.
        poll_interval: Seconds between cancellation/timeout checks.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        OSError: If the process cannot be launched (e.g. FileNotFoundError).
        subprocess.TimeoutExpired: If the command runs past ``timeout``.
            The child is killed before the exception is raised.
        JobCancelledError: If the token was set while the command ran.

    Example:
        >>> stdout, stderr, rc = run_command(["ffprobe", "-version"])
        >>> if rc == 0:
        ...     print(f"ffprobe version: {stdout}")
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()
    process = subprocess.Popen(  # nosec B603 - caller validates args
        str_args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        errors="replace",
    )

    while True:
        try:
            stdout, stderr = process.communicate(timeout=poll_interval)
            break
        except subprocess.TimeoutExpired:
            if cancel_token is not None and cancel_token.is_cancelled:
                process.kill()
                process.communicate()
                logger.info(
                    "Command cancelled: %s",
                    command_name,
                    extra={"command": command_name},
                )
                raise JobCancelledError(f"{command_name} was cancelled") from None

            elapsed = time.monotonic() - start_time
            if timeout is not None and elapsed >= timeout:
                process.kill()
                process.communicate()
                logger.warning(
                    "Command timed out after %ds: %s",
                    timeout,
                    " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
                    extra={
                        "command": command_name,
                        "timeout_seconds": timeout,
                        "elapsed_seconds": round(elapsed, 3),
                    },
                )
                raise subprocess.TimeoutExpired(str_args, timeout) from None

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": process.returncode,
        },
    )

    return stdout or "", stderr or "", process.returncode
