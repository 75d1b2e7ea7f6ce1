"""ToolRunner implementations."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from atem.core.subprocess_utils import run_command
from atem.errors import ExternalToolError
from atem.host import PlatformCapabilities, get_platform_capabilities, target_triple

if TYPE_CHECKING:
    from atem.config.models import ToolPathsConfig
    from atem.core.cancellation import CancellationToken
    from atem.executor.interface import ToolRunner

logger = logging.getLogger(__name__)

# Keep error messages readable when a tool dumps a long log on failure
STDERR_TAIL_CHARS = 500


class SubprocessRunner:
    """Runs tools as plain OS subprocesses."""

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the runner.

        Args:
            timeout: Per-invocation timeout in seconds (None = no limit).
        """
        self._timeout = timeout

    def resolve(self, program: str | Path) -> str:
        """Return the executable to launch for ``program``."""
        return str(program)

    def run(
        self,
        program: str | Path,
        args: Sequence[str | Path],
        cancel_token: CancellationToken | None = None,
    ) -> str:
        executable = self.resolve(program)
        name = Path(executable).name

        try:
            stdout, stderr, returncode = run_command(
                [executable, *args],
                timeout=self._timeout,
                cancel_token=cancel_token,
            )
        except subprocess.TimeoutExpired as e:
            raise ExternalToolError(
                executable, f"{name} timed out after {e.timeout}s"
            ) from e
        except OSError as e:
            raise ExternalToolError(
                executable, f"Failed to launch {executable}: {e}"
            ) from e

        if stderr:
            logger.debug("%s stderr: %s", name, stderr.strip()[-STDERR_TAIL_CHARS:])

        if returncode != 0:
            tail = stderr.strip()[-STDERR_TAIL_CHARS:]
            raise ExternalToolError(
                executable,
                f"{name} exited with code {returncode}: {tail}",
                returncode=returncode,
                stderr=stderr,
            )

        return stdout

    def spawn(self, program: str | Path, args: Sequence[str | Path]) -> None:
        executable = self.resolve(program)
        str_args = [executable, *(str(arg) for arg in args)]
        logger.debug("Spawning command: %s", " ".join(str_args))
        try:
            subprocess.Popen(  # nosec B603 - caller validates args
                str_args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise ExternalToolError(
                executable, f"Failed to launch {executable}: {e}"
            ) from e


class SidecarRunner(SubprocessRunner):
    """Runs tools bundled in an application directory.

    Bundled binaries are looked up as ``<dir>/<name>`` and then as
    ``<dir>/<name>-<target-triple>`` (with the platform executable suffix),
    the naming used by desktop app bundlers. Absolute program paths and
    names that are not bundled are launched unchanged.
    """

    def __init__(
        self,
        sidecar_dir: Path | None = None,
        timeout: float | None = None,
        capabilities: PlatformCapabilities | None = None,
        triple: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            sidecar_dir: Directory holding bundled binaries. Defaults to the
                directory of the running interpreter/executable.
            timeout: Per-invocation timeout in seconds (None = no limit).
            capabilities: Platform capabilities (None = detect).
            triple: Target triple override (None = detect).
        """
        super().__init__(timeout=timeout)
        self.sidecar_dir = sidecar_dir or Path(sys.executable).parent
        self._capabilities = capabilities or get_platform_capabilities()
        self._triple = triple or target_triple()

    def resolve(self, program: str | Path) -> str:
        program_path = Path(program)
        if program_path.is_absolute():
            return str(program_path)

        suffix = self._capabilities.executable_suffix
        stem = program_path.name
        if suffix and stem.endswith(suffix):
            stem = stem[: -len(suffix)]

        candidates = [
            self.sidecar_dir / f"{stem}{suffix}",
            self.sidecar_dir / f"{stem}-{self._triple}{suffix}",
        ]
        for candidate in candidates:
            if candidate.is_file():
                return str(candidate)

        logger.debug(
            "No bundled %s in %s, falling back to %s",
            stem,
            self.sidecar_dir,
            program,
        )
        return str(program)


def get_runner(
    tools: ToolPathsConfig,
    timeout: float | None = None,
) -> ToolRunner:
    """Create the runner selected by tool configuration.

    Args:
        tools: Tool configuration (``runner`` is "subprocess" or "sidecar").
        timeout: Per-invocation timeout in seconds.

    Returns:
        A ToolRunner implementation.
    """
    if tools.runner == "sidecar":
        return SidecarRunner(sidecar_dir=tools.sidecar_dir, timeout=timeout)
    return SubprocessRunner(timeout=timeout)
