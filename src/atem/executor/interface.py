"""Tool runner protocol.

Orchestration code (prober, encode driver, reveal) depends only on this
interface, never on a concrete process-launching mechanism.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from atem.core.cancellation import CancellationToken


class ToolRunner(Protocol):
    """Protocol for running external tools.

    Implementations exist per host environment: a plain OS subprocess and
    a runner for binaries bundled next to the application (sidecars).
    """

    def run(
        self,
        program: str | Path,
        args: Sequence[str | Path],
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Run a program to completion and return its standard output.

        Args:
            program: Program name or path.
            args: Arguments, without the program itself.
            cancel_token: Optional token that stops the process when set.

        Returns:
            Captured standard output.

        Raises:
            ExternalToolError: If the program cannot be launched or exits
                with a non-zero status.
            JobCancelledError: If the token was set while it ran.
        """
        ...

    def spawn(self, program: str | Path, args: Sequence[str | Path]) -> None:
        """Start a program without waiting for it.

        Raises:
            ExternalToolError: If the program cannot be launched.
        """
        ...
