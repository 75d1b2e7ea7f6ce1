"""Reveal a file in the platform file manager."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from atem.errors import UnsupportedPlatformError
from atem.host import PlatformCapabilities, RevealStrategy, get_platform_capabilities

if TYPE_CHECKING:
    from atem.executor.interface import ToolRunner

logger = logging.getLogger(__name__)


def build_reveal_command(
    path: Path | str,
    capabilities: PlatformCapabilities,
) -> tuple[str, list[str]]:
    """Return (program, args) that reveal ``path`` on this platform.

    Raises:
        UnsupportedPlatformError: If the platform has no reveal strategy.
    """
    strategy = capabilities.reveal_strategy
    if strategy is RevealStrategy.EXPLORER_SELECT:
        # The comma after /select is part of explorer's syntax
        return "explorer", ["/select,", str(path)]
    if strategy is RevealStrategy.FINDER_REVEAL:
        return "open", ["-R", str(path)]
    raise UnsupportedPlatformError(capabilities.os_family)


def reveal_in_file_manager(
    path: Path | str,
    runner: ToolRunner,
    capabilities: PlatformCapabilities | None = None,
) -> None:
    """Open the file manager with ``path`` selected.

    The file manager is spawned without waiting; explorer in particular
    reports a non-zero status even when it succeeds.

    Raises:
        UnsupportedPlatformError: If the platform has no reveal strategy.
        ExternalToolError: If the file manager cannot be launched.
    """
    capabilities = capabilities or get_platform_capabilities()
    program, args = build_reveal_command(path, capabilities)
    logger.info("Revealing %s with %s", path, program)
    runner.spawn(program, args)
