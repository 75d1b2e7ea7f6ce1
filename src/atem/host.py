"""Host platform capabilities.

Platform-conditional behavior (null device, file reveal strategy, executable
names) is resolved once into a PlatformCapabilities value so call sites never
branch on the operating system themselves.
"""

from __future__ import annotations

import functools
import platform
from dataclasses import dataclass
from enum import Enum


class RevealStrategy(str, Enum):
    """How a file is revealed in the platform file manager."""

    EXPLORER_SELECT = "explorer_select"
    FINDER_REVEAL = "finder_reveal"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class PlatformCapabilities:
    """Platform-specific values needed by the encode driver and reveal."""

    os_family: str
    """Normalized OS name: 'windows', 'macos', 'linux', ..."""

    null_device: str
    """Output path that discards data (pass 1 output)."""

    reveal_strategy: RevealStrategy

    executable_suffix: str = ""
    """Suffix appended to bare tool names ('.exe' on Windows)."""

    def executable_name(self, name: str) -> str:
        """Return the platform default executable name for a tool."""
        if self.executable_suffix and not name.endswith(self.executable_suffix):
            return name + self.executable_suffix
        return name


def normalize_os_family(system: str | None = None) -> str:
    """Map platform.system() output to a short OS family name."""
    name = (system if system is not None else platform.system()).casefold()
    if name.startswith("win") or name.startswith("cygwin"):
        return "windows"
    if name == "darwin":
        return "macos"
    return name or "unknown"


def detect_platform(system: str | None = None) -> PlatformCapabilities:
    """Build PlatformCapabilities for the given (or current) system.

    Args:
        system: Value in the form of platform.system(); None detects it.

    Returns:
        PlatformCapabilities for that OS family.
    """
    family = normalize_os_family(system)
    if family == "windows":
        return PlatformCapabilities(
            os_family=family,
            null_device="nul",
            reveal_strategy=RevealStrategy.EXPLORER_SELECT,
            executable_suffix=".exe",
        )
    if family == "macos":
        return PlatformCapabilities(
            os_family=family,
            null_device="/dev/null",
            reveal_strategy=RevealStrategy.FINDER_REVEAL,
        )
    return PlatformCapabilities(
        os_family=family,
        null_device="/dev/null",
        reveal_strategy=RevealStrategy.UNSUPPORTED,
    )


@functools.lru_cache(maxsize=1)
def get_platform_capabilities() -> PlatformCapabilities:
    """Capabilities of the running host, detected once per process."""
    return detect_platform()


def target_triple(system: str | None = None, machine: str | None = None) -> str:
    """Return the target triple used to name bundled sidecar binaries.

    Examples: ``x86_64-pc-windows-msvc``, ``aarch64-apple-darwin``,
    ``x86_64-unknown-linux-gnu``.
    """
    family = normalize_os_family(system)
    arch = (machine if machine is not None else platform.machine()).casefold()
    arch = {"amd64": "x86_64", "arm64": "aarch64", "x64": "x86_64"}.get(arch, arch)

    if family == "windows":
        return f"{arch}-pc-windows-msvc"
    if family == "macos":
        return f"{arch}-apple-darwin"
    return f"{arch}-unknown-{family}-gnu"
