"""Configuration data models.

This module defines dataclasses for atem configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from atem.host import PlatformCapabilities

DEFAULT_TARGET_SIZE_MB = 15.5
DEFAULT_SERVER_PORT = 8731

VALID_RUNNERS = frozenset({"subprocess", "sidecar"})
VALID_OUTPUT_STRATEGIES = frozenset({"suffix", "videos"})


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, the platform default
    executable name is used (``ffmpeg.exe`` on Windows, ``ffmpeg`` elsewhere).
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None

    runner: str = "subprocess"
    """How tools are launched: 'subprocess' or 'sidecar' (bundled binaries)."""

    sidecar_dir: Path | None = None
    """Directory holding bundled binaries when runner is 'sidecar'."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.runner not in VALID_RUNNERS:
            raise ValueError(
                f"runner must be one of {sorted(VALID_RUNNERS)}, got {self.runner}"
            )

    def ffmpeg_program(self, capabilities: PlatformCapabilities) -> str:
        """Return the ffmpeg program to invoke on this platform."""
        if self.ffmpeg is not None:
            return str(self.ffmpeg)
        return capabilities.executable_name("ffmpeg")

    def ffprobe_program(self, capabilities: PlatformCapabilities) -> str:
        """Return the ffprobe program to invoke on this platform."""
        if self.ffprobe is not None:
            return str(self.ffprobe)
        return capabilities.executable_name("ffprobe")


@dataclass
class EncodeConfig:
    """Configuration for conversion jobs."""

    # Target output size in megabytes
    target_size_mb: float = DEFAULT_TARGET_SIZE_MB

    # Parent directory for per-job pass statistics (None = system temp)
    temp_directory: Path | None = None

    # Default output naming: "suffix" (<stem>_out.<ext> in cwd) or
    # "videos" (<stem>-8m.mp4 in the user videos directory)
    output_strategy: str = "suffix"

    # Per-invocation timeout for ffprobe/ffmpeg in seconds (None = no limit)
    timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.target_size_mb <= 0:
            raise ValueError(
                f"target_size_mb must be positive, got {self.target_size_mb}"
            )
        if self.output_strategy not in VALID_OUTPUT_STRATEGIES:
            raise ValueError(
                f"output_strategy must be one of {sorted(VALID_OUTPUT_STRATEGIES)}, "
                f"got {self.output_strategy}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class ServerConfig:
    """Configuration for the local HTTP command surface."""

    bind: str = "127.0.0.1"
    port: int = DEFAULT_SERVER_PORT

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be 1-65535, got {self.port}")


@dataclass
class AtemConfig:
    """Complete atem configuration."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    encode: EncodeConfig = field(default_factory=EncodeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
