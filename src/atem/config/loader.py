"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (ATEM_*)
3. Config file (~/.atem/config.toml)
4. Default values

Environment variables:
- ATEM_CONFIG_PATH: Path to config file (overrides default location)
- ATEM_FFMPEG_PATH / ATEM_FFPROBE_PATH: Paths to the external tools
- ATEM_RUNNER: "subprocess" or "sidecar"
- ATEM_SIDECAR_DIR: Directory holding bundled tool binaries
- ATEM_TARGET_SIZE: Default target size in megabytes
- ATEM_TEMP_DIR: Parent directory for per-job pass statistics
- ATEM_OUTPUT_STRATEGY: "suffix" or "videos"
- ATEM_LOG_LEVEL / ATEM_LOG_FILE / ATEM_LOG_FORMAT: Logging overrides
- ATEM_SERVER_BIND / ATEM_SERVER_PORT: HTTP command surface address
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from atem.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from atem.config.env import EnvReader
from atem.config.models import AtemConfig
from atem.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".atem"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by ATEM_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("ATEM_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()
    return load_toml_file(path, strict=strict)


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    cli_source: ConfigSource | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> AtemConfig:
    """Get atem configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides ATEM_CONFIG_PATH).
        cli_source: Values given on the command line.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        AtemConfig with merged configuration.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: When a file value has the wrong type or a merged value
            is invalid.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    if cli_source is not None:
        builder.apply(cli_source, source_name="cli")

    config = builder.build()
    logger.debug(
        "Loaded config: target_size_mb=%s (%s), output_strategy=%s (%s), runner=%s (%s)",
        config.encode.target_size_mb,
        builder.source_of("target_size_mb"),
        config.encode.output_strategy,
        builder.source_of("output_strategy"),
        config.tools.runner,
        builder.source_of("runner"),
    )
    return config
