"""Configuration management for atem.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (ATEM_*)
3. Config file (~/.atem/config.toml)
4. Default values (lowest priority)
"""

from atem.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from atem.config.env import EnvReader
from atem.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from atem.config.logging_factory import configure_logging_from_cli
from atem.config.models import (
    DEFAULT_TARGET_SIZE_MB,
    AtemConfig,
    EncodeConfig,
    LoggingConfig,
    ServerConfig,
    ToolPathsConfig,
)
from atem.config.toml_parser import TomlParseError, load_toml_file, parse_toml

__all__ = [
    # Models
    "DEFAULT_TARGET_SIZE_MB",
    "AtemConfig",
    "EncodeConfig",
    "LoggingConfig",
    "ServerConfig",
    "ToolPathsConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "configure_logging_from_cli",
    "parse_toml",
    "load_toml_file",
    "TomlParseError",
]
