"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building AtemConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from atem.config.env import EnvReader
from atem.config.models import (
    DEFAULT_SERVER_PORT,
    DEFAULT_TARGET_SIZE_MB,
    AtemConfig,
    EncodeConfig,
    LoggingConfig,
    ServerConfig,
    ToolPathsConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tool paths
    ffmpeg_path: Path | None = None
    ffprobe_path: Path | None = None
    runner: str | None = None
    sidecar_dir: Path | None = None

    # Encode config
    target_size_mb: float | None = None
    temp_directory: Path | None = None
    output_strategy: str | None = None
    encode_timeout: float | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None

    # Server config
    server_bind: str | None = None
    server_port: int | None = None


class ConfigBuilder:
    """Builds AtemConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value set (file, env, cli).
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._sources[field_obj.name] = source_name

    def source_of(self, key: str) -> str:
        """Return which source set a value ("default" if none did)."""
        return self._sources.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> AtemConfig:
        """Build the final AtemConfig with defaults for unset values.

        Raises:
            ValueError: If a merged value fails model validation.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_path", None),
            ffprobe=self._get("ffprobe_path", None),
            runner=self._get("runner", "subprocess"),
            sidecar_dir=self._get("sidecar_dir", None),
        )

        encode = EncodeConfig(
            target_size_mb=self._get("target_size_mb", DEFAULT_TARGET_SIZE_MB),
            temp_directory=self._get("temp_directory", None),
            output_strategy=self._get("output_strategy", "suffix"),
            timeout=self._get("encode_timeout", None),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        server = ServerConfig(
            bind=self._get("server_bind", "127.0.0.1"),
            port=self._get("server_port", DEFAULT_SERVER_PORT),
        )

        return AtemConfig(
            tools=tools,
            encode=encode,
            logging=logging_config,
            server=server,
        )


_NUMBER = (int, float)

_TYPE_NAMES: dict[type | tuple[type, ...], str] = {
    str: "a string",
    int: "an integer",
    _NUMBER: "a number",
    bool: "a boolean",
}


def _checked(
    section: str,
    table: dict[str, Any],
    key: str,
    expected: type | tuple[type, ...],
) -> Any:
    """Return ``table[key]`` (None if absent) after checking its TOML type.

    Raises:
        ValueError: If the value is present with the wrong type.
    """
    value = table.get(key)
    if value is None:
        return None
    # bool is an int subclass; `port = true` is not a port
    wrong_bool = isinstance(value, bool) and expected is not bool
    if wrong_bool or not isinstance(value, expected):
        raise ValueError(
            f"{section}.{key} must be {_TYPE_NAMES[expected]}, got {value!r}"
        )
    return value


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    table = file_config.get(name, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{name}] must be a table, got {table!r}")
    return table


def _optional_path(section: str, table: dict[str, Any], key: str) -> Path | None:
    value = _checked(section, table, key, str)
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from parsed TOML config file.

    Expected layout::

        [tools]
        ffmpeg = "/usr/bin/ffmpeg"
        runner = "subprocess"

        [encode]
        target_size_mb = 8.0
        output_strategy = "videos"

        [logging]
        level = "debug"

        [server]
        port = 8731
    """
    tools = _section(file_config, "tools")
    encode = _section(file_config, "encode")
    logging_conf = _section(file_config, "logging")
    server = _section(file_config, "server")

    return ConfigSource(
        ffmpeg_path=_optional_path("tools", tools, "ffmpeg"),
        ffprobe_path=_optional_path("tools", tools, "ffprobe"),
        runner=_checked("tools", tools, "runner", str),
        sidecar_dir=_optional_path("tools", tools, "sidecar_dir"),
        target_size_mb=_checked("encode", encode, "target_size_mb", _NUMBER),
        temp_directory=_optional_path("encode", encode, "temp_directory"),
        output_strategy=_checked("encode", encode, "output_strategy", str),
        encode_timeout=_checked("encode", encode, "timeout", _NUMBER),
        logging_level=_checked("logging", logging_conf, "level", str),
        logging_file=_optional_path("logging", logging_conf, "file"),
        logging_format=_checked("logging", logging_conf, "format", str),
        logging_include_stderr=_checked(
            "logging", logging_conf, "include_stderr", bool
        ),
        logging_max_bytes=_checked("logging", logging_conf, "max_bytes", int),
        logging_backup_count=_checked("logging", logging_conf, "backup_count", int),
        server_bind=_checked("server", server, "bind", str),
        server_port=_checked("server", server, "port", int),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from ATEM_* environment variables."""
    return ConfigSource(
        ffmpeg_path=reader.get_path("ATEM_FFMPEG_PATH"),
        ffprobe_path=reader.get_path("ATEM_FFPROBE_PATH"),
        runner=reader.get_str("ATEM_RUNNER"),
        sidecar_dir=reader.get_path("ATEM_SIDECAR_DIR"),
        target_size_mb=reader.get_float("ATEM_TARGET_SIZE"),
        temp_directory=reader.get_path("ATEM_TEMP_DIR"),
        output_strategy=reader.get_str("ATEM_OUTPUT_STRATEGY"),
        logging_level=reader.get_str("ATEM_LOG_LEVEL"),
        logging_file=reader.get_path("ATEM_LOG_FILE"),
        logging_format=reader.get_str("ATEM_LOG_FORMAT"),
        server_bind=reader.get_str("ATEM_SERVER_BIND"),
        server_port=reader.get_int("ATEM_SERVER_PORT"),
    )
