"""TOML config file parsing."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TomlParseError(Exception):
    """Raised when a config file cannot be parsed in strict mode."""

    pass


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into a dictionary.

    Raises:
        TomlParseError: If the content is not valid TOML.
    """
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise TomlParseError(str(e)) from e


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise TomlParseError on parse or read failures.
                If False, log a warning and return an empty dict.

    Returns:
        Parsed dictionary. Empty dict if the file doesn't exist.
    """
    if not path.exists():
        return {}

    try:
        return parse_toml(path.read_text(encoding="utf-8"))
    except (TomlParseError, OSError) as e:
        if strict:
            raise TomlParseError(f"Failed to parse config file {path}: {e}") from e
        logger.warning("Failed to parse config file %s: %s", path, e)
        return {}
