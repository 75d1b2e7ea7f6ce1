"""Typed access to environment variables.

Every getter treats an unset or empty variable as absent and returns the
caller's default. Reads go through an injectable mapping so tests never
touch ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EnvReader:
    """Read ``ATEM_*`` (and XDG) variables from ``env`` or ``os.environ``.

    Example:
        reader = EnvReader(env={"ATEM_TARGET_SIZE": "8"})
        reader.get_float("ATEM_TARGET_SIZE")  # 8.0
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _read(
        self, var: str, convert: Callable[[str], T], default: T | None
    ) -> T | None:
        raw = self._env.get(var)
        if not raw:
            return default
        try:
            return convert(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", var, raw, convert.__name__)
            return default

    def get_str(self, var: str, default: str | None = None) -> str | None:
        return self._read(var, str, default)

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Integer value; unparsable values log a warning and yield ``default``."""
        return self._read(var, int, default)

    def get_float(self, var: str, default: float | None = None) -> float | None:
        """Float value; unparsable values log a warning and yield ``default``."""
        return self._read(var, float, default)

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Path value with ``~`` expanded."""
        return self._read(var, lambda raw: Path(raw).expanduser(), default)
