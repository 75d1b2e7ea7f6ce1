"""Apply command-line logging flags on top of the configured LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from atem.config.models import LoggingConfig


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Configure the root logger from ``base`` with any given flags applied.

    Flags left as None keep the value from ``base``. The merged config is
    re-validated, so an unknown level or format raises ValueError before
    any handler is touched.

    Returns:
        The LoggingConfig that was installed.
    """
    from atem.logging import configure_logging

    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    final = replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )
    configure_logging(final)
    return final
