"""CLI module for atem."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from atem.cli.exit_codes import ExitCode
from atem.config import ConfigSource, TomlParseError, get_config
from atem.config.models import AtemConfig

logger = logging.getLogger(__name__)


def load_cli_config(
    ctx: click.Context,
    cli_source: ConfigSource | None = None,
) -> AtemConfig:
    """Load configuration for a subcommand, applying CLI overrides.

    Exits with CONFIG_ERROR if the config file or a merged value is invalid.
    """
    obj = ctx.find_root().obj or {}
    try:
        return get_config(
            config_path=obj.get("config_path"),
            cli_source=cli_source,
            strict=True,
        )
    except (TomlParseError, ValueError) as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)


def _configure_logging(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    from atem.config.logging_factory import configure_logging_from_cli

    config = load_cli_config(ctx)
    configure_logging_from_cli(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )


@click.group()
@click.version_option(package_name="atem")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration file (default: ~/.atem/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """atem - re-encode a video so it fits under a target size."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    _configure_logging(ctx, log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from atem.cli.convert import convert_command
    from atem.cli.reveal import reveal_command
    from atem.cli.serve import serve_command

    main.add_command(convert_command)
    main.add_command(reveal_command)
    main.add_command(serve_command)


_register_commands()
