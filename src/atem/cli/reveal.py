"""CLI reveal command for atem."""

import sys
from pathlib import Path

import click

from atem.cli import load_cli_config
from atem.cli.exit_codes import ExitCode
from atem.errors import ExternalToolError, UnsupportedPlatformError
from atem.executor.runners import get_runner
from atem.reveal import reveal_in_file_manager


@click.command("reveal")
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def reveal_command(ctx: click.Context, path: Path) -> None:
    """Show PATH selected in the platform file manager."""
    config = load_cli_config(ctx)
    try:
        reveal_in_file_manager(path, get_runner(config.tools))
    except UnsupportedPlatformError as e:
        click.echo(f"Unsupported OS: {e}", err=True)
        sys.exit(ExitCode.UNSUPPORTED_PLATFORM)
    except ExternalToolError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TOOL_FAILED)
