"""CLI convert command for atem."""

import logging
import sys
from pathlib import Path

import click

from atem.cli import load_cli_config
from atem.cli.exit_codes import ExitCode
from atem.config import ConfigSource
from atem.errors import (
    ExternalToolError,
    JobCancelledError,
    NoFileStemError,
    ParseError,
)
from atem.pipeline import convert_video

logger = logging.getLogger(__name__)


@click.command("convert")
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(path_type=Path),
    required=True,
    help="Video file to convert.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path (default: <name>_out.<ext> in the current directory).",
)
@click.option(
    "--ffmpeg",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to ffmpeg (default: ffmpeg.exe on Windows, ffmpeg elsewhere).",
)
@click.option(
    "--ffprobe",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to ffprobe (default: ffprobe.exe on Windows, ffprobe elsewhere).",
)
@click.option(
    "--target-size",
    "-t",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Target size in megabytes (default: 15.5).",
)
@click.option(
    "--output-strategy",
    type=click.Choice(["suffix", "videos"]),
    default=None,
    help="Default output naming when --output is not given.",
)
@click.pass_context
def convert_command(
    ctx: click.Context,
    input_path: Path,
    output: Path | None,
    ffmpeg: Path | None,
    ffprobe: Path | None,
    target_size: float | None,
    output_strategy: str | None,
) -> None:
    """Re-encode a video with two ffmpeg passes so it fits a target size.

    If the audio track alone is already at least as large as the target,
    the minimum achievable size (MB) is printed and nothing is encoded.
    Otherwise the output path is printed once both passes complete.

    \b
    Examples:
        atem convert -i clip.mp4                 # 15.5 MB, clip_out.mp4
        atem convert -i clip.mp4 -t 8 -o small.mp4
        atem convert -i clip.mkv --output-strategy videos
    """
    config = load_cli_config(
        ctx,
        ConfigSource(
            ffmpeg_path=ffmpeg,
            ffprobe_path=ffprobe,
            target_size_mb=target_size,
            output_strategy=output_strategy,
        ),
    )

    if not input_path.exists():
        click.echo(f"Error: File not found: {input_path}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        result = convert_video(input_path, config=config, output=output)
    except NoFileStemError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.NO_FILE_STEM)
    except ParseError as e:
        logger.error("Could not read probe output for %s: %s", input_path, e)
        click.echo(f"Error: Could not parse probe output: {e}", err=True)
        sys.exit(ExitCode.PARSE_ERROR)
    except ExternalToolError as e:
        logger.error("External tool failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.TOOL_FAILED)
    except (JobCancelledError, KeyboardInterrupt):
        click.echo("Conversion interrupted.", err=True)
        sys.exit(ExitCode.INTERRUPTED)

    if result.rejected:
        click.echo(f"{result.minimum_size_mb}")
        return

    click.echo(str(result.output_path))
