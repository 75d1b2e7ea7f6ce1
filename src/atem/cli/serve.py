"""CLI serve command for the local HTTP command surface."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

import click

from atem.cli import load_cli_config
from atem.cli.exit_codes import ExitCode
from atem.config import ConfigSource
from atem.config.models import AtemConfig

logger = logging.getLogger(__name__)


async def run_server(config: AtemConfig) -> int:
    """Run the HTTP server until SIGINT or SIGTERM.

    Returns:
        Exit code (0 for clean shutdown, non-zero for errors).
    """
    from aiohttp import web

    from atem.server.app import create_app

    bind = config.server.bind
    port = config.server.port

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    registered: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
            registered.append(sig)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support signal handlers
            pass

    app = create_app(config)
    runner = web.AppRunner(app)
    await runner.setup()

    try:
        site = web.TCPSite(runner, bind, port)
        await site.start()

        logger.info("atem server started on http://%s:%d", bind, port)
        logger.info("Press Ctrl+C to stop")

        await shutdown_event.wait()
    except OSError as e:
        logger.error("Cannot listen on %s:%d: %s", bind, port, e)
        return ExitCode.GENERAL_ERROR
    finally:
        for sig in registered:
            loop.remove_signal_handler(sig)
        await runner.cleanup()
        logger.info("atem server stopped")

    return ExitCode.SUCCESS


@click.command("serve")
@click.option(
    "--bind",
    type=str,
    default=None,
    help="Address to bind to (default: 127.0.0.1).",
)
@click.option(
    "--port",
    "-p",
    type=click.IntRange(1, 65535),
    default=None,
    help="Port to bind to (default: 8731).",
)
@click.pass_context
def serve_command(ctx: click.Context, bind: str | None, port: int | None) -> None:
    """Serve the conversion command API over HTTP.

    The server binds to localhost by default. Endpoints:

    \b
        GET  /health        Liveness check
        POST /api/convert   {"input": PATH, "target_size_mb": N}
        POST /api/reveal    {"path": PATH}
    """
    config = load_cli_config(ctx, ConfigSource(server_bind=bind, server_port=port))

    try:
        exit_code = asyncio.run(run_server(config))
    except KeyboardInterrupt:
        exit_code = ExitCode.SUCCESS

    sys.exit(exit_code)
