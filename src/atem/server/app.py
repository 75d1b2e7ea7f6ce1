"""HTTP application for the local command surface.

A front end (desktop shell, browser page, script) posts conversion and
reveal commands here instead of invoking the CLI.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiohttp import web

from atem import __version__
from atem.config.models import AtemConfig
from atem.executor.runners import get_runner
from atem.host import PlatformCapabilities, get_platform_capabilities
from atem.server.api import setup_api_routes

if TYPE_CHECKING:
    from atem.executor.interface import ToolRunner

logger = logging.getLogger(__name__)


async def health_handler(request: web.Request) -> web.Response:
    """Handle GET /health."""
    return web.json_response({"status": "healthy", "version": __version__})


def create_app(
    config: AtemConfig | None = None,
    runner: ToolRunner | None = None,
    capabilities: PlatformCapabilities | None = None,
) -> web.Application:
    """Create and configure the aiohttp Application.

    Args:
        config: Configuration shared by all jobs (None = defaults).
        runner: Tool runner (None = selected by config.tools.runner).
        capabilities: Platform capabilities (None = detect).

    Returns:
        Configured aiohttp Application instance.
    """
    config = config or AtemConfig()

    app = web.Application()
    app["config"] = config
    app["runner"] = runner or get_runner(config.tools, timeout=config.encode.timeout)
    app["capabilities"] = capabilities or get_platform_capabilities()

    app.router.add_get("/health", health_handler)
    setup_api_routes(app)

    logger.debug("Created application (runner=%s)", config.tools.runner)
    return app
