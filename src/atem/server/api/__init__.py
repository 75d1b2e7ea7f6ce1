"""Command API routes."""

from aiohttp import web

from atem.server.api.commands import api_convert_handler, api_reveal_handler


def setup_api_routes(app: web.Application) -> None:
    """Register command API routes on ``app``."""
    app.router.add_post("/api/convert", api_convert_handler)
    app.router.add_post("/api/reveal", api_reveal_handler)


__all__ = ["setup_api_routes"]
