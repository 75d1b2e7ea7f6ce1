"""Local HTTP command surface for atem."""

from atem.server.app import create_app

__all__ = ["create_app"]
