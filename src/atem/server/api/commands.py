"""API handlers for conversion commands.

Endpoints:
    POST /api/convert - Convert a video to fit a target size
    POST /api/reveal - Show a path in the platform file manager
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from aiohttp import web
from pydantic import BaseModel, ValidationError

from atem.errors import (
    ExternalToolError,
    NoFileStemError,
    ParseError,
    UnsupportedPlatformError,
)
from atem.output import OutputStrategy
from atem.pipeline import convert_video
from atem.reveal import reveal_in_file_manager
from atem.server.api.errors import (
    EXTERNAL_TOOL_ERROR,
    INVALID_JSON,
    NO_FILE_STEM,
    NOT_FOUND,
    PARSE_ERROR,
    UNSUPPORTED_PLATFORM,
    VALIDATION_FAILED,
    api_error,
)
from atem.server.api.models import ConvertRequest, RevealRequest

logger = logging.getLogger(__name__)


async def _parse_body(
    request: web.Request, model: type[BaseModel]
) -> tuple[Any, web.Response | None]:
    """Parse and validate a JSON body, returning (model, error_response)."""
    try:
        body = await request.json()
    except ValueError:  # malformed JSON or undecodable bytes
        return None, api_error("Request body must be valid JSON", code=INVALID_JSON)

    try:
        return model.model_validate(body), None
    except ValidationError as e:
        return None, api_error(
            "Invalid request body",
            code=VALIDATION_FAILED,
            details=json.loads(e.json(include_url=False)),
        )


async def api_convert_handler(request: web.Request) -> web.Response:
    """Handle POST /api/convert.

    Conversion runs in a worker thread; the response is sent once both
    passes finish. When the size gate rejects the target, the response
    carries empty paths and the minimum deliverable size.
    """
    req, error = await _parse_body(request, ConvertRequest)
    if error is not None:
        return error

    input_path = Path(req.input)
    if not input_path.exists():
        return api_error(
            f"File not found: {req.input}", code=NOT_FOUND, status=404
        )

    try:
        result = await asyncio.to_thread(
            convert_video,
            input_path,
            req.target_size_mb,
            request.app["config"],
            strategy=OutputStrategy.VIDEOS,
            runner=request.app["runner"],
            capabilities=request.app["capabilities"],
        )
    except NoFileStemError as e:
        return api_error(str(e), code=NO_FILE_STEM, status=422)
    except ParseError as e:
        return api_error(str(e), code=PARSE_ERROR, status=422)
    except ExternalToolError as e:
        logger.error("Conversion of %s failed: %s", input_path, e)
        return api_error(str(e), code=EXTERNAL_TOOL_ERROR, status=502)

    return web.json_response(
        {
            "output_path": str(result.output_path) if not result.rejected else "",
            "output_dir": str(result.output_dir) if not result.rejected else "",
            "minimum_size_mb": result.minimum_size_mb,
            "video_bitrate_kbps": result.video_bitrate_kbps,
        }
    )


async def api_reveal_handler(request: web.Request) -> web.Response:
    """Handle POST /api/reveal."""
    req, error = await _parse_body(request, RevealRequest)
    if error is not None:
        return error

    try:
        reveal_in_file_manager(
            req.path,
            request.app["runner"],
            request.app["capabilities"],
        )
    except UnsupportedPlatformError as e:
        return api_error(str(e), code=UNSUPPORTED_PLATFORM, status=501)
    except ExternalToolError as e:
        return api_error(str(e), code=EXTERNAL_TOOL_ERROR, status=502)

    return web.Response(status=204)
