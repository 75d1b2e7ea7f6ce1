"""Job context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of job_id and input_path into log records emitted while a
conversion job runs (including jobs running on worker threads).
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_input_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "input_path", default=None
)


def get_job_context() -> tuple[str | None, str | None]:
    """Get current job context as (job_id, input_path)."""
    return _job_id.get(), _input_path.get()


@contextmanager
def job_context(
    job_id: str,
    input_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for conversion job logging context.

    Example:
        with job_context("1a2b3c4d", "/videos/clip.mp4"):
            logger.info("Probing")  # Record carries job_id and input_path
    """
    job_token = _job_id.set(job_id)
    path_token = _input_path.set(str(input_path) if input_path is not None else None)
    try:
        yield
    finally:
        _job_id.reset(job_token)
        _input_path.reset(path_token)


class JobContextFilter(logging.Filter):
    """Logging filter that injects job context into log records.

    Adds job_id and input_path attributes for JSON output and a compact
    job_tag like ``[job:1a2b3c4d] `` for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        job_id, input_path = get_job_context()

        record.job_id = job_id
        record.input_path = input_path
        record.job_tag = f"[job:{job_id}] " if job_id else ""

        return True  # Never filter out records
