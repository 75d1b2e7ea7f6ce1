"""Structured logging module for atem.

Provides configurable logging with JSON format support and file rotation.
Includes job context support for conversions running on worker threads.
"""

from atem.logging.config import configure_logging
from atem.logging.context import JobContextFilter, get_job_context, job_context
from atem.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JobContextFilter",
    "configure_logging",
    "get_job_context",
    "job_context",
]
