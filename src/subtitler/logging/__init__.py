"""Structured logging module for subtitler.

Provides configurable logging with JSON format support and file rotation.
Includes job context support so every record names the file being
transcribed.
"""

from subtitler.logging.config import configure_logging
from subtitler.logging.context import (
    JobContextFilter,
    get_job_context,
    job_context,
)
from subtitler.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JobContextFilter",
    "configure_logging",
    "get_job_context",
    "job_context",
]
