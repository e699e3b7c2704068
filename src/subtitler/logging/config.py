"""Root logger setup for the subtitler commands."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from subtitler.logging.context import JobContextFilter
from subtitler.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from subtitler.config.models import LoggingConfig

# job_tag is "[talk.mp4] " while a job runs and empty otherwise
TEXT_FORMAT = "%(asctime)s %(levelname)s %(job_tag)s%(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(path: Path, config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be created."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Route log records to the configured file and/or stderr.

    Stderr is used unless a log file was opened, and also when
    include_stderr is set. httpx is held at WARNING or above so model
    downloads do not log every request at INFO.
    """
    level = logging.getLevelNamesMapping()[config.level.upper()]

    handlers: list[logging.Handler] = []
    if config.file is not None:
        file_handler = _open_log_file(config.file.expanduser(), config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    if config.format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)
    context_filter = JobContextFilter()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)

    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
