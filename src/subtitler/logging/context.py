"""Job context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the job's source file into log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_job_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_source", default=None
)


def get_job_context() -> str | None:
    """Get the current job's source path, if any."""
    return _job_source.get()


@contextmanager
def job_context(source_path: Path | str) -> Generator[None, None, None]:
    """Context manager for job processing context.

    Every record logged inside the block, including from worker threads
    started with contextvars.copy_context(), names source_path. The previous
    context is restored on exit.

    Example:
        with job_context("/media/talk.mp4"):
            logger.info("Resolving assets")  # Tagged with [talk.mp4]
    """
    token = _job_source.set(str(source_path))
    try:
        yield
    finally:
        _job_source.reset(token)


class JobContextFilter(logging.Filter):
    """Logging filter that injects job context into log records.

    Adds a job_source attribute for JSON output and a compact job_tag such
    as ``[talk.mp4] `` for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject job context into log record.

        Returns:
            Always True (does not filter, only enriches).
        """
        source = get_job_context()
        record.job_source = source
        record.job_tag = f"[{Path(source).name}] " if source else ""
        return True  # Never filter out records
