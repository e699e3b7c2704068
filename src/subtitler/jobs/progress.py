"""Progress reporting for concurrent asset downloads.

This module provides a protocol for download progress reporting so the
asset resolver does not depend on how progress is rendered (CLI, tests).
Reporters are called from the fetch threads and must be thread-safe.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Protocol, TextIO

from subtitler.core.formatting import format_file_size

logger = logging.getLogger(__name__)


class DownloadReporter(Protocol):
    """Protocol for per-asset download progress.

    Implementations provide context-specific progress display:
    - CLI: stderr progress lines
    - Tests: null/silent reporter
    """

    def on_start(self, name: str, total: int | None) -> None:
        """Signal that an asset download started.

        Args:
            name: Logical asset name.
            total: Declared size in bytes, or None if unknown.
        """
        ...

    def on_advance(self, name: str, done: int, total: int | None) -> None:
        """Report bytes written so far for an asset.

        Args:
            name: Logical asset name.
            done: Bytes written so far.
            total: Declared size in bytes, or None if unknown.
        """
        ...

    def on_complete(self, name: str, success: bool, message: str = "") -> None:
        """Signal that an asset download finished.

        Args:
            name: Logical asset name.
            success: Whether the asset was fully written.
            message: Optional status or error message.
        """
        ...


class NullDownloadReporter:
    """Reporter that discards all progress."""

    def on_start(self, name: str, total: int | None) -> None:
        pass

    def on_advance(self, name: str, done: int, total: int | None) -> None:
        pass

    def on_complete(self, name: str, success: bool, message: str = "") -> None:
        pass


class StderrDownloadReporter:
    """Reporter that writes one line per progress step to stderr.

    Concurrent downloads interleave, so every line is prefixed with the
    asset name instead of redrawing a bar in place. Percentage lines are
    emitted at most once per ``step_percent`` per asset.
    """

    def __init__(
        self,
        enabled: bool = True,
        step_percent: int = 10,
        stream: TextIO | None = None,
    ) -> None:
        self.enabled = enabled
        self.step_percent = max(1, step_percent)
        self._stream = stream
        self._last_step: dict[str, int] = {}
        self._lock = threading.Lock()

    def _write(self, line: str) -> None:
        if not self.enabled:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.write(line + "\n")
            stream.flush()

    def on_start(self, name: str, total: int | None) -> None:
        """Write the 'Downloading' line for an asset."""
        with self._lock:
            self._last_step[name] = 0
        size = format_file_size(total) if total is not None else "unknown size"
        self._write(f"Downloading: {name} ({size})")

    def on_advance(self, name: str, done: int, total: int | None) -> None:
        """Write a percentage line when the next step is reached."""
        if not total:
            return
        step = (done * 100 // total) // self.step_percent * self.step_percent
        with self._lock:
            if step <= self._last_step.get(name, 0) or step >= 100:
                return
            self._last_step[name] = step
        self._write(
            f"  {name}: {step}% "
            f"({format_file_size(done)}/{format_file_size(total)})"
        )

    def on_complete(self, name: str, success: bool, message: str = "") -> None:
        """Write the completion line for an asset."""
        logger.debug("Download of %s finished (success=%s)", name, success)
        with self._lock:
            self._last_step.pop(name, None)
        if success:
            self._write(f"Downloaded: {name}")
        else:
            suffix = f": {message}" if message else ""
            self._write(f"Failed: {name}{suffix}")
