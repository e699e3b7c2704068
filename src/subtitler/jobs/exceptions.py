"""Exceptions raised by a transcription run.

Every error carries enough context (asset, stage, or path) for the CLI to
print a useful message. Nothing in the orchestration core retries.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path


class SubtitlerError(Exception):
    """Base exception for all transcription run errors.

    All run-related exceptions inherit from this class, allowing callers
    to catch every failure with a single except clause if desired.
    """


class InputError(SubtitlerError):
    """Raised when the input provider cannot produce a valid job request."""


class LayoutError(SubtitlerError):
    """Raised when a working directory cannot be created or checked.

    Attributes:
        path: The directory that could not be prepared.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to prepare directory {path}: {reason}")


class FetchError(SubtitlerError):
    """Raised when a single asset download fails.

    Attributes:
        url: URL that was being fetched.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Failed to fetch {url}: {reason}")


class AssetResolutionError(SubtitlerError):
    """Raised when one or more assets of a manifest could not be fetched.

    Assets that downloaded successfully are left in place; re-running the
    resolver fetches only the ones still missing.

    Attributes:
        failures: Mapping of asset name to the exception that failed it.
    """

    def __init__(self, failures: Mapping[str, BaseException]) -> None:
        self.failures = dict(failures)
        details = "; ".join(
            f"{name}: {error}" for name, error in sorted(self.failures.items())
        )
        noun = "asset" if len(self.failures) == 1 else "assets"
        super().__init__(
            f"Failed to download {len(self.failures)} {noun}: {details}"
        )


class StageError(SubtitlerError):
    """Base exception for pipeline stage failures.

    Attributes:
        stage: Name of the stage that failed.
    """

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"Stage '{stage}' {message}")


class StageStartError(StageError):
    """Raised when a stage's process could not be started."""

    def __init__(self, stage: str, executable: Path | str, reason: str) -> None:
        self.executable = executable
        super().__init__(stage, f"could not start {executable}: {reason}")


class StageExitError(StageError):
    """Raised when a stage's process exits with a non-zero code.

    Attributes:
        returncode: Exit code reported by the process.
    """

    def __init__(self, stage: str, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(stage, f"exited with code {returncode}")


class StageOutputError(StageError):
    """Raised when reading a stage's stdout or stderr fails."""

    def __init__(self, stage: str, stream: str, reason: str) -> None:
        self.stream = stream
        super().__init__(stage, f"failed reading {stream}: {reason}")


class OutputMoveError(SubtitlerError):
    """Raised when the produced subtitle file cannot be moved into place."""

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Failed to move {source} to {destination}: {reason}")
