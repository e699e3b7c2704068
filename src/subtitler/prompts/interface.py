"""Input provider interface.

The orchestration core never prompts by itself. It asks an InputProvider
for the pending answers of a job, so the interactive prompts and canned
test answers are interchangeable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from subtitler.jobs.exceptions import InputError
from subtitler.jobs.models import Backend, JobRequest, QualityTier

logger = logging.getLogger(__name__)


class InputProvider(Protocol):
    """Source of the answers a job request needs."""

    def source_path(self) -> Path:
        """Media file to transcribe."""
        ...

    def quality_tier(self) -> QualityTier:
        """Quality/speed trade-off."""
        ...

    def language(self) -> str:
        """Spoken language code, or "auto" to detect it."""
        ...

    def use_accelerator(self) -> bool:
        """Whether to run the recognizer on the OpenVINO backend.

        Only asked when the accelerator is available on this machine.
        """
        ...


def clean_source_path(raw: str | Path) -> Path:
    """Normalize a path typed or dragged into a terminal.

    Drag-and-drop wraps paths in quotes on most terminals.
    """
    text = str(raw).strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        text = text[1:-1]
    return Path(text).expanduser()


def collect_request(
    provider: InputProvider, accelerator_available: bool
) -> JobRequest:
    """Build a validated JobRequest from an input provider.

    Args:
        provider: Source of the answers.
        accelerator_available: Whether the accelerated backend may be offered.

    Returns:
        The job request.

    Raises:
        InputError: If the source file does not exist or an answer is invalid.
    """
    source = clean_source_path(provider.source_path())
    if not source.is_file():
        raise InputError(f"Source file not found: {source}")

    quality = provider.quality_tier()
    language = provider.language().strip() or "auto"

    backend = Backend.DEFAULT
    if accelerator_available and provider.use_accelerator():
        backend = Backend.ACCELERATED

    try:
        request = JobRequest(
            source_path=source,
            quality=quality,
            language=language,
            backend=backend,
        )
    except ValueError as e:
        raise InputError(str(e)) from e
    logger.debug(
        "Collected job request for %s",
        source,
        extra={
            "model": request.model,
            "language": language,
            "backend": backend.value,
        },
    )
    return request
