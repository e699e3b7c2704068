"""Transcription run orchestration."""

from subtitler.workflow.layout import DirectoryLayout
from subtitler.workflow.orchestrator import (
    RunResult,
    TranscriptionOrchestrator,
    build_orchestrator,
)

__all__ = [
    "DirectoryLayout",
    "RunResult",
    "TranscriptionOrchestrator",
    "build_orchestrator",
]
