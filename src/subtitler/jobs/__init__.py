"""Job model for subtitler.

This module provides the types shared by one transcription run:
- models: Request, manifest, profile, stage, and artifact types
- exceptions: Error types raised by the orchestration components
- progress: Download progress reporting
"""

from subtitler.jobs.exceptions import (
    AssetResolutionError,
    FetchError,
    InputError,
    LayoutError,
    OutputMoveError,
    StageError,
    StageExitError,
    StageOutputError,
    StageStartError,
    SubtitlerError,
)
from subtitler.jobs.models import (
    AssetManifest,
    Backend,
    DownloadTask,
    EnvironmentProfile,
    JobRequest,
    OutputArtifact,
    PipelineStage,
    QualityTier,
)
from subtitler.jobs.progress import (
    DownloadReporter,
    NullDownloadReporter,
    StderrDownloadReporter,
)

__all__ = [
    # Models
    "AssetManifest",
    "Backend",
    "DownloadTask",
    "EnvironmentProfile",
    "JobRequest",
    "OutputArtifact",
    "PipelineStage",
    "QualityTier",
    # Exceptions
    "AssetResolutionError",
    "FetchError",
    "InputError",
    "LayoutError",
    "OutputMoveError",
    "StageError",
    "StageExitError",
    "StageOutputError",
    "StageStartError",
    "SubtitlerError",
    # Progress
    "DownloadReporter",
    "NullDownloadReporter",
    "StderrDownloadReporter",
]
