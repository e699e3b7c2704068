"""External-process pipeline execution."""

from subtitler.executor.pipeline import StageRunner, run_pipeline
from subtitler.executor.stages import (
    build_extract_stage,
    build_recognize_stage,
    recognizer_output_path,
)

__all__ = [
    "StageRunner",
    "build_extract_stage",
    "build_recognize_stage",
    "recognizer_output_path",
    "run_pipeline",
]
