"""External tool detection and execution profiles.

This module locates ffmpeg and the whisper.cpp builds and resolves the
environment the recognition stage runs with.
"""

from subtitler.tools.detection import (
    default_recognizer_path,
    find_ffmpeg,
    find_tool,
    is_intel_cpu,
)
from subtitler.tools.environment import openvino_overrides, resolve_profile

__all__ = [
    "default_recognizer_path",
    "find_ffmpeg",
    "find_tool",
    "is_intel_cpu",
    "openvino_overrides",
    "resolve_profile",
]
