"""Core utilities package.

Pure helpers used across the codebase: console formatting and
collision-free output naming.
"""

from subtitler.core.formatting import format_env_overrides, format_file_size
from subtitler.core.naming import move_to_available_name, next_available_name

__all__ = [
    "format_env_overrides",
    "format_file_size",
    "move_to_available_name",
    "next_available_name",
]
