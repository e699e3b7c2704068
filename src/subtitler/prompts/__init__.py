"""Input providers that produce job requests."""

from subtitler.prompts.interactive import ClickInputProvider
from subtitler.prompts.interface import (
    InputProvider,
    clean_source_path,
    collect_request,
)
from subtitler.prompts.static import StaticInputProvider

__all__ = [
    "ClickInputProvider",
    "InputProvider",
    "StaticInputProvider",
    "clean_source_path",
    "collect_request",
]
