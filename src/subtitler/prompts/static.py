"""Input provider returning predetermined answers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from subtitler.jobs.models import QualityTier


@dataclass
class StaticInputProvider:
    """InputProvider with canned answers.

    Used when every answer is known up front (fully specified command
    lines, tests). Records which questions were asked.
    """

    source: Path
    quality: QualityTier = QualityTier.SPEED
    language_code: str = "auto"
    accelerator: bool = False

    def __post_init__(self) -> None:
        self.asked: list[str] = []

    def source_path(self) -> Path:
        self.asked.append("source_path")
        return self.source

    def quality_tier(self) -> QualityTier:
        self.asked.append("quality_tier")
        return self.quality

    def language(self) -> str:
        self.asked.append("language")
        return self.language_code

    def use_accelerator(self) -> bool:
        self.asked.append("use_accelerator")
        return self.accelerator
