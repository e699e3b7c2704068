"""Interactive input provider built on click prompts.

Values already supplied on the command line are returned without asking.
"""

from __future__ import annotations

from pathlib import Path

import click

from subtitler.jobs.models import QualityTier
from subtitler.prompts.interface import clean_source_path

_TIER_ORDER: tuple[QualityTier, ...] = (QualityTier.PERFORMANCE, QualityTier.SPEED)


class ClickInputProvider:
    """InputProvider that prompts on the terminal for missing answers."""

    def __init__(
        self,
        source: Path | None = None,
        quality: QualityTier | None = None,
        language: str | None = None,
        accelerator: bool | None = None,
    ) -> None:
        self._source = source
        self._quality = quality
        self._language = language
        self._accelerator = accelerator

    def source_path(self) -> Path:
        if self._source is not None:
            return self._source
        raw = click.prompt("Enter file path or drag and drop the file", type=str)
        return clean_source_path(raw)

    def quality_tier(self) -> QualityTier:
        if self._quality is not None:
            return self._quality
        click.echo("Priority:")
        for number, tier in enumerate(_TIER_ORDER, start=1):
            click.echo(f"  {number}) {tier.description}")
        choice = click.prompt(
            "Select",
            type=click.IntRange(1, len(_TIER_ORDER)),
            default=1,
        )
        return _TIER_ORDER[choice - 1]

    def language(self) -> str:
        if self._language is not None:
            return self._language
        return click.prompt(
            "Enter language code (e.g., 'en', 'ja', 'zh')",
            default="auto",
            type=str,
        )

    def use_accelerator(self) -> bool:
        if self._accelerator is not None:
            return self._accelerator
        return click.confirm("Intel CPU detected. Enable OpenVINO?", default=True)
