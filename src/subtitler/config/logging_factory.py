"""Apply the global --log-* options on top of the [logging] config table."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from subtitler.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> LoggingConfig:
    """Return base with the command-line logging options applied.

    Options left at their defaults keep the configured value, so ``--log-json``
    can only switch JSON on. The merged config is validated again.

    Raises:
        ValueError: If an override is not a valid logging setting.
    """
    overrides: dict[str, Any] = {}
    if level is not None:
        overrides["level"] = level
    if file is not None:
        overrides["file"] = file
    if json_format:
        overrides["format"] = "json"
    return replace(base, **overrides)


def configure_logging_from_cli(
    *,
    config_path: Path | None = None,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> None:
    """Configure logging for a command invocation.

    A file named with --config must load; the default config file is
    optional and skipped with a warning when it cannot be parsed.

    Raises:
        ConfigError: If the config file is invalid.
        ValueError: If an override is not a valid logging setting.
    """
    from subtitler.config.loader import get_config
    from subtitler.logging import configure_logging

    config = get_config(config_path=config_path, strict=config_path is not None)
    configure_logging(
        build_logging_config(
            config.logging, level=level, file=file, json_format=json_format
        )
    )
