"""Helpers shared by the subtitler commands."""

from __future__ import annotations

from pathlib import Path

import click

from subtitler.cli.exit_codes import ExitCode
from subtitler.cli.output import error_exit
from subtitler.config import ConfigError, SubtitlerConfig, get_config
from subtitler.jobs.exceptions import (
    AssetResolutionError,
    InputError,
    OutputMoveError,
    StageError,
    StageStartError,
    SubtitlerError,
)

QUALITY_CHOICES = click.Choice(["performance", "speed"], case_sensitive=False)

root_dir_option = click.option(
    "--root-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Working root holding bin/, models/, tmp/ and outputs/.",
)


def load_command_config(
    ctx: click.Context,
    root_dir: Path | None,
    json_output: bool = False,
) -> SubtitlerConfig:
    """Load the effective configuration for a command, exiting on errors.

    A file named with the global --config option must exist and parse.
    """
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return get_config(
            config_path=config_path,
            root_dir=root_dir,
            strict=config_path is not None,
        )
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)


def exit_code_for(error: SubtitlerError) -> ExitCode:
    """Map a run error to the command's exit code."""
    if isinstance(error, InputError):
        return ExitCode.TARGET_NOT_FOUND
    if isinstance(error, AssetResolutionError):
        return ExitCode.ASSET_DOWNLOAD_FAILED
    if isinstance(error, StageStartError):
        return ExitCode.TOOL_NOT_AVAILABLE
    if isinstance(error, StageError):
        return ExitCode.STAGE_FAILED
    if isinstance(error, OutputMoveError):
        return ExitCode.OUTPUT_MOVE_FAILED
    return ExitCode.GENERAL_ERROR
