"""The 'subtitler transcribe' command."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from subtitler.cli.common import (
    QUALITY_CHOICES,
    exit_code_for,
    load_command_config,
    root_dir_option,
)
from subtitler.cli.exit_codes import ExitCode
from subtitler.cli.output import TranscribeSummary, error_exit, success_output
from subtitler.executor.pipeline import log_output
from subtitler.jobs.exceptions import SubtitlerError
from subtitler.jobs.models import QualityTier
from subtitler.jobs.progress import StderrDownloadReporter
from subtitler.prompts import (
    ClickInputProvider,
    InputProvider,
    StaticInputProvider,
    clean_source_path,
    collect_request,
)
from subtitler.tools.detection import is_intel_cpu
from subtitler.workflow.orchestrator import build_orchestrator

logger = logging.getLogger(__name__)


def _echo_stage_output(stream: str, line: str) -> None:
    """Echo a stage output line to the terminal."""
    click.echo(line)


def _build_provider(
    source: str | None,
    quality: QualityTier | None,
    language: str | None,
    accelerated: bool | None,
    json_output: bool,
) -> InputProvider:
    """Pick the input provider: prompts on a TTY, canned answers otherwise."""
    from subtitler.cli import _is_interactive

    source_path = clean_source_path(source) if source is not None else None
    if _is_interactive():
        return ClickInputProvider(
            source=source_path,
            quality=quality,
            language=language,
            accelerator=accelerated,
        )

    if source_path is None:
        error_exit(
            "SOURCE is required when not running interactively",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
        )
    return StaticInputProvider(
        source=source_path,
        quality=quality or QualityTier.SPEED,
        language_code=language or "auto",
        accelerator=bool(accelerated),
    )


@click.command("transcribe")
@click.argument("source", required=False)
@click.option(
    "--quality",
    type=QUALITY_CHOICES,
    default=None,
    help="performance (large-v3 model) or speed (medium model).",
)
@click.option(
    "--language",
    default=None,
    help="Spoken language code (e.g. en, ja, zh) or 'auto'.",
)
@click.option(
    "--accelerated/--no-accelerated",
    default=None,
    help="Run recognition on the OpenVINO backend.",
)
@root_dir_option
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output the result as JSON.",
)
@click.pass_context
def transcribe_command(
    ctx: click.Context,
    source: str | None,
    quality: str | None,
    language: str | None,
    accelerated: bool | None,
    root_dir: Path | None,
    json_output: bool,
) -> None:
    """Generate a subtitle file for SOURCE.

    Any value not given on the command line is asked for interactively.
    The subtitle file is written to the outputs/ directory of the working
    root, named after SOURCE and never overwriting an existing file.

    \b
    Examples:
        subtitler transcribe talk.mp4 --quality speed --language en
        subtitler transcribe
    """
    config = load_command_config(ctx, root_dir, json_output)
    tier = QualityTier(quality.lower()) if quality else None

    provider = _build_provider(source, tier, language, accelerated, json_output)
    # An explicit --accelerated also enables the backend on non-Intel CPUs
    accelerator_available = bool(accelerated) or is_intel_cpu()

    try:
        request = collect_request(provider, accelerator_available)
    except SubtitlerError as e:
        error_exit(str(e), exit_code_for(e), json_output)

    reporter = StderrDownloadReporter(enabled=not json_output)
    on_output = log_output if json_output else _echo_stage_output

    try:
        with build_orchestrator(
            config, reporter=reporter, on_output=on_output
        ) as orchestrator:
            result = orchestrator.run(request)
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED, json_output)
    except SubtitlerError as e:
        logger.error("Transcription of %s failed: %s", request.source_path, e)
        error_exit(str(e), exit_code_for(e), json_output)

    success_output(TranscribeSummary(request, result), json_output)
