"""The 'subtitler fetch-models' command."""

from __future__ import annotations

from pathlib import Path

import click

from subtitler.cli.common import (
    QUALITY_CHOICES,
    exit_code_for,
    load_command_config,
    root_dir_option,
)
from subtitler.cli.exit_codes import ExitCode
from subtitler.cli.output import error_exit
from subtitler.jobs.exceptions import SubtitlerError
from subtitler.jobs.models import Backend, QualityTier
from subtitler.jobs.progress import StderrDownloadReporter
from subtitler.workflow.orchestrator import build_orchestrator


@click.command("fetch-models")
@click.option(
    "--quality",
    type=QUALITY_CHOICES,
    default=QualityTier.SPEED.value,
    show_default=True,
    help="Quality tier whose model to download.",
)
@click.option(
    "--accelerated",
    is_flag=True,
    default=False,
    help="Also download the OpenVINO encoder files.",
)
@root_dir_option
@click.pass_context
def fetch_models_command(
    ctx: click.Context,
    quality: str,
    accelerated: bool,
    root_dir: Path | None,
) -> None:
    """Download the model files a transcription would need.

    Files already present in models/ are not downloaded again.
    """
    config = load_command_config(ctx, root_dir)
    tier = QualityTier(quality.lower())
    backend = Backend.ACCELERATED if accelerated else Backend.DEFAULT

    try:
        with build_orchestrator(
            config, reporter=StderrDownloadReporter()
        ) as orchestrator:
            result = orchestrator.fetch_assets(tier, backend)
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED)
    except SubtitlerError as e:
        error_exit(str(e), exit_code_for(e))

    for name in result.fetched:
        click.echo(f"Fetched: {name}")
    for name in result.skipped:
        click.echo(f"Present: {name}")
