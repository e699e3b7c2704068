"""The 'subtitler profile' command."""

from __future__ import annotations

import json
from pathlib import Path

import click

from subtitler.cli.common import load_command_config, root_dir_option
from subtitler.core.formatting import format_env_overrides
from subtitler.jobs.models import Backend
from subtitler.workflow.orchestrator import build_orchestrator


@click.command("profile")
@click.option(
    "--accelerated",
    is_flag=True,
    default=False,
    help="Resolve the OpenVINO backend instead of the default one.",
)
@root_dir_option
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output the profile as JSON.",
)
@click.pass_context
def profile_command(
    ctx: click.Context,
    accelerated: bool,
    root_dir: Path | None,
    json_output: bool,
) -> None:
    """Show the recognizer binary and environment a backend would use."""
    config = load_command_config(ctx, root_dir, json_output)
    backend = Backend.ACCELERATED if accelerated else Backend.DEFAULT

    with build_orchestrator(config) as orchestrator:
        profile = orchestrator.resolve_profile(backend)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "backend": backend.value,
                    "recognizer_path": str(profile.recognizer_path),
                    "env_overrides": dict(profile.env_overrides),
                },
                indent=2,
            )
        )
        return

    click.echo(f"Backend:    {backend.value}")
    click.echo(f"Recognizer: {profile.recognizer_path}")
    if profile.env_overrides:
        click.echo("Environment:")
        for line in format_env_overrides(profile.env_overrides):
            click.echo(f"  {line}")
    else:
        click.echo("Environment: (inherited, no overrides)")
