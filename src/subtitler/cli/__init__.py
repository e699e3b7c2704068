"""Command-line interface for local-subtitler.

The ``subtitler`` group owns the options shared by every command (logging
and the config file) and configures logging once before a command runs.
"""

import sys
from pathlib import Path

import click

from subtitler.cli.exit_codes import ExitCode
from subtitler.cli.output import error_exit
from subtitler.config.toml_parser import ConfigError

LOG_LEVELS = ("debug", "info", "warning", "error")

# CliRunner tests invoke main() repeatedly in one process
_logging_configured: bool = False


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Set up logging from the [logging] table and the --log-* options."""
    global _logging_configured
    if _logging_configured:
        return

    from subtitler.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(
        config_path=config_path,
        level=log_level,
        file=log_file,
        json_format=log_json,
    )
    _logging_configured = True


def _is_interactive() -> bool:
    """True when prompts can be shown, i.e. stdin is a terminal."""
    return sys.stdin.isatty()


@click.group()
@click.version_option(package_name="local-subtitler")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level [default: warning, or the config file's].",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write logs to this rotating file instead of stderr.",
)
@click.option(
    "--log-json",
    is_flag=True,
    help="Write log records as JSON lines.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file to load; must exist [default: ~/.subtitler/config.toml].",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """Generate subtitles for local media files with whisper.cpp."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    try:
        _configure_logging(config_path, log_level, log_file, log_json)
    except (ConfigError, ValueError) as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)


# Command modules import from this package, so they are attached last
def _register_commands() -> None:
    from subtitler.cli.models import fetch_models_command
    from subtitler.cli.profile import profile_command
    from subtitler.cli.transcribe import transcribe_command

    for command in (transcribe_command, fetch_models_command, profile_command):
        main.add_command(command)


_register_commands()
