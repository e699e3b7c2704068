"""Result and error output for the subtitler commands."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, NoReturn

import click

from subtitler.cli.exit_codes import ExitCode
from subtitler.jobs.models import JobRequest
from subtitler.workflow.orchestrator import RunResult


@dataclass(frozen=True)
class TranscribeSummary:
    """What a successful transcribe run reports back to the user."""

    request: JobRequest
    result: RunResult

    @property
    def message(self) -> str:
        return f"Subtitles written to {self.result.output_path}"

    def to_dict(self) -> dict[str, Any]:
        """Build the --json payload.

        env_overrides lists only the variable names; their values can hold
        long library paths and are shown by 'subtitler profile'.
        """
        return {
            "status": "completed",
            "output_path": str(self.result.output_path),
            "source_path": str(self.request.source_path),
            "model": self.request.model,
            "language": self.request.language,
            "backend": self.request.backend.value,
            "recognizer_path": str(self.result.profile.recognizer_path),
            "env_overrides": sorted(self.result.profile.env_overrides),
            "fetched_assets": list(self.result.fetched_assets),
        }


def error_exit(
    message: str,
    code: ExitCode,
    json_output: bool = False,
) -> NoReturn:
    """Print an error to stderr and exit with the command's exit code.

    In JSON mode the error is written as
    ``{"status": "failed", "error": {"code": <name>, "message": ...}}``.
    """
    if json_output:
        payload = {
            "status": "failed",
            "error": {"code": code.name, "message": message},
        }
        click.echo(json.dumps(payload), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def success_output(summary: TranscribeSummary, json_output: bool = False) -> None:
    """Report a finished transcription on stdout."""
    if json_output:
        click.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        click.echo(summary.message)
