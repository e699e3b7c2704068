"""Tests for CLI output helpers."""

import json
from pathlib import Path

import pytest

from subtitler.cli.exit_codes import ExitCode
from subtitler.cli.output import TranscribeSummary, error_exit, success_output
from subtitler.jobs.models import Backend, EnvironmentProfile, JobRequest, QualityTier
from subtitler.workflow.orchestrator import RunResult


@pytest.fixture
def summary(tmp_path: Path) -> TranscribeSummary:
    request = JobRequest(
        source_path=tmp_path / "talk.mp4",
        quality=QualityTier.SPEED,
        language="en",
        backend=Backend.ACCELERATED,
    )
    result = RunResult(
        output_path=tmp_path / "outputs" / "talk(1).vtt",
        profile=EnvironmentProfile(
            recognizer_path=tmp_path / "bin" / "openvino" / "main",
            env_overrides={"PATH": "/x", "INTEL_OPENVINO_DIR": "/ov"},
        ),
        fetched_assets=["ggml-medium.bin"],
    )
    return TranscribeSummary(request, result)


class TestTranscribeSummary:
    """Tests for TranscribeSummary."""

    def test_message_names_output(self, summary: TranscribeSummary) -> None:
        """The text message points at the collision-free output path."""
        assert summary.message.endswith("talk(1).vtt")

    def test_payload(self, summary: TranscribeSummary, tmp_path: Path) -> None:
        """The JSON payload carries the request and the run outcome."""
        payload = summary.to_dict()

        assert payload["status"] == "completed"
        assert payload["output_path"] == str(tmp_path / "outputs" / "talk(1).vtt")
        assert payload["model"] == "medium"
        assert payload["backend"] == "accelerated"
        assert payload["env_overrides"] == ["INTEL_OPENVINO_DIR", "PATH"]
        assert payload["fetched_assets"] == ["ggml-medium.bin"]

    def test_success_output_json(
        self, summary: TranscribeSummary, capsys: pytest.CaptureFixture
    ) -> None:
        """JSON mode prints the payload on stdout."""
        success_output(summary, json_output=True)
        assert json.loads(capsys.readouterr().out) == summary.to_dict()


class TestErrorExit:
    """Tests for error_exit function."""

    def test_exits_with_code(self, capsys: pytest.CaptureFixture) -> None:
        """Exits with the numeric code and prints to stderr."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("boom", ExitCode.TOOL_NOT_AVAILABLE)

        assert exc_info.value.code == 30
        assert capsys.readouterr().err == "Error: boom\n"

    def test_json_error(self, capsys: pytest.CaptureFixture) -> None:
        """JSON mode prints a structured error."""
        with pytest.raises(SystemExit):
            error_exit("boom", ExitCode.CONFIG_ERROR, json_output=True)

        payload = json.loads(capsys.readouterr().err)
        assert payload == {
            "status": "failed",
            "error": {"code": "CONFIG_ERROR", "message": "boom"},
        }
