"""Tests for logging configuration and JSON output."""

import json
import logging
from pathlib import Path

import pytest

from subtitler.config.models import LoggingConfig
from subtitler.logging.config import configure_logging
from subtitler.logging.context import job_context
from subtitler.logging.handlers import JSONFormatter


@pytest.fixture
def restore_root_logger():
    """Restore the root logger's handlers and level after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_sets_level(self) -> None:
        """Root level follows the config."""
        configure_logging(LoggingConfig(level="debug"))
        assert logging.getLogger().level == logging.DEBUG

    def test_writes_to_file_with_job_tag(self, tmp_path: Path) -> None:
        """Text format includes the job tag inside a job."""
        log_file = tmp_path / "logs" / "subtitler.log"
        configure_logging(LoggingConfig(level="info", file=log_file))

        with job_context("/media/talk.mp4"):
            logging.getLogger("subtitler.test").info("resolving assets")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "INFO [talk.mp4] subtitler.test: resolving assets" in content

    def test_unwritable_file_falls_back_to_stderr(self, tmp_path: Path) -> None:
        """A log file that cannot be opened leaves stderr logging in place."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        configure_logging(LoggingConfig(file=blocker / "subtitler.log"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)

    def test_quiets_httpx(self) -> None:
        """httpx request logging stays at WARNING even in debug mode."""
        configure_logging(LoggingConfig(level="debug"))
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_format_to_file(self, tmp_path: Path) -> None:
        """JSON format writes one object per line with context."""
        log_file = tmp_path / "subtitler.log"
        configure_logging(LoggingConfig(level="info", file=log_file, format="json"))

        with job_context("/media/talk.mp4"):
            logging.getLogger("subtitler.test").info(
                "stage done", extra={"stage": "extract-audio"}
            )
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "stage done"
        assert entry["context"] == {
            "stage": "extract-audio",
            "job_source": "/media/talk.mp4",
        }


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_skips_empty_context(self) -> None:
        """Records without extras have no context key."""
        record = logging.LogRecord(
            "subtitler", logging.WARNING, __file__, 1, "hello %s", ("x",), None
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello x"
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "subtitler"
        assert "context" not in entry

    def test_stage_fields_in_context(self) -> None:
        """Stage runner extras are kept; unrelated extras are dropped."""
        record = logging.LogRecord(
            "subtitler.executor", logging.DEBUG, __file__, 1, "done", None, None
        )
        record.stage = "recognize-speech"
        record.returncode = 0
        record.elapsed_seconds = 1.5
        record.password = "hunter2"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["context"] == {
            "stage": "recognize-speech",
            "returncode": 0,
            "elapsed_seconds": 1.5,
        }

    def test_timestamp_is_utc(self) -> None:
        """Timestamps are ISO-8601 in UTC."""
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "m", None, None)
        record.created = 0.0
        entry = json.loads(JSONFormatter().format(record))
        assert entry["timestamp"] == "1970-01-01T00:00:00.000+00:00"
