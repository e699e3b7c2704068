"""Unit tests for logging context module."""

import logging
import threading

from subtitler.logging.context import (
    JobContextFilter,
    get_job_context,
    job_context,
)


class TestJobContextManager:
    """Tests for the job_context context manager."""

    def test_default_context_is_none(self) -> None:
        """Outside a job there is no context."""
        assert get_job_context() is None

    def test_sets_and_restores(self) -> None:
        """Context is set inside the block and restored after."""
        with job_context("/media/a.mp4"):
            assert get_job_context() == "/media/a.mp4"
        assert get_job_context() is None

    def test_nested_restores_outer(self) -> None:
        """Nested contexts restore the outer value."""
        with job_context("/media/a.mp4"):
            with job_context("/media/b.mp4"):
                assert get_job_context() == "/media/b.mp4"
            assert get_job_context() == "/media/a.mp4"

    def test_restores_on_exception(self) -> None:
        """Context is restored when the block raises."""
        try:
            with job_context("/media/a.mp4"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_job_context() is None

    def test_not_shared_with_new_threads(self) -> None:
        """A plain new thread starts without the caller's context."""
        seen: list[str | None] = []
        with job_context("/media/a.mp4"):
            thread = threading.Thread(target=lambda: seen.append(get_job_context()))
            thread.start()
            thread.join()
        assert seen == [None]


class TestJobContextFilter:
    """Tests for JobContextFilter."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    def test_injects_context(self) -> None:
        """Records inside a job carry source and tag."""
        record = self._record()
        with job_context("/media/talk.mp4"):
            assert JobContextFilter().filter(record) is True
        assert record.job_source == "/media/talk.mp4"
        assert record.job_tag == "[talk.mp4] "

    def test_outside_job(self) -> None:
        """Records outside a job get an empty tag."""
        record = self._record()
        JobContextFilter().filter(record)
        assert record.job_source is None
        assert record.job_tag == ""
