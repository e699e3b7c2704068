"""Sequential external-process pipeline with streamed output.

Each stage's stdout and stderr are drained by two reader threads that feed
a single queue. The calling thread is the only consumer and hands every
line to the output callback as it arrives, so a chatty stage can never
block on a full pipe and no trailing output is lost: a stage's result is
returned only after both streams reached EOF and the process exited.
"""

from __future__ import annotations

import logging
import os
import queue
import subprocess  # nosec B404 - subprocess is required for tool invocation
import threading
import time
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import IO, cast

from subtitler.jobs.exceptions import (
    StageExitError,
    StageOutputError,
    StageStartError,
)
from subtitler.jobs.models import PipelineStage

logger = logging.getLogger(__name__)

OutputCallback = Callable[[str, str], None]

STDOUT = "stdout"
STDERR = "stderr"


def log_output(stream: str, line: str) -> None:
    """Default output callback: log each line at debug level."""
    logger.debug("[%s] %s", stream, line)


class StageRunner:
    """Run one pipeline stage, streaming its output line by line."""

    # Seconds to wait for reader threads after killing a stage
    READER_JOIN_TIMEOUT = 2.0

    def __init__(
        self,
        on_output: OutputCallback | None = None,
        base_env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            on_output: Called as (stream, line) for every output line, from
                the thread that called run(). Defaults to debug logging.
            base_env: Environment stages inherit (default os.environ).
        """
        self._on_output = on_output or log_output
        self._base_env = base_env

    def _stage_env(self, stage: PipelineStage) -> dict[str, str]:
        env = dict(self._base_env if self._base_env is not None else os.environ)
        env.update(stage.env_overrides)
        return env

    def run(self, stage: PipelineStage) -> None:
        """Run a stage to completion.

        Args:
            stage: Stage to run.

        Raises:
            StageStartError: If the process could not be started.
            StageExitError: If the process exited with a non-zero code.
            StageOutputError: If reading stdout or stderr failed.

        An exception raised by the output callback kills and reaps the
        process, then propagates unchanged.
        """
        command = stage.command
        command_name = Path(command[0]).name
        logger.debug(
            "Executing command: %s",
            " ".join(command),
            extra={
                "stage": stage.name,
                "command": command_name,
                "env_overrides": sorted(stage.env_overrides),
            },
        )
        start_time = time.monotonic()

        try:
            process = subprocess.Popen(  # nosec B603 - args built by stage builders
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                env=self._stage_env(stage),
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise StageStartError(stage.name, stage.executable, str(e)) from e

        stdout = cast(IO[str], process.stdout)
        stderr = cast(IO[str], process.stderr)

        lines: queue.Queue[tuple[str, str | None]] = queue.Queue()
        read_errors: dict[str, str] = {}

        def drain(stream: str, pipe: IO[str]) -> None:
            """Read lines from a pipe and put them in the queue."""
            try:
                for line in pipe:
                    lines.put((stream, line.rstrip("\r\n")))
            except (OSError, ValueError) as e:
                read_errors[stream] = str(e)
            finally:
                pipe.close()
                lines.put((stream, None))  # Signal end of stream

        readers = [
            threading.Thread(target=drain, args=(STDOUT, stdout), daemon=True),
            threading.Thread(target=drain, args=(STDERR, stderr), daemon=True),
        ]
        for reader in readers:
            reader.start()

        try:
            open_streams = len(readers)
            while open_streams:
                stream, line = lines.get()
                if line is None:
                    open_streams -= 1
                    continue
                self._on_output(stream, line)

            for reader in readers:
                reader.join()
        except BaseException:
            logger.warning("Stopping stage %s after an error", stage.name)
            process.kill()
            process.wait()  # Clean up zombie process
            for reader in readers:
                reader.join(timeout=self.READER_JOIN_TIMEOUT)
            raise
        returncode = process.wait()

        elapsed = time.monotonic() - start_time
        logger.debug(
            "Command completed",
            extra={
                "stage": stage.name,
                "command": command_name,
                "elapsed_seconds": round(elapsed, 3),
                "returncode": returncode,
            },
        )

        if returncode != 0:
            raise StageExitError(stage.name, returncode)
        for stream in (STDOUT, STDERR):
            if stream in read_errors:
                raise StageOutputError(stage.name, stream, read_errors[stream])


def cleanup_scratch_file(path: Path) -> None:
    """Remove a scratch file, logging any errors.

    Args:
        path: Path to scratch file to remove.
    """
    if path.exists():
        try:
            path.unlink()
            logger.debug("Cleaned up scratch file: %s", path)
        except OSError as e:
            logger.warning("Could not clean up scratch file %s: %s", path, e)


def run_pipeline(stages: Iterable[PipelineStage], runner: StageRunner) -> None:
    """Run stages strictly in order, aborting on the first failure.

    Scratch outputs of every stage that succeeded are removed once the
    pipeline has finished, whether or not later stages failed.

    Args:
        stages: Stages to run, in order.
        runner: Runner executing each stage.

    Raises:
        StageError: From the first stage that failed. Later stages never run.
    """
    stage_list = list(stages)
    scratch: list[Path] = []
    try:
        for index, stage in enumerate(stage_list, start=1):
            logger.info("Running stage %d/%d: %s", index, len(stage_list), stage.name)
            runner.run(stage)
            scratch.extend(stage.scratch_outputs)
    finally:
        for path in scratch:
            cleanup_scratch_file(path)
