"""One-shot transcription run.

A run resolves the execution profile, fetches the assets the job needs,
runs the extract/recognize pipeline, and moves the subtitle file to a
collision-free name in the outputs directory. Every phase completes (or
fails) before the next one starts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from subtitler.assets.fetcher import HttpFetcher
from subtitler.assets.manifest import build_manifest
from subtitler.assets.resolver import AssetResolver, ResolveResult
from subtitler.config.loader import get_root_dir
from subtitler.config.models import SubtitlerConfig
from subtitler.core.naming import move_to_available_name
from subtitler.executor.pipeline import OutputCallback, StageRunner, run_pipeline
from subtitler.executor.stages import (
    SUBTITLE_FORMAT,
    build_extract_stage,
    build_recognize_stage,
    recognizer_output_path,
)
from subtitler.jobs.exceptions import InputError
from subtitler.jobs.models import (
    AssetManifest,
    Backend,
    EnvironmentProfile,
    JobRequest,
    OutputArtifact,
    QualityTier,
)
from subtitler.jobs.progress import DownloadReporter
from subtitler.logging.context import job_context
from subtitler.tools.detection import default_recognizer_path, find_ffmpeg
from subtitler.tools.environment import resolve_profile
from subtitler.workflow.layout import DirectoryLayout

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a completed transcription run."""

    output_path: Path
    profile: EnvironmentProfile
    fetched_assets: list[str] = field(default_factory=list)


class TranscriptionOrchestrator:
    """Run transcription jobs against a directory layout.

    Collaborators are injected so tests can replace the network and the
    external processes.
    """

    def __init__(
        self,
        layout: DirectoryLayout,
        resolver: AssetResolver,
        runner: StageRunner,
        *,
        ffmpeg_path: Path,
        default_recognizer: Path,
        env: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.layout = layout
        self._resolver = resolver
        self._runner = runner
        self._ffmpeg_path = ffmpeg_path
        self._default_recognizer = default_recognizer
        self._env = env
        self._clock = clock

    def close(self) -> None:
        """Release network resources held by the asset resolver."""
        self._resolver.close()

    def __enter__(self) -> TranscriptionOrchestrator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def resolve_profile(self, backend: Backend) -> EnvironmentProfile:
        """Resolve the recognizer profile for a backend in this layout."""
        return resolve_profile(
            self.layout.accelerator,
            backend,
            default_recognizer=self._default_recognizer,
            env=self._env,
        )

    def manifest_for(self, request: JobRequest) -> AssetManifest:
        """Asset manifest of a request in this layout."""
        return build_manifest(request.model, request.backend, self.layout.models)

    def fetch_assets(self, quality: QualityTier, backend: Backend) -> ResolveResult:
        """Download the assets a job with this tier and backend would need.

        Raises:
            LayoutError: If the working directories cannot be created.
            AssetResolutionError: If any asset failed to download.
        """
        self.layout.ensure()
        manifest = build_manifest(quality.model, backend, self.layout.models)
        return self._resolver.resolve(manifest)

    def run(self, request: JobRequest) -> RunResult:
        """Transcribe one media file.

        Args:
            request: Validated job request.

        Returns:
            RunResult with the final subtitle path.

        Raises:
            InputError: If the source file does not exist.
            LayoutError: If the working directories cannot be created.
            AssetResolutionError: If any required asset failed to download.
            StageError: If audio extraction or recognition failed.
            OutputMoveError: If the subtitle file cannot be moved into place.
        """
        with job_context(request.source_path):
            if not request.source_path.is_file():
                raise InputError(f"Source file not found: {request.source_path}")

            self.layout.ensure()

            profile = self.resolve_profile(request.backend)
            manifest = self.manifest_for(request)
            resolved = self._resolver.resolve(manifest)

            wav_path = self.layout.scratch_audio_path(
                request.source_path.stem, self._clock()
            )
            stages = [
                build_extract_stage(self._ffmpeg_path, request.source_path, wav_path),
                build_recognize_stage(
                    profile, manifest.base_model_path, request.language, wav_path
                ),
            ]
            run_pipeline(stages, self._runner)

            artifact = OutputArtifact.for_source(
                request.source_path,
                recognizer_output_path(wav_path),
                self.layout.outputs,
                f".{SUBTITLE_FORMAT}",
            )
            output_path = move_to_available_name(artifact)
            logger.info("Subtitles written to %s", output_path)
            return RunResult(
                output_path=output_path,
                profile=profile,
                fetched_assets=resolved.fetched,
            )


def build_orchestrator(
    config: SubtitlerConfig,
    *,
    reporter: DownloadReporter | None = None,
    on_output: OutputCallback | None = None,
) -> TranscriptionOrchestrator:
    """Build an orchestrator wired to the real network and tools.

    Args:
        config: Effective configuration.
        reporter: Download progress reporter.
        on_output: Callback receiving every stage output line.

    Returns:
        Orchestrator for the configured root directory.
    """
    layout = DirectoryLayout.from_root(get_root_dir(config))
    fetcher = HttpFetcher(
        timeout=config.assets.timeout_seconds,
        user_agent=config.assets.user_agent,
    )
    resolver = AssetResolver(fetcher, config.assets.base_url, reporter)
    return TranscriptionOrchestrator(
        layout,
        resolver,
        StageRunner(on_output=on_output),
        ffmpeg_path=find_ffmpeg(layout.bin, config.tools.ffmpeg),
        default_recognizer=default_recognizer_path(
            layout.bin, config.tools.recognizer
        ),
    )
