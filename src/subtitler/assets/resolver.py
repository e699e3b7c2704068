"""Concurrent asset resolution.

Resolving a manifest checks which destination files already exist, then
downloads every missing one concurrently, one thread per asset. The phase
completes only when every download has reported success or failure; if
any failed, the whole phase fails.
"""

from __future__ import annotations

import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from subtitler.assets.fetcher import Fetcher
from subtitler.assets.manifest import DEFAULT_MODEL_BASE_URL, build_download_task
from subtitler.jobs.exceptions import AssetResolutionError
from subtitler.jobs.models import AssetManifest, DownloadTask
from subtitler.jobs.progress import DownloadReporter, NullDownloadReporter

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Outcome of a successful resolve pass."""

    fetched: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class AssetResolver:
    """Ensure every asset of a manifest exists locally.

    Existence is the only success criterion, so resolving is idempotent:
    assets present on disk are never fetched again, and re-running after a
    partial failure downloads only what is still missing.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        base_url: str = DEFAULT_MODEL_BASE_URL,
        reporter: DownloadReporter | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url
        self._reporter: DownloadReporter = reporter or NullDownloadReporter()

    def close(self) -> None:
        """Close the underlying fetcher."""
        self._fetcher.close()

    def missing_tasks(self, manifest: AssetManifest) -> list[DownloadTask]:
        """Return download tasks for manifest entries not present on disk."""
        tasks: list[DownloadTask] = []
        for name, destination in manifest.items():
            if destination.exists():
                logger.debug("Asset %s already present at %s", name, destination)
                continue
            tasks.append(build_download_task(self._base_url, name, destination))
        return tasks

    def resolve(self, manifest: AssetManifest) -> ResolveResult:
        """Fetch every missing asset of the manifest concurrently.

        Args:
            manifest: Assets required by the job.

        Returns:
            ResolveResult naming the fetched and skipped assets.

        Raises:
            AssetResolutionError: If any download failed. Successful
                downloads from the same pass are kept.
        """
        tasks = self.missing_tasks(manifest)
        fetched_names = {task.name for task in tasks}
        result = ResolveResult(
            skipped=[name for name in manifest if name not in fetched_names]
        )
        if not tasks:
            logger.info("All %d assets already present", len(manifest))
            return result

        logger.info("Downloading %d of %d assets", len(tasks), len(manifest))
        failures: dict[str, BaseException] = {}
        with ThreadPoolExecutor(
            max_workers=len(tasks), thread_name_prefix="asset-fetch"
        ) as executor:
            # Each fetch thread runs in a copy of the caller's logging context
            futures = {
                executor.submit(
                    contextvars.copy_context().run, self._fetch_one, task
                ): task
                for task in tasks
            }
            for future in as_completed(futures):
                task = futures[future]
                error = future.exception()
                if error is None:
                    result.fetched.append(task.name)
                else:
                    failures[task.name] = error

        if failures:
            for name, error in failures.items():
                logger.error("Download of %s failed: %s", name, error)
            raise AssetResolutionError(failures)
        return result

    def _fetch_one(self, task: DownloadTask) -> None:
        """Download one asset, reporting start, progress, and completion."""
        started = False

        def progress(done: int, total: int | None) -> None:
            nonlocal started
            if not started:
                started = True
                self._reporter.on_start(task.name, total)
            self._reporter.on_advance(task.name, done, total)

        try:
            self._fetcher.fetch(task.url, task.destination, progress)
        except Exception as e:
            if not started:
                self._reporter.on_start(task.name, None)
            self._reporter.on_complete(task.name, success=False, message=str(e))
            raise
        self._reporter.on_complete(task.name, success=True)
