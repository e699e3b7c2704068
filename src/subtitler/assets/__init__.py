"""Model asset manifests and concurrent downloads."""

from subtitler.assets.fetcher import Fetcher, HttpFetcher
from subtitler.assets.manifest import (
    DEFAULT_MODEL_BASE_URL,
    build_download_task,
    build_manifest,
)
from subtitler.assets.resolver import AssetResolver, ResolveResult

__all__ = [
    "DEFAULT_MODEL_BASE_URL",
    "AssetResolver",
    "Fetcher",
    "HttpFetcher",
    "ResolveResult",
    "build_download_task",
    "build_manifest",
]
