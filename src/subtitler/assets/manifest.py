"""Asset manifest construction.

The manifest names every file the recognition stage needs for a given model
and backend. The accelerated backend additionally needs the OpenVINO
encoder descriptor and its companion weights.
"""

from __future__ import annotations

from pathlib import Path

from subtitler.jobs.models import AssetManifest, Backend, DownloadTask

# Remote location of the ggml model files
DEFAULT_MODEL_BASE_URL = "https://huggingface.co/cyaoc/whisper-ggml/resolve/main/models"


def base_model_name(model: str) -> str:
    """Logical name of the ggml weights for a model id."""
    return f"ggml-{model}.bin"


def encoder_asset_names(model: str) -> tuple[str, str]:
    """Logical names of the OpenVINO encoder descriptor and weights."""
    return (
        f"ggml-{model}-encoder-openvino.xml",
        f"ggml-{model}-encoder-openvino.bin",
    )


def build_manifest(model: str, backend: Backend, models_dir: Path) -> AssetManifest:
    """Build the asset manifest for a model and backend.

    Args:
        model: Model id (e.g. "medium", "large-v3").
        backend: Selected execution backend.
        models_dir: Directory the assets are stored in.

    Returns:
        Manifest with the base model entry, plus the encoder files when the
        backend is accelerated.
    """
    base = base_model_name(model)
    names = [base]
    if backend is Backend.ACCELERATED:
        names.extend(encoder_asset_names(model))
    return AssetManifest(base, {name: models_dir / name for name in names})


def asset_url(base_url: str, name: str) -> str:
    """Remote URL of an asset."""
    return f"{base_url.rstrip('/')}/{name}"


def build_download_task(base_url: str, name: str, destination: Path) -> DownloadTask:
    """Pair a manifest entry with its remote source URL."""
    return DownloadTask(
        name=name, url=asset_url(base_url, name), destination=destination
    )
