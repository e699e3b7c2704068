"""Data models shared by the orchestration components.

These models describe one transcription run: the request handed in by the
prompt layer, the assets it needs, the resolved execution profile, and the
external-process stages that turn a media file into a subtitle track.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType


class QualityTier(Enum):
    """Trade-off between transcription quality and speed.

    Each tier maps to a whisper.cpp ggml model id.
    """

    PERFORMANCE = "performance"  # Best quality, large model, slower
    SPEED = "speed"  # Faster processing, medium model

    @property
    def model(self) -> str:
        """Model id used for this tier."""
        return _TIER_MODELS[self]

    @property
    def description(self) -> str:
        """Human-readable description shown by prompts."""
        return _TIER_DESCRIPTIONS[self]


_TIER_MODELS: dict[QualityTier, str] = {
    QualityTier.PERFORMANCE: "large-v3",
    QualityTier.SPEED: "medium",
}

_TIER_DESCRIPTIONS: dict[QualityTier, str] = {
    QualityTier.PERFORMANCE: "Performance: best quality with large model, but slower.",
    QualityTier.SPEED: "Speed: faster processing with medium model.",
}


class Backend(Enum):
    """Execution backend for the recognition stage."""

    DEFAULT = "default"  # Plain CPU build of whisper.cpp
    ACCELERATED = "accelerated"  # OpenVINO build with encoder offload


@dataclass(frozen=True)
class JobRequest:
    """Validated request for one transcription run.

    Created once by an input provider and read-only afterwards.
    """

    source_path: Path
    quality: QualityTier
    language: str = "auto"
    backend: Backend = Backend.DEFAULT

    def __post_init__(self) -> None:
        """Validate request fields."""
        if not self.language or not self.language.strip():
            raise ValueError("language must be a non-empty code or 'auto'")

    @property
    def model(self) -> str:
        """Model id selected by the quality tier."""
        return self.quality.model


class AssetManifest(Mapping[str, Path]):
    """Immutable mapping of logical asset name to local destination path.

    A manifest always contains the base model entry, so it is never empty.
    Use build_manifest() to construct one from a model id and backend.
    """

    def __init__(self, base_name: str, entries: Mapping[str, Path]) -> None:
        if base_name not in entries:
            raise ValueError(f"manifest must contain base asset {base_name}")
        self._base_name = base_name
        self._entries: Mapping[str, Path] = MappingProxyType(dict(entries))

    def __getitem__(self, name: str) -> Path:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AssetManifest({dict(self._entries)!r})"

    @property
    def base_name(self) -> str:
        """Logical name of the base model file."""
        return self._base_name

    @property
    def base_model_path(self) -> Path:
        """Destination path of the base model file."""
        return self._entries[self._base_name]


@dataclass(frozen=True)
class DownloadTask:
    """One missing manifest entry paired with its remote source."""

    name: str
    url: str
    destination: Path


@dataclass(frozen=True)
class EnvironmentProfile:
    """Recognizer binary and environment overrides for a backend.

    The overrides apply to the recognition stage's process only; the
    orchestrator's own environment is never modified.
    """

    recognizer_path: Path
    env_overrides: Mapping[str, str] = field(default_factory=dict)

    def merged_env(self, base: Mapping[str, str]) -> dict[str, str]:
        """Return a new environment of base plus this profile's overrides."""
        env = dict(base)
        env.update(self.env_overrides)
        return env


@dataclass(frozen=True)
class PipelineStage:
    """Description of one external-process step.

    Attributes:
        name: Stage name used in logs and errors.
        executable: Program to run.
        args: Arguments passed after the executable.
        env_overrides: Variables added to the inherited environment.
        scratch_outputs: Files this stage creates that are deleted once the
            whole pipeline has finished, provided this stage succeeded.
    """

    name: str
    executable: Path
    args: tuple[str, ...]
    env_overrides: Mapping[str, str] = field(default_factory=dict)
    scratch_outputs: tuple[Path, ...] = ()

    @property
    def command(self) -> list[str]:
        """Full argv for the stage."""
        return [str(self.executable), *self.args]


@dataclass(frozen=True)
class OutputArtifact:
    """Subtitle file produced by the final stage, awaiting its final name."""

    produced_path: Path
    output_dir: Path
    base_name: str
    extension: str

    @classmethod
    def for_source(
        cls,
        source_path: Path,
        produced_path: Path,
        output_dir: Path,
        extension: str,
    ) -> OutputArtifact:
        """Build an artifact named after the source file without its suffix."""
        return cls(
            produced_path=produced_path,
            output_dir=output_dir,
            base_name=source_path.stem,
            extension=extension,
        )
