"""Working directory layout of a subtitler root.

    <root>/bin/            bundled ffmpeg and the default whisper.cpp build
    <root>/bin/openvino/   OpenVINO whisper.cpp build and runtime
    <root>/models/         downloaded ggml model files
    <root>/tmp/            scratch audio
    <root>/outputs/        final subtitle files
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from subtitler.jobs.exceptions import LayoutError

logger = logging.getLogger(__name__)

# Timestamp appended to scratch audio names
SCRATCH_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


@dataclass(frozen=True)
class DirectoryLayout:
    """Resolved directories under a root."""

    root: Path
    bin: Path
    accelerator: Path
    models: Path
    tmp: Path
    outputs: Path

    @classmethod
    def from_root(cls, root: Path) -> DirectoryLayout:
        """Build the layout for a root directory."""
        root = root.expanduser()
        bin_dir = root / "bin"
        return cls(
            root=root,
            bin=bin_dir,
            accelerator=bin_dir / "openvino",
            models=root / "models",
            tmp=root / "tmp",
            outputs=root / "outputs",
        )

    def ensure(self) -> None:
        """Create the directories a run writes to.

        Raises:
            LayoutError: If a directory cannot be created or is not a directory.
        """
        for directory in (self.models, self.tmp, self.outputs):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except FileExistsError as e:
                raise LayoutError(directory, "exists and is not a directory") from e
            except OSError as e:
                raise LayoutError(directory, str(e)) from e
        logger.debug("Directory layout ready under %s", self.root)

    def scratch_audio_path(self, stem: str, now: datetime) -> Path:
        """Timestamped scratch WAV path for a source file stem."""
        return self.tmp / f"{stem}{now.strftime(SCRATCH_TIMESTAMP_FORMAT)}.wav"
