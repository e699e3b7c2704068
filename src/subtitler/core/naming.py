"""Collision-free output file naming.

Subtitle files are never overwritten: when ``clip.vtt`` exists in the
output directory the next result becomes ``clip(1).vtt``, then
``clip(2).vtt`` and so on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from subtitler.jobs.exceptions import OutputMoveError
from subtitler.jobs.models import OutputArtifact

logger = logging.getLogger(__name__)


def next_available_name(directory: Path, base_name: str, extension: str) -> str:
    """Return the first file name in directory that does not exist yet.

    Tries ``base_name + extension`` first, then ``base_name(1) + extension``,
    ``base_name(2) + extension``, ... Only stats the filesystem; nothing is
    created, so the caller must move its file into place promptly.

    Args:
        directory: Directory the name must be unique in.
        base_name: Desired name without extension.
        extension: Extension including the leading dot (e.g. ".vtt").

    Returns:
        A file name (not a path) that is unused in directory.
    """
    candidate = f"{base_name}{extension}"
    index = 0
    while (directory / candidate).exists():
        index += 1
        candidate = f"{base_name}({index}){extension}"
    return candidate


def move_to_available_name(artifact: OutputArtifact) -> Path:
    """Move a produced artifact to a collision-free name in its output dir.

    Args:
        artifact: The produced file and its intended directory and name.

    Returns:
        Final path of the artifact.

    Raises:
        OutputMoveError: If the rename fails.
    """
    name = next_available_name(
        artifact.output_dir, artifact.base_name, artifact.extension
    )
    destination = artifact.output_dir / name
    try:
        artifact.produced_path.replace(destination)
    except OSError as e:
        raise OutputMoveError(artifact.produced_path, destination, str(e)) from e
    logger.info("Moved %s to %s", artifact.produced_path.name, destination)
    return destination
