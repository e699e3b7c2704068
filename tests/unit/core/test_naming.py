"""Tests for core/naming.py module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from subtitler.core.naming import move_to_available_name, next_available_name
from subtitler.jobs.exceptions import OutputMoveError
from subtitler.jobs.models import OutputArtifact


class TestNextAvailableName:
    """Tests for next_available_name function."""

    def test_plain_name_when_free(self, tmp_path: Path) -> None:
        """Should use base name plus extension when nothing exists."""
        assert next_available_name(tmp_path, "clip", ".vtt") == "clip.vtt"

    def test_first_collision_gets_index_one(self, tmp_path: Path) -> None:
        """Should append (1) when the plain name is taken."""
        (tmp_path / "clip.vtt").touch()
        assert next_available_name(tmp_path, "clip", ".vtt") == "clip(1).vtt"

    def test_skips_taken_indices(self, tmp_path: Path) -> None:
        """Should pick the first free index."""
        (tmp_path / "clip.vtt").touch()
        (tmp_path / "clip(1).vtt").touch()
        assert next_available_name(tmp_path, "clip", ".vtt") == "clip(2).vtt"

    def test_other_extensions_do_not_collide(self, tmp_path: Path) -> None:
        """Files with a different extension do not count as collisions."""
        (tmp_path / "clip.srt").touch()
        assert next_available_name(tmp_path, "clip", ".vtt") == "clip.vtt"


class TestMoveToAvailableName:
    """Tests for move_to_available_name function."""

    def _artifact(self, tmp_path: Path) -> OutputArtifact:
        produced = tmp_path / "tmp" / "clip2024.wav.vtt"
        produced.parent.mkdir()
        produced.write_text("WEBVTT\n")
        outputs = tmp_path / "outputs"
        outputs.mkdir()
        return OutputArtifact(
            produced_path=produced,
            output_dir=outputs,
            base_name="clip",
            extension=".vtt",
        )

    def test_moves_file(self, tmp_path: Path) -> None:
        """Should move the produced file under its final name."""
        artifact = self._artifact(tmp_path)

        final = move_to_available_name(artifact)

        assert final == tmp_path / "outputs" / "clip.vtt"
        assert final.read_text() == "WEBVTT\n"
        assert not artifact.produced_path.exists()

    def test_never_overwrites(self, tmp_path: Path) -> None:
        """Existing outputs are left untouched."""
        artifact = self._artifact(tmp_path)
        (tmp_path / "outputs" / "clip.vtt").write_text("old")

        final = move_to_available_name(artifact)

        assert final.name == "clip(1).vtt"
        assert (tmp_path / "outputs" / "clip.vtt").read_text() == "old"

    def test_raises_output_move_error(self, tmp_path: Path) -> None:
        """Should wrap OSError from the rename."""
        artifact = self._artifact(tmp_path)

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OutputMoveError) as exc_info:
                move_to_available_name(artifact)

        assert exc_info.value.source == artifact.produced_path
        assert "disk full" in str(exc_info.value)
