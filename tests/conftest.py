"""Shared test fixtures for local-subtitler."""

from pathlib import Path

import pytest

from subtitler.config.loader import clear_config_cache

_SUBTITLER_ENV_VARS = (
    "SUBTITLER_FFMPEG_PATH",
    "SUBTITLER_RECOGNIZER_PATH",
    "SUBTITLER_MODEL_BASE_URL",
    "SUBTITLER_DOWNLOAD_TIMEOUT",
    "SUBTITLER_LOG_LEVEL",
    "SUBTITLER_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the user's ~/.subtitler and SUBTITLER_* settings."""
    monkeypatch.setenv("SUBTITLER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SUBTITLER_CONFIG_PATH", str(tmp_path / "config.toml"))
    for var in _SUBTITLER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def root_dir(tmp_path: Path) -> Path:
    """Working root with an empty layout underneath."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    """A stand-in media file; only its existence and name matter."""
    media = tmp_path / "media" / "talk.mp4"
    media.parent.mkdir()
    media.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return media
