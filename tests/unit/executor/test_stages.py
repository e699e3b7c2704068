"""Tests for pipeline stage builders."""

from pathlib import Path

from subtitler.executor.stages import (
    EXTRACT_STAGE,
    RECOGNIZE_STAGE,
    build_extract_stage,
    build_recognize_stage,
    recognizer_output_path,
)
from subtitler.jobs.models import EnvironmentProfile


class TestBuildExtractStage:
    """Tests for build_extract_stage function."""

    def test_command(self) -> None:
        """ffmpeg converts to mono 16 kHz PCM without video."""
        stage = build_extract_stage(
            Path("/usr/bin/ffmpeg"), Path("/m/talk.mp4"), Path("/r/tmp/talk.wav")
        )

        assert stage.name == EXTRACT_STAGE
        assert stage.command == [
            "/usr/bin/ffmpeg",
            "-y",
            "-i",
            "/m/talk.mp4",
            "-acodec",
            "pcm_s16le",
            "-ac",
            "1",
            "-ar",
            "16000",
            "-vn",
            "/r/tmp/talk.wav",
        ]
        assert dict(stage.env_overrides) == {}

    def test_wav_is_scratch(self) -> None:
        """The extracted WAV is a scratch output."""
        wav = Path("/r/tmp/talk.wav")
        stage = build_extract_stage(Path("ffmpeg"), Path("/m/talk.mp4"), wav)
        assert stage.scratch_outputs == (wav,)


class TestBuildRecognizeStage:
    """Tests for build_recognize_stage function."""

    def test_command_and_env(self) -> None:
        """The profile supplies binary and environment."""
        profile = EnvironmentProfile(
            recognizer_path=Path("/r/bin/openvino/main"),
            env_overrides={"INTEL_OPENVINO_DIR": "/r/bin/openvino"},
        )

        stage = build_recognize_stage(
            profile, Path("/r/models/ggml-medium.bin"), "ja", Path("/r/tmp/t.wav")
        )

        assert stage.name == RECOGNIZE_STAGE
        assert stage.command == [
            "/r/bin/openvino/main",
            "-m",
            "/r/models/ggml-medium.bin",
            "-l",
            "ja",
            "-f",
            "/r/tmp/t.wav",
            "-ovtt",
        ]
        assert dict(stage.env_overrides) == {"INTEL_OPENVINO_DIR": "/r/bin/openvino"}
        assert stage.scratch_outputs == ()


def test_recognizer_output_path() -> None:
    """whisper.cpp appends the format extension to the input name."""
    wav = Path("/r/tmp/talk2024-01-02_03-04-05.wav")
    assert recognizer_output_path(wav) == Path(
        "/r/tmp/talk2024-01-02_03-04-05.wav.vtt"
    )
