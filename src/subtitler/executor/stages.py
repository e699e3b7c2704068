"""Builders for the two transcription pipeline stages."""

from __future__ import annotations

from pathlib import Path

from subtitler.jobs.models import EnvironmentProfile, PipelineStage

# whisper.cpp subtitle output format
SUBTITLE_FORMAT = "vtt"

# Audio format whisper.cpp expects: mono, 16 kHz, 16-bit PCM
AUDIO_SAMPLE_RATE = 16000
AUDIO_CODEC = "pcm_s16le"
AUDIO_CHANNELS = 1

EXTRACT_STAGE = "extract-audio"
RECOGNIZE_STAGE = "recognize-speech"


def build_extract_stage(
    ffmpeg: Path, source: Path, wav_path: Path
) -> PipelineStage:
    """Build the ffmpeg stage that extracts the audio track to a WAV file.

    The WAV file is a scratch output, removed when the pipeline finishes.
    """
    args = (
        "-y",
        "-i",
        str(source),
        "-acodec",
        AUDIO_CODEC,
        "-ac",
        str(AUDIO_CHANNELS),
        "-ar",
        str(AUDIO_SAMPLE_RATE),
        "-vn",
        str(wav_path),
    )
    return PipelineStage(
        name=EXTRACT_STAGE,
        executable=ffmpeg,
        args=args,
        scratch_outputs=(wav_path,),
    )


def build_recognize_stage(
    profile: EnvironmentProfile,
    model_path: Path,
    language: str,
    wav_path: Path,
    subtitle_format: str = SUBTITLE_FORMAT,
) -> PipelineStage:
    """Build the whisper.cpp stage that writes subtitles next to the WAV file.

    The profile decides the binary and the environment overrides.
    """
    args = (
        "-m",
        str(model_path),
        "-l",
        language,
        "-f",
        str(wav_path),
        f"-o{subtitle_format}",
    )
    return PipelineStage(
        name=RECOGNIZE_STAGE,
        executable=profile.recognizer_path,
        args=args,
        env_overrides=dict(profile.env_overrides),
    )


def recognizer_output_path(
    wav_path: Path, subtitle_format: str = SUBTITLE_FORMAT
) -> Path:
    """Path whisper.cpp writes its output to for a given input file."""
    return wav_path.with_name(f"{wav_path.name}.{subtitle_format}")
