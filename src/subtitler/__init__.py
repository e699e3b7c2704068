"""Local Subtitler - produce subtitle tracks from media files with whisper.cpp."""

__version__ = "0.1.0"
