"""Configuration data models.

This module defines dataclasses for subtitler configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

from subtitler.assets.manifest import DEFAULT_MODEL_BASE_URL


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. ffmpeg is looked up in PATH, then in the
    bundled bin directory; the recognizer defaults to bin/main.
    """

    ffmpeg: Path | None = None
    recognizer: Path | None = None


@dataclass
class AssetsConfig:
    """Configuration for model downloads."""

    base_url: str = DEFAULT_MODEL_BASE_URL
    """Remote directory the ggml model files are fetched from."""

    timeout_seconds: float | None = 60.0
    """Network timeout per read/connect in seconds (None = wait forever)."""

    user_agent: str = "local-subtitler"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class SubtitlerConfig:
    """Main configuration container.

    Aggregates all configuration sections.
    """

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    assets: AssetsConfig = field(default_factory=AssetsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Root of the bin/models/tmp/outputs layout (None = data directory)
    root_dir: Path | None = None
