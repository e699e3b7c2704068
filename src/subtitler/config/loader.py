"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (SUBTITLER_*)
3. Config file (~/.subtitler/config.toml)
4. Default values

Environment variables:
- SUBTITLER_CONFIG_PATH: Path to config file (overrides default location)
- SUBTITLER_DATA_DIR: Root of the working layout (bin/, models/, tmp/, outputs/)
- SUBTITLER_FFMPEG_PATH: Path to ffmpeg executable
- SUBTITLER_RECOGNIZER_PATH: Path to the default whisper.cpp binary
- SUBTITLER_MODEL_BASE_URL: Remote directory of the ggml model files
- SUBTITLER_DOWNLOAD_TIMEOUT: Network timeout in seconds (0 disables it)
- SUBTITLER_LOG_LEVEL: Log level (debug, info, warning, error)
- SUBTITLER_LOG_FILE: Log file path
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any

from subtitler.config.env import EnvReader
from subtitler.config.models import (
    AssetsConfig,
    LoggingConfig,
    SubtitlerConfig,
    ToolPathsConfig,
)
from subtitler.config.toml_parser import ConfigError, load_toml_file

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".subtitler"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by SUBTITLER_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("SUBTITLER_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation. Use
    clear_config_cache() to force a reload regardless of mtime.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        if path in _config_cache:
            cached_config, cached_mtime = _config_cache[path]
            if current_mtime == cached_mtime:
                return cached_config

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value)).expanduser()


def _section(file_config: dict, name: str) -> dict:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _timeout_from_env(reader: EnvReader, current: float | None) -> float | None:
    """Apply SUBTITLER_DOWNLOAD_TIMEOUT, where 0 disables the timeout."""
    value = reader.get_seconds("DOWNLOAD_TIMEOUT")
    if value is None:
        return current
    return value if value > 0 else None


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    root_dir: Path | None = None,
    ffmpeg_path: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> SubtitlerConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides SUBTITLER_CONFIG_PATH).
        root_dir: CLI override for the layout root.
        ffmpeg_path: CLI override for ffmpeg path.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        SubtitlerConfig with merged configuration.

    Raises:
        ConfigError: If a configured value is invalid, or when strict=True
            and the config file cannot be parsed.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    tools_file = _section(file_config, "tools")
    assets_file = _section(file_config, "assets")
    logging_file = _section(file_config, "logging")

    try:
        tools = ToolPathsConfig(
            ffmpeg=ffmpeg_path
            or reader.get_path("FFMPEG_PATH")
            or _optional_path(tools_file.get("ffmpeg")),
            recognizer=reader.get_path("RECOGNIZER_PATH")
            or _optional_path(tools_file.get("recognizer")),
        )

        file_timeout = assets_file.get("timeout_seconds", AssetsConfig.timeout_seconds)
        assets = AssetsConfig(
            base_url=reader.get_str("MODEL_BASE_URL")
            or assets_file.get("base_url", AssetsConfig.base_url),
            timeout_seconds=_timeout_from_env(
                reader, float(file_timeout) if file_timeout else None
            ),
            user_agent=assets_file.get("user_agent", AssetsConfig.user_agent),
        )

        logging_config = LoggingConfig(
            level=reader.get_str("LOG_LEVEL")
            or logging_file.get("level", LoggingConfig.level),
            file=reader.get_path("LOG_FILE", must_exist=False)
            or _optional_path(logging_file.get("file")),
            format=logging_file.get("format", LoggingConfig.format),
            include_stderr=bool(
                logging_file.get("include_stderr", LoggingConfig.include_stderr)
            ),
            max_bytes=int(logging_file.get("max_bytes", LoggingConfig.max_bytes)),
            backup_count=int(
                logging_file.get("backup_count", LoggingConfig.backup_count)
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return SubtitlerConfig(
        tools=tools,
        assets=assets,
        logging=logging_config,
        root_dir=root_dir
        or reader.get_path("DATA_DIR", must_exist=False)
        or _optional_path(file_config.get("root_dir")),
    )


def get_root_dir(config: SubtitlerConfig) -> Path:
    """Root of the working layout, ~/.subtitler unless configured otherwise."""
    return config.root_dir or DEFAULT_CONFIG_DIR
