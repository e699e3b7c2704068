"""Configuration management for subtitler.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (SUBTITLER_*)
3. Config file (~/.subtitler/config.toml)
4. Default values (lowest priority)
"""

from subtitler.config.env import EnvReader
from subtitler.config.loader import (
    clear_config_cache,
    get_config,
    get_default_config_path,
    get_root_dir,
    load_config_file,
)
from subtitler.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from subtitler.config.models import (
    AssetsConfig,
    LoggingConfig,
    SubtitlerConfig,
    ToolPathsConfig,
)
from subtitler.config.toml_parser import ConfigError, load_toml_file

__all__ = [
    # Models
    "AssetsConfig",
    "LoggingConfig",
    "SubtitlerConfig",
    "ToolPathsConfig",
    # Loader
    "ConfigError",
    "EnvReader",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "get_root_dir",
    "load_config_file",
    "load_toml_file",
    # Logging
    "build_logging_config",
    "configure_logging_from_cli",
]
