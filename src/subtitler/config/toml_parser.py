"""TOML config file parsing."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration cannot be read or is invalid."""


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise ConfigError when the file is missing or cannot
                be read or parsed. If False (default), a missing file gives an
                empty dict and a broken one is skipped with a warning.

    Returns:
        Parsed dictionary.

    Raises:
        ConfigError: When strict=True and the file is missing or invalid.
    """
    if not path.exists():
        if strict:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("TOML file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
