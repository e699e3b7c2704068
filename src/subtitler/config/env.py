"""SUBTITLER_* environment settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "SUBTITLER_"


class EnvReader:
    """Typed access to the SUBTITLER_* variables.

    Names are given without the prefix: ``reader.get_path("FFMPEG_PATH")``
    reads SUBTITLER_FFMPEG_PATH. Blank values count as unset. Tests pass a
    plain dict as ``env`` instead of patching os.environ.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env

    def _raw(self, name: str) -> str | None:
        value = self._env.get(ENV_PREFIX + name, "").strip()
        return value or None

    def get_str(self, name: str) -> str | None:
        return self._raw(name)

    def get_seconds(self, name: str) -> float | None:
        """Read a duration in seconds.

        Unparseable or negative values are logged and treated as unset.
        """
        value = self._raw(name)
        if value is None:
            return None
        try:
            seconds: float | None = float(value)
        except ValueError:
            seconds = None
        if seconds is None or seconds < 0:
            logger.warning("Ignoring %s%s=%r: not a duration", ENV_PREFIX, name, value)
            return None
        return seconds

    def get_path(self, name: str, *, must_exist: bool = True) -> Path | None:
        """Read a filesystem path, expanding ``~``.

        With must_exist, a path that does not exist is logged and ignored so
        the next configuration source can supply the value.
        """
        value = self._raw(name)
        if value is None:
            return None
        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning("Ignoring %s%s: %s does not exist", ENV_PREFIX, name, path)
            return None
        return path
