"""Execution profile resolution for the recognition stage.

The accelerated backend runs an OpenVINO build of whisper.cpp from
``bin/openvino``. That build needs the OpenVINO runtime and its bundled
TBB library on the library search path, which is what the profile's
environment overrides provide. The overrides are applied to the
recognition process only; this module never writes to os.environ.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from subtitler.jobs.models import Backend, EnvironmentProfile

logger = logging.getLogger(__name__)

# Candidate TBB library directories, relative to the TBB root, first match wins
TBB_LIBRARY_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("redist", "intel64", "vc14"),
    ("bin", "intel64", "vc14"),
    ("bin",),
)

# Candidate TBB CMake config directories, relative to the TBB root
TBB_CMAKE_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("cmake",),
    ("lib", "cmake", "TBB"),
    ("lib64", "cmake", "TBB"),
    ("lib", "cmake", "tbb"),
)

RECOGNIZER_NAME = "main"


def executable_name(name: str) -> str:
    """Platform-specific file name of an executable."""
    return f"{name}.exe" if sys.platform == "win32" else name


def _first_existing(
    root: Path, candidates: tuple[tuple[str, ...], ...]
) -> Path | None:
    """Return the first candidate under root that exists."""
    for parts in candidates:
        path = root.joinpath(*parts)
        if path.exists():
            return path
    return None


def openvino_overrides(
    openvino_root: Path, env: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Compute the environment variables an OpenVINO runtime needs.

    Mirrors OpenVINO's setupvars script: the runtime root, its CMake config
    directory, the Release and Debug library directories (with the bundled
    TBB library directory in front when present) and PATH prefixed with
    those library directories.

    Args:
        openvino_root: Root of the OpenVINO distribution.
        env: Environment to read the inherited PATH from (default os.environ).

    Returns:
        Mapping of variable name to value. TBB_DIR is included only when a
        TBB CMake directory was found.
    """
    source_env = env if env is not None else os.environ
    runtime = openvino_root / "runtime"
    lib_paths = [
        str(runtime / "bin" / "intel64" / "Release"),
        str(runtime / "bin" / "intel64" / "Debug"),
    ]
    overrides: dict[str, str] = {}

    tbb_root = runtime / "3rdparty" / "tbb"
    if tbb_root.exists():
        tbb_lib = _first_existing(tbb_root, TBB_LIBRARY_CANDIDATES)
        if tbb_lib is not None:
            lib_paths.insert(0, str(tbb_lib))
        tbb_cmake = _first_existing(tbb_root, TBB_CMAKE_CANDIDATES)
        if tbb_cmake is not None:
            overrides["TBB_DIR"] = str(tbb_cmake)
    else:
        logger.debug("No TBB runtime under %s", tbb_root)

    lib_path_value = os.pathsep.join(lib_paths)
    inherited_path = source_env.get("PATH", "")
    overrides["INTEL_OPENVINO_DIR"] = str(openvino_root)
    overrides["OpenVINO_DIR"] = str(runtime / "cmake")
    overrides["OPENVINO_LIB_PATHS"] = lib_path_value
    overrides["PATH"] = (
        f"{lib_path_value}{os.pathsep}{inherited_path}"
        if inherited_path
        else lib_path_value
    )
    return overrides


def resolve_profile(
    backend_root: Path,
    backend: Backend,
    *,
    default_recognizer: Path,
    env: Mapping[str, str] | None = None,
) -> EnvironmentProfile:
    """Resolve the recognizer binary and environment for a backend.

    Only existence probes touch the filesystem; missing optional runtime
    directories degrade to fewer variables rather than errors.

    Args:
        backend_root: Directory of the accelerated build (bin/openvino).
        backend: Selected backend.
        default_recognizer: Recognizer used by the default backend.
        env: Environment to read the inherited PATH from (default os.environ).

    Returns:
        EnvironmentProfile for the recognition stage.
    """
    if backend is Backend.DEFAULT:
        return EnvironmentProfile(recognizer_path=default_recognizer)

    overrides = openvino_overrides(backend_root, env)
    logger.info("OpenVINO environment initialized from %s", backend_root)
    return EnvironmentProfile(
        recognizer_path=backend_root / executable_name(RECOGNIZER_NAME),
        env_overrides=overrides,
    )
