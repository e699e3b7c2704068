"""Tests for execution profile resolution."""

import os
from pathlib import Path

from subtitler.jobs.models import Backend
from subtitler.tools.environment import (
    executable_name,
    openvino_overrides,
    resolve_profile,
)

BASE_VARS = {"INTEL_OPENVINO_DIR", "OpenVINO_DIR", "OPENVINO_LIB_PATHS", "PATH"}


def _release_debug(root: Path) -> list[str]:
    intel64 = root / "runtime" / "bin" / "intel64"
    return [str(intel64 / "Release"), str(intel64 / "Debug")]


class TestOpenvinoOverrides:
    """Tests for openvino_overrides function."""

    def test_empty_root_yields_base_vars_only(self, tmp_path: Path) -> None:
        """Without a TBB runtime only the four base variables are set."""
        root = tmp_path / "openvino"

        overrides = openvino_overrides(root, env={})

        assert set(overrides) == BASE_VARS
        assert overrides["INTEL_OPENVINO_DIR"] == str(root)
        assert overrides["OpenVINO_DIR"] == str(root / "runtime" / "cmake")
        assert overrides["OPENVINO_LIB_PATHS"] == os.pathsep.join(
            _release_debug(root)
        )

    def test_path_is_prepended(self, tmp_path: Path) -> None:
        """Library directories go in front of the inherited PATH."""
        root = tmp_path / "openvino"

        overrides = openvino_overrides(root, env={"PATH": "/usr/bin"})

        assert overrides["PATH"] == os.pathsep.join(
            [*_release_debug(root), "/usr/bin"]
        )

    def test_missing_inherited_path(self, tmp_path: Path) -> None:
        """Without an inherited PATH, PATH is just the library directories."""
        overrides = openvino_overrides(tmp_path, env={})
        assert overrides["PATH"] == overrides["OPENVINO_LIB_PATHS"]

    def test_tbb_library_first_candidate_wins(self, tmp_path: Path) -> None:
        """The redist directory is preferred over bin."""
        tbb = tmp_path / "runtime" / "3rdparty" / "tbb"
        (tbb / "redist" / "intel64" / "vc14").mkdir(parents=True)
        (tbb / "bin").mkdir()

        overrides = openvino_overrides(tmp_path, env={})

        lib_paths = overrides["OPENVINO_LIB_PATHS"].split(os.pathsep)
        assert lib_paths[0] == str(tbb / "redist" / "intel64" / "vc14")
        assert lib_paths[1:] == _release_debug(tmp_path)

    def test_tbb_library_fallback(self, tmp_path: Path) -> None:
        """bin is used when no more specific directory exists."""
        tbb = tmp_path / "runtime" / "3rdparty" / "tbb"
        (tbb / "bin").mkdir(parents=True)

        overrides = openvino_overrides(tmp_path, env={})

        assert overrides["OPENVINO_LIB_PATHS"].split(os.pathsep)[0] == str(
            tbb / "bin"
        )
        assert "TBB_DIR" not in overrides

    def test_tbb_cmake_candidate_order(self, tmp_path: Path) -> None:
        """TBB_DIR is the first CMake directory that exists."""
        tbb = tmp_path / "runtime" / "3rdparty" / "tbb"
        (tbb / "lib64" / "cmake" / "TBB").mkdir(parents=True)
        (tbb / "lib" / "cmake" / "tbb").mkdir(parents=True)

        overrides = openvino_overrides(tmp_path, env={})

        assert overrides["TBB_DIR"] == str(tbb / "lib64" / "cmake" / "TBB")

    def test_does_not_touch_process_environment(self, tmp_path: Path) -> None:
        """Computing overrides leaves os.environ unchanged."""
        before = dict(os.environ)
        openvino_overrides(tmp_path)
        assert dict(os.environ) == before


class TestResolveProfile:
    """Tests for resolve_profile function."""

    def test_default_backend(self, tmp_path: Path) -> None:
        """Default backend uses the default binary with no overrides."""
        default = tmp_path / "bin" / "main"

        profile = resolve_profile(
            tmp_path / "bin" / "openvino",
            Backend.DEFAULT,
            default_recognizer=default,
            env={"PATH": "/usr/bin"},
        )

        assert profile.recognizer_path == default
        assert dict(profile.env_overrides) == {}

    def test_accelerated_backend(self, tmp_path: Path) -> None:
        """Accelerated backend uses the OpenVINO build and its environment."""
        backend_root = tmp_path / "bin" / "openvino"

        profile = resolve_profile(
            backend_root,
            Backend.ACCELERATED,
            default_recognizer=tmp_path / "bin" / "main",
            env={},
        )

        assert profile.recognizer_path == backend_root / executable_name("main")
        assert set(profile.env_overrides) == BASE_VARS
