"""External tool and hardware detection.

Locates the ffmpeg and whisper.cpp executables a run needs and detects
whether the CPU can use the OpenVINO backend.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess  # nosec B404 - subprocess is required for CPU detection
import sys
from pathlib import Path

from subtitler.tools.environment import RECOGNIZER_NAME, executable_name

logger = logging.getLogger(__name__)

# Vendor string reported by Intel CPUs
INTEL_VENDOR_ID = "GenuineIntel"

CPUINFO_PATH = Path("/proc/cpuinfo")

# platform.processor() only reports "i386" on Intel Macs
SYSCTL_VENDOR_ARGS = ("sysctl", "-n", "machdep.cpu.vendor")


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    # Try configured path first
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    # Fall back to PATH lookup
    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def find_ffmpeg(bin_dir: Path, configured_path: Path | None = None) -> Path:
    """Locate ffmpeg, falling back to the copy bundled in bin_dir.

    The bundled copy is returned even if it does not exist; the extraction
    stage then fails to start with a clear error.

    Args:
        bin_dir: Directory holding bundled tool binaries.
        configured_path: Optional configured path override.

    Returns:
        Path to the ffmpeg executable to use.
    """
    found = find_tool("ffmpeg", configured_path)
    if found is not None:
        return found
    bundled = bin_dir / executable_name("ffmpeg")
    logger.info("ffmpeg not found in system path, using local version: %s", bundled)
    return bundled


def default_recognizer_path(
    bin_dir: Path, configured_path: Path | None = None
) -> Path:
    """Path of the whisper.cpp binary used by the default backend."""
    if configured_path is not None:
        return configured_path
    return bin_dir / executable_name(RECOGNIZER_NAME)


def _sysctl_cpu_vendor() -> str:
    """Ask sysctl for the CPU vendor; Apple silicon reports none."""
    try:
        result = subprocess.run(  # nosec B603 - fixed arguments
            SYSCTL_VENDOR_ARGS,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=5,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Cannot query CPU vendor with sysctl: %s", e)
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def _read_cpu_vendor() -> str:
    """Read the CPU vendor string for the current platform."""
    if sys.platform.startswith("linux"):
        try:
            for line in CPUINFO_PATH.read_text(errors="replace").splitlines():
                key, _, value = line.partition(":")
                if key.strip() == "vendor_id":
                    return value.strip()
        except OSError as e:
            logger.debug("Cannot read %s: %s", CPUINFO_PATH, e)
        return ""
    if sys.platform == "darwin":
        return _sysctl_cpu_vendor()
    return platform.processor()


def is_intel_cpu() -> bool:
    """Check whether the host CPU is an Intel CPU.

    Only Intel CPUs are offered the OpenVINO backend. The vendor comes from
    /proc/cpuinfo on Linux and from sysctl on macOS.
    """
    vendor = _read_cpu_vendor()
    return INTEL_VENDOR_ID in vendor or vendor.startswith("Intel")
