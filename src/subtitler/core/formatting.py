"""Formatting utilities for console output."""

from collections.abc import Mapping


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes.

    Returns:
        Formatted string (e.g., "2.9 GB", "128.0 MB", "1.5 KB").
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


def format_env_overrides(overrides: Mapping[str, str]) -> list[str]:
    """Render environment overrides as sorted NAME=value lines."""
    return [f"{name}={value}" for name, value in sorted(overrides.items())]
