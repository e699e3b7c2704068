"""Tests for core/formatting.py module."""

from subtitler.core.formatting import format_env_overrides, format_file_size


class TestFormatFileSize:
    """Tests for format_file_size function."""

    def test_bytes_range(self):
        """format_file_size formats bytes correctly."""
        assert format_file_size(0) == "0 B"
        assert format_file_size(512) == "512 B"
        assert format_file_size(1023) == "1023 B"

    def test_kilobytes_range(self):
        """format_file_size formats kilobytes correctly."""
        assert format_file_size(1024) == "1.0 KB"
        assert format_file_size(1536) == "1.5 KB"

    def test_megabytes_range(self):
        """format_file_size formats megabytes correctly."""
        assert format_file_size(1024**2) == "1.0 MB"
        assert format_file_size(1536 * 1024) == "1.5 MB"

    def test_gigabytes_range(self):
        """format_file_size formats model-sized files in gigabytes."""
        assert format_file_size(3 * 1024**3) == "3.0 GB"


class TestFormatEnvOverrides:
    """Tests for format_env_overrides function."""

    def test_sorted_by_name(self):
        """Lines are sorted by variable name."""
        lines = format_env_overrides({"PATH": "/a", "INTEL_OPENVINO_DIR": "/ov"})
        assert lines == ["INTEL_OPENVINO_DIR=/ov", "PATH=/a"]

    def test_empty(self):
        """No overrides renders no lines."""
        assert format_env_overrides({}) == []
