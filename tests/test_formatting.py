"""Tests for display formatting helpers."""

import pytest

from docstats.utils.formatting import format_count, format_file_size


class TestFormatFileSize:
    """Tests for format_file_size."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 Bytes"),
            (1, "1 Bytes"),
            (1023, "1023 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1 MB"),
            (int(2.25 * 1024 * 1024), "2.25 MB"),
            (1024**3, "1 GB"),
            (5 * 1024**4, "5120 GB"),
        ],
    )
    def test_units(self, size, expected):
        assert format_file_size(size) == expected

    def test_rounds_to_two_decimals(self):
        assert format_file_size(1234) == "1.21 KB"

    def test_custom_decimals(self):
        assert format_file_size(1234, decimals=0) == "1 KB"
        assert format_file_size(1234, decimals=3) == "1.205 KB"


class TestFormatCount:
    """Tests for format_count."""

    def test_grouping(self):
        assert format_count(1234567) == "1,234,567"
        assert format_count(999) == "999"

    def test_without_grouping(self):
        assert format_count(1234567, group_digits=False) == "1234567"
