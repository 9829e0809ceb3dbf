"""Unit tests for utility functions (boilerstrip.utils).

Tests cover:
- format_duration
- pluralize
- Rich output helpers (print_summary_table, print_success, etc.)
"""

from __future__ import annotations

import pytest

from boilerstrip.utils import (
    create_progress,
    format_duration,
    pluralize,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


class TestFormatDuration:
    @pytest.mark.unit
    def test_sub_second(self):
        assert format_duration(0.42) == "0.4s"

    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_hours(self):
        assert format_duration(3661.0) == "1h 1m 1s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-5) == "0.0s"


class TestPluralize:
    @pytest.mark.unit
    def test_singular(self):
        assert pluralize(1, "file") == "1 file"

    @pytest.mark.unit
    @pytest.mark.parametrize("count", [0, 2, 10])
    def test_plural(self, count: int):
        assert pluralize(count, "file") == f"{count} files"


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self):
        # Should not raise
        print_summary_table({"Files scanned": "3", "Files failed": "0"}, title="Run")

    @pytest.mark.unit
    def test_print_success(self):
        print_success("Done")

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning(self):
        print_warning("Check your config")

    @pytest.mark.unit
    def test_create_progress(self):
        progress = create_progress()
        assert progress is not None
