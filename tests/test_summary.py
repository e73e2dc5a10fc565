"""Tests for summary file parsing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from dirvish_check.core.summary import (
    EPOCH,
    parse_completion_time,
    parse_summary_lines,
    read_summary,
)
from dirvish_check.exceptions import MissingMetadataError


class TestParseSummaryLines:
    """Tests for the key/value line parser."""

    def test_basic_pairs(self):
        """Keys and values are split on the first colon."""
        values = parse_summary_lines([
            "client: db01\n",
            "Backup-complete: 2024-03-15 03:12:45\n",
            "Status: success\n",
        ])
        assert values["client"] == "db01"
        assert values["Backup-complete"] == "2024-03-15 03:12:45"
        assert values["Status"] == "success"

    def test_last_duplicate_wins(self):
        """A repeated key keeps its last value."""
        values = parse_summary_lines(["Status: success", "Status: fatal error"])
        assert values["Status"] == "fatal error"

    def test_non_key_lines_ignored(self):
        """Indented list items and blank lines are not keys."""
        values = parse_summary_lines([
            "exclude:",
            "        /proc",
            "",
            "# comment: nope",
            "Status: success",
        ])
        assert values["exclude"] == ""
        assert values["Status"] == "success"
        assert len(values) == 2

    def test_value_whitespace_trimmed(self):
        """Surrounding whitespace is removed from values."""
        values = parse_summary_lines(["Status:    warning (24) -- file vanished   \n"])
        assert values["Status"] == "warning (24) -- file vanished"


class TestParseCompletionTime:
    """Tests for completion timestamp parsing."""

    def test_dirvish_format(self):
        """The usual dirvish timestamp is parsed exactly."""
        assert parse_completion_time("2024-03-15 03:12:45") == datetime(2024, 3, 15, 3, 12, 45)

    def test_free_form(self):
        """Free-form dates are accepted."""
        assert parse_completion_time("Fri Mar 15 03:12:45 2024") == datetime(2024, 3, 15, 3, 12, 45)

    def test_empty_defaults_to_epoch(self):
        """A missing value is the epoch."""
        assert parse_completion_time("") == EPOCH

    def test_garbage_defaults_to_epoch(self):
        """An unparseable value is the epoch."""
        assert parse_completion_time("not a date at all") == EPOCH

    def test_out_of_range_aware_time_defaults_to_epoch(self):
        """A timestamp that cannot be shifted to local time is the epoch."""
        assert parse_completion_time("0001-01-01 00:00:00 +0100") == EPOCH

    def test_timezone_converted_to_local_naive(self):
        """Aware timestamps become naive local time."""
        parsed = parse_completion_time("2024-03-15T03:12:45+00:00")
        expected = datetime(2024, 3, 15, 3, 12, 45, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed.tzinfo is None
        assert parsed == expected


class TestReadSummary:
    """Tests for reading summary files from image directories."""

    def test_reads_status_and_completion(self, bank, now):
        """Status and completion are taken from the summary file."""
        image = bank.image("db01", "20240315", completed=now - timedelta(hours=2))
        summary = read_summary(str(image))
        assert summary.status == "success"
        assert summary.completed == (now - timedelta(hours=2)).replace(microsecond=0)
        assert summary.raw["client"] == "localhost"

    def test_missing_keys(self, bank):
        """Missing keys give an empty status and the epoch."""
        image = bank.image("db01", "20240315", status=None)
        summary = read_summary(str(image))
        assert summary.status == ""
        assert summary.completed == EPOCH

    def test_missing_file_raises(self, bank):
        """An image without summary raises MissingMetadataError."""
        image = bank.image("db01", "20240315", summary=False)
        with pytest.raises(MissingMetadataError) as exc_info:
            read_summary(str(image))
        assert exc_info.value.image_path == str(image)
        assert "20240315" in str(exc_info.value)

    def test_unreadable_summary_raises(self, bank):
        """A summary that cannot be opened raises MissingMetadataError."""
        image = bank.image("db01", "20240315", summary=False)
        (image / "summary").mkdir()
        with pytest.raises(MissingMetadataError):
            read_summary(str(image))