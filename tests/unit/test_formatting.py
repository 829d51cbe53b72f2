"""
Tests for the shared formatting helpers.
"""

import unittest
from datetime import datetime, timedelta, timezone

import pytest

from datawidget.utils.formatting import (
    ELLIPSIS,
    clean_title,
    format_duration,
    format_number,
    format_time_ago,
    format_update_time,
    truncate,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestTruncate(unittest.TestCase):
    """Test truncate()"""

    def test_short_text_unchanged(self):
        """Test text within the limit is returned as is."""
        self.assertEqual(truncate("hello", 5), "hello")

    def test_long_text_gets_ellipsis(self):
        """Test text over the limit keeps max_length - 1 chars plus an ellipsis."""
        result = truncate("hello world", 5)
        self.assertEqual(result, "hell" + ELLIPSIS)
        self.assertEqual(len(result), 5)

    def test_empty_and_none(self):
        """Test missing text becomes an empty string."""
        self.assertEqual(truncate("", 10), "")
        self.assertEqual(truncate(None, 10), "")

    def test_limit_of_one(self):
        """Test the smallest limit leaves only the ellipsis."""
        self.assertEqual(truncate("abc", 1), ELLIPSIS)

    def test_invalid_limit(self):
        """Test a limit below one is rejected."""
        with self.assertRaises(ValueError):
            truncate("abc", 0)


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0"),
        (999, "999"),
        (1000, "1.0K"),
        (1500, "1.5K"),
        (999_999, "1000.0K"),
        (1_000_000, "1.0M"),
        (2_340_000, "2.3M"),
    ],
)
def test_format_number(value, expected):
    """Test K and M suffixes and their thresholds."""
    assert format_number(value) == expected


class TestFormatTimeAgo(unittest.TestCase):
    """Test format_time_ago()"""

    def test_missing_timestamp(self):
        """Test missing input is Unknown."""
        self.assertEqual(format_time_ago(None, now=NOW), "Unknown")
        self.assertEqual(format_time_ago("", now=NOW), "Unknown")

    def test_unparseable_timestamp(self):
        """Test garbage input is Unknown."""
        self.assertEqual(format_time_ago("not a date", now=NOW), "Unknown")

    def test_just_now(self):
        """Test deltas under a minute."""
        moment = NOW - timedelta(seconds=30)
        self.assertEqual(format_time_ago(moment.isoformat(), now=NOW), "Just now")

    def test_future_timestamp(self):
        """Test future timestamps are clamped to Just now."""
        moment = NOW + timedelta(hours=2)
        self.assertEqual(format_time_ago(moment.isoformat(), now=NOW), "Just now")

    def test_units(self):
        """Test each unit uses its initial."""
        cases = [
            (timedelta(minutes=5), "5m ago"),
            (timedelta(hours=3), "3h ago"),
            (timedelta(days=2), "2d ago"),
            (timedelta(days=15), "2w ago"),
            (timedelta(days=65), "2m ago"),
            (timedelta(days=800), "2y ago"),
        ]
        for delta, expected in cases:
            with self.subTest(delta=delta):
                moment = NOW - delta
                self.assertEqual(format_time_ago(moment.isoformat(), now=NOW), expected)

    def test_iso_with_z_suffix(self):
        """Test ISO 8601 strings ending in Z."""
        self.assertEqual(format_time_ago("2024-06-01T09:00:00Z", now=NOW), "3h ago")

    def test_epoch_milliseconds(self):
        """Test numeric timestamps are epoch milliseconds."""
        millis = int((NOW - timedelta(days=1)).timestamp() * 1000)
        self.assertEqual(format_time_ago(millis, now=NOW), "1d ago")

    def test_rfc2822(self):
        """Test RFC 2822 dates."""
        self.assertEqual(
            format_time_ago("Sat, 01 Jun 2024 10:00:00 +0000", now=NOW), "2h ago"
        )


class TestFormatDuration(unittest.TestCase):
    """Test format_duration()"""

    def test_minutes_below_one_hour(self):
        self.assertEqual(format_duration(0.5), "30m")
        self.assertEqual(format_duration(0), "0m")

    def test_hours(self):
        self.assertEqual(format_duration(1), "1.0h")
        self.assertEqual(format_duration(12.34), "12.3h")


class TestCleanTitle(unittest.TestCase):
    """Test clean_title()"""

    def test_strips_parenthesized(self):
        self.assertEqual(clean_title("Album (Deluxe Edition)"), "Album")

    def test_strips_featuring(self):
        self.assertEqual(clean_title("Song [Feat. Someone Else]"), "Song")

    def test_missing(self):
        self.assertEqual(clean_title(None), "")

    def test_plain_title(self):
        self.assertEqual(clean_title("  Plain  "), "Plain")


def test_format_update_time():
    """Test footer label uses HH:MM."""
    assert format_update_time(datetime(2024, 1, 2, 9, 5)) == "Updated 09:05"


def test_format_time_ago_zero_epoch():
    """Test a zero timestamp counts as missing."""
    assert format_time_ago(0, now=NOW) == "Unknown"
