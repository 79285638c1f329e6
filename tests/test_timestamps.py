"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from station_ranker.utils.timestamps import format_timestamp, utc_now


class TestUtcNow:
    """Tests for utc_now function."""

    def test_utc_now_returns_utc_datetime(self):
        """Test that utc_now returns a timezone-aware datetime in UTC."""
        now = utc_now()

        assert now.tzinfo == timezone.utc
        assert isinstance(now, datetime)

    def test_utc_now_is_recent(self):
        """Test that utc_now returns a recent timestamp."""
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)

        assert before <= now <= after


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_format_timestamp_default_format(self):
        dt = datetime(2026, 10, 18, 9, 40, 12, tzinfo=timezone.utc)

        assert format_timestamp(dt) == "2026-10-18 09:40 UTC"

    def test_format_timestamp_none_returns_empty(self):
        assert format_timestamp(None) == ""

    def test_format_timestamp_naive_is_treated_as_utc(self):
        naive = datetime(2026, 10, 18, 9, 40)

        assert format_timestamp(naive) == "2026-10-18 09:40 UTC"

    def test_format_timestamp_converts_other_timezones(self):
        """Test that non-UTC datetimes are converted before formatting."""
        madrid_summer = timezone(timedelta(hours=2))
        dt = datetime(2026, 7, 1, 12, 0, tzinfo=madrid_summer)

        assert format_timestamp(dt) == "2026-07-01 10:00 UTC"

    def test_format_timestamp_custom_format(self):
        dt = datetime(2026, 10, 18, 9, 40, tzinfo=timezone.utc)

        assert format_timestamp(dt, "%d/%m/%Y") == "18/10/2026"
