"""Tests for SleepManager."""

import pytest
from datetime import date, datetime, timezone

from pydantic import ValidationError

from dailyrhythm.tracker.sleep import Interval, SleepEntryCreate, SleepManager


def entry(start: str, end: str) -> SleepEntryCreate:
    return SleepEntryCreate(start=start, end=end)


class TestSleepEntryCreate:
    """Tests for sleep entry validation."""

    def test_normalises_to_utc(self):
        """Test offsets are converted to UTC."""
        data = entry("2025-01-01T23:00:00+01:00", "2025-01-02T07:00:00+01:00")
        assert data.start == datetime(2025, 1, 1, 22, tzinfo=timezone.utc)
        assert data.hours == 8.0

    def test_end_before_start(self):
        """Test sessions ending before they start are rejected."""
        with pytest.raises(ValidationError):
            entry("2025-01-02T06:00:00Z", "2025-01-01T22:00:00Z")

    def test_zero_length(self):
        """Test zero-length sessions are rejected at the boundary."""
        with pytest.raises(ValidationError):
            entry("2025-01-01T22:00:00Z", "2025-01-01T22:00:00Z")

    def test_sub_second_session(self):
        """Test sessions shorter than a second are rejected."""
        with pytest.raises(ValidationError):
            entry("2025-01-01T22:00:00.100Z", "2025-01-01T22:00:00.900Z")

    def test_fractional_seconds_truncated(self, sleep_manager):
        """Test stored instants match the validated ones."""
        data = entry("2025-01-01T22:00:00.750Z", "2025-01-02T06:00:00.250Z")
        assert data.start == datetime(2025, 1, 1, 22, tzinfo=timezone.utc)

        logged = sleep_manager.log_sleep(data)
        assert logged.start == data.start
        assert logged.end == data.end
        assert logged.hours == 8.0

    def test_malformed(self):
        """Test unparseable timestamps are rejected."""
        with pytest.raises(ValidationError):
            entry("tonight", "2025-01-01T22:00:00Z")


class TestEntryManagement:
    """Tests for logging and listing sleep."""

    def test_log_sleep(self, sleep_manager):
        """Test logging a session."""
        logged = sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:30:00Z"))

        assert logged.id is not None
        assert logged.user_id == "test-user"
        assert logged.start_at == "2025-01-01T22:00:00+00:00"
        assert logged.hours == 8.5

    def test_get_entry(self, sleep_manager):
        """Test getting an entry by ID."""
        logged = sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"))

        found = sleep_manager.get_entry(logged.id)

        assert found is not None
        assert found.end_at == "2025-01-02T06:00:00+00:00"

    def test_list_entries_sorted(self, sleep_manager):
        """Test entries come back ordered by start."""
        sleep_manager.log_sleep(entry("2025-01-03T22:00:00Z", "2025-01-04T06:00:00Z"))
        sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"))

        entries = sleep_manager.list_entries()

        assert [e.start.day for e in entries] == [1, 3]

    def test_list_entries_range(self, sleep_manager):
        """Test filtering by start day."""
        for day in (1, 2, 3, 4):
            sleep_manager.log_sleep(
                entry(f"2025-01-0{day}T22:00:00Z", f"2025-01-0{day + 1}T06:00:00Z")
            )

        entries = sleep_manager.list_entries(date(2025, 1, 2), date(2025, 1, 3))

        assert [e.start.day for e in entries] == [2, 3]

    def test_delete_entry(self, sleep_manager):
        """Test deleting an entry."""
        logged = sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"))

        assert sleep_manager.delete_entry(logged.id) is True
        assert sleep_manager.get_entry(logged.id) is None
        assert sleep_manager.delete_entry(logged.id) is False

    def test_entries_scoped_to_user(self, db, config, sleep_manager):
        """Test other users do not see the entries."""
        sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"))
        config.user_id = "someone-else"

        assert SleepManager(db, config).list_entries() == []


class TestSummary:
    """Tests for sleep summaries."""

    def test_empty_summary(self, sleep_manager):
        """Test summary without entries."""
        summary = sleep_manager.get_summary()

        assert summary.entry_count == 0
        assert summary.average_hours == 0.0
        assert summary.last_hours is None
        assert summary.quality == "Poor"

    def test_summary(self, sleep_manager):
        """Test totals, average and last entry."""
        sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"))
        sleep_manager.log_sleep(entry("2025-01-02T23:00:00Z", "2025-01-03T05:00:00Z"))

        summary = sleep_manager.get_summary()

        assert summary.entry_count == 2
        assert summary.total_hours == 14.0
        assert summary.average_hours == 7.0
        assert summary.last_hours == 6.0
        assert summary.quality == "Good"

    def test_recent_average(self, sleep_manager):
        """Test the average only covers recent days."""
        sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T02:00:00Z"))
        sleep_manager.log_sleep(entry("2025-01-09T22:00:00Z", "2025-01-10T06:00:00Z"))

        assert sleep_manager.get_recent_average(7, today=date(2025, 1, 10)) == 8.0


class TestGraph:
    """Tests for graph data."""

    def test_graph_rows(self, sleep_manager):
        """Test one row per day with merged intervals."""
        sleep_manager.log_sleep(entry("2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"))
        sleep_manager.log_sleep(entry("2025-01-02T05:00:00Z", "2025-01-02T07:30:00Z"))

        graph = sleep_manager.get_graph(date(2025, 1, 1), date(2025, 1, 3))

        assert [d.date for d in graph.days] == [
            date(2025, 1, 1),
            date(2025, 1, 2),
            date(2025, 1, 3),
        ]
        assert graph.days[0].intervals == [Interval(22.0, 24.0)]
        assert graph.days[1].intervals == [Interval(0.0, 7.5)]
        assert graph.days[2].has_data is False
        assert graph.average_sleep == 4.75

    def test_graph_includes_night_before_range(self, sleep_manager):
        """Test a night starting before the range fills its morning."""
        sleep_manager.log_sleep(entry("2024-12-31T22:00:00Z", "2025-01-01T06:00:00Z"))

        graph = sleep_manager.get_graph(date(2025, 1, 1), date(2025, 1, 1))

        assert graph.days[0].intervals == [Interval(0.0, 6.0)]
        assert graph.days[0].start_time == "12:00 AM"
        assert graph.days[0].end_time == "6:00 AM"

    def test_graph_default_range(self, sleep_manager):
        """Test the default range spans last month and this month."""
        graph = sleep_manager.get_graph(today=date(2025, 3, 15))

        assert graph.start_date == date(2025, 2, 1)
        assert graph.end_date == date(2025, 3, 31)
        assert len(graph.days) == 59
        assert graph.average_sleep == 0.0
