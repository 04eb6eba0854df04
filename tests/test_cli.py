"""Tests for the CLI interface."""

import re

import pytest
from typer.testing import CliRunner

from dailyrhythm.tracker.cli import app
from dailyrhythm.tracker.db.sqlite import get_db
from dailyrhythm.tracker.habits import HabitManager


@pytest.fixture(autouse=True)
def setup_test_db(cli_env):
    """Use a temporary database for each test."""
    yield


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


def add_habit(runner: CliRunner, name: str = "Run") -> str:
    """Add a habit through the CLI and return its ID."""
    result = runner.invoke(app, ["habit", "add", name])
    assert result.exit_code == 0
    match = re.search(r"ID: ([0-9a-f-]{36})", result.stdout)
    assert match
    return match.group(1)


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Track your habits and sleep" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestHabitCommands:
    """Tests for habit commands."""

    def test_add_habit(self, runner: CliRunner):
        """Test adding a habit."""
        result = runner.invoke(
            app, ["habit", "add", "Read", "--category", "Mind", "--color", "#A855F7"]
        )
        assert result.exit_code == 0
        assert "Added habit: Read" in result.stdout

    def test_add_habit_bad_color(self, runner: CliRunner):
        """Test invalid colours are reported."""
        result = runner.invoke(app, ["habit", "add", "Read", "--color", "purple"])
        assert result.exit_code == 1
        assert "Error:" in result.stdout

    def test_list_empty(self, runner: CliRunner):
        """Test listing when no habits exist."""
        result = runner.invoke(app, ["habit", "list"])
        assert result.exit_code == 0
        assert "No habits yet" in result.stdout

    def test_list_with_habits(self, runner: CliRunner):
        """Test listing habits."""
        add_habit(runner, "Run")
        add_habit(runner, "Read")

        result = runner.invoke(app, ["habit", "list"])
        assert result.exit_code == 0
        assert "Run" in result.stdout
        assert "Read" in result.stdout

    def test_done_toggles(self, runner: CliRunner):
        """Test marking and unmarking today."""
        habit_id = add_habit(runner)

        result = runner.invoke(app, ["habit", "done", habit_id])
        assert result.exit_code == 0
        assert "Current Streak: 1 days" in result.stdout

        result = runner.invoke(app, ["habit", "done", habit_id])
        assert result.exit_code == 0
        assert "Unmarked" in result.stdout

    def test_done_unknown_habit(self, runner: CliRunner):
        """Test marking an unknown habit fails."""
        result = runner.invoke(app, ["habit", "done", "missing"])
        assert result.exit_code == 1
        assert "Habit not found" in result.stdout

    def test_done_bad_date(self, runner: CliRunner):
        """Test invalid dates are rejected."""
        habit_id = add_habit(runner)
        result = runner.invoke(app, ["habit", "done", habit_id, "--date", "15/03/2025"])
        assert result.exit_code == 1
        assert "Invalid date" in result.stdout

    def test_edit(self, runner: CliRunner):
        """Test editing a habit."""
        habit_id = add_habit(runner)
        result = runner.invoke(app, ["habit", "edit", habit_id, "--name", "Sprint"])
        assert result.exit_code == 0

        habit = HabitManager(get_db()).get_habit(habit_id)
        assert habit.name == "Sprint"

    def test_edit_blank_name(self, runner: CliRunner):
        """Test a whitespace-only name is rejected."""
        habit_id = add_habit(runner)
        result = runner.invoke(app, ["habit", "edit", habit_id, "--name", "   "])
        assert result.exit_code == 1
        assert "Error:" in result.stdout

        habit = HabitManager(get_db()).get_habit(habit_id)
        assert habit.name == "Run"

    def test_show_json(self, runner: CliRunner):
        """Test JSON output of a habit."""
        habit_id = add_habit(runner, "Journal")
        result = runner.invoke(app, ["habit", "show", habit_id, "--json"])
        assert result.exit_code == 0
        assert '"name": "Journal"' in result.stdout

    def test_delete(self, runner: CliRunner):
        """Test deleting a habit."""
        habit_id = add_habit(runner)
        result = runner.invoke(app, ["habit", "delete", habit_id, "--yes"])
        assert result.exit_code == 0
        assert HabitManager(get_db()).get_habit(habit_id) is None

    def test_grid(self, runner: CliRunner):
        """Test the heat grid renders."""
        habit_id = add_habit(runner)
        runner.invoke(app, ["habit", "done", habit_id])

        result = runner.invoke(app, ["habit", "grid", habit_id])
        assert result.exit_code == 0
        assert "■" in result.stdout


class TestSleepCommands:
    """Tests for sleep commands."""

    def test_log(self, runner: CliRunner):
        """Test logging sleep."""
        result = runner.invoke(
            app, ["sleep", "log", "2025-01-01T22:00:00Z", "2025-01-02T06:30:00Z"]
        )
        assert result.exit_code == 0
        assert "Logged 8.5 hours" in result.stdout

    def test_log_end_before_start(self, runner: CliRunner):
        """Test reversed sessions are rejected."""
        result = runner.invoke(
            app, ["sleep", "log", "2025-01-02T06:00:00Z", "2025-01-01T22:00:00Z"]
        )
        assert result.exit_code == 1
        assert "Error:" in result.stdout

    def test_list_empty(self, runner: CliRunner):
        """Test listing without entries."""
        result = runner.invoke(app, ["sleep", "list"])
        assert result.exit_code == 0
        assert "No sleep entries" in result.stdout

    def test_list_and_graph(self, runner: CliRunner):
        """Test listing entries and the merged graph."""
        runner.invoke(app, ["sleep", "log", "2025-01-01T22:00:00Z", "2025-01-02T06:00:00Z"])

        result = runner.invoke(app, ["sleep", "list"])
        assert result.exit_code == 0
        assert "Average: 8.0 hours" in result.stdout
        assert "Quality: Great" in result.stdout

        result = runner.invoke(
            app, ["sleep", "graph", "--from", "2025-01-01", "--to", "2025-01-02"]
        )
        assert result.exit_code == 0
        assert "2025-01-02" in result.stdout

    def test_list_json(self, runner: CliRunner):
        """Test JSON output of sleep entries."""
        runner.invoke(app, ["sleep", "log", "2025-01-01T22:00:00Z", "2025-01-02T06:30:00Z"])

        result = runner.invoke(app, ["sleep", "list", "--json"])
        assert result.exit_code == 0
        assert '"hours": 8.5' in result.stdout
        assert '"start": "2025-01-01T22:00:00Z"' in result.stdout

    def test_graph_reversed_range(self, runner: CliRunner):
        """Test a reversed graph range fails."""
        result = runner.invoke(
            app, ["sleep", "graph", "--from", "2025-01-05", "--to", "2025-01-01"]
        )
        assert result.exit_code == 1

    def test_delete_unknown(self, runner: CliRunner):
        """Test deleting an unknown entry fails."""
        result = runner.invoke(app, ["sleep", "delete", "missing"])
        assert result.exit_code == 1


class TestDashboardCommand:
    """Tests for the dashboard command."""

    def test_dashboard(self, runner: CliRunner):
        """Test the dashboard renders."""
        habit_id = add_habit(runner)
        runner.invoke(app, ["habit", "done", habit_id])

        result = runner.invoke(app, ["dashboard"])
        assert result.exit_code == 0
        assert "Best Current Streak: 1 days" in result.stdout
        assert "Last Sleep: No data" in result.stdout
        assert "Sleep Quality: Poor" in result.stdout
