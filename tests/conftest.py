"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the tracker: an in-memory
database, a fixed configuration, and managers bound to both.
"""

import os
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

from dailyrhythm.tracker.config import Config, reset_config
from dailyrhythm.tracker.db.sqlite import Database, reset_db
from dailyrhythm.tracker.habits import HabitCreate, HabitManager
from dailyrhythm.tracker.sleep import SleepManager


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def config() -> Config:
    """Configuration for tests, independent of the environment."""
    return Config(
        db_path=Path(":memory:"),
        user_id="test-user",
        grid_rows=6,
        grid_columns=40,
        log_level="WARNING",
    )


@pytest.fixture(scope="function")
def db() -> Generator[Database, None, None]:
    """Create an in-memory database for testing."""
    reset_db()
    reset_config()

    database = Database(":memory:")
    database.create_tables()
    yield database

    reset_db()
    reset_config()


@pytest.fixture
def habit_manager(db: Database, config: Config) -> HabitManager:
    """Create a HabitManager with test database."""
    return HabitManager(db, config)


@pytest.fixture
def sleep_manager(db: Database, config: Config) -> SleepManager:
    """Create a SleepManager with test database."""
    return SleepManager(db, config)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def today() -> date:
    """A fixed reference day."""
    return date(2025, 3, 15)


@pytest.fixture
def sample_habit_data() -> HabitCreate:
    """Create sample habit data for testing."""
    return HabitCreate(
        name="Morning Run",
        category="Health",
        icon="running",
        color="#3B82F6",
        description="Run 5k before work",
    )


@pytest.fixture
def created_habit(habit_manager: HabitManager, sample_habit_data: HabitCreate):
    """Create and return a habit in the database."""
    return habit_manager.create_habit(sample_habit_data)


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_env(tmp_path: Path) -> Generator[Path, None, None]:
    """Point the CLI at a temporary database file."""
    reset_db()
    reset_config()

    db_path = tmp_path / "cli.db"
    os.environ["DAILYRHYTHM_DB_PATH"] = str(db_path)
    os.environ["DAILYRHYTHM_USER_ID"] = "cli-user"

    yield db_path

    reset_db()
    reset_config()
    os.environ.pop("DAILYRHYTHM_DB_PATH", None)
    os.environ.pop("DAILYRHYTHM_USER_ID", None)
