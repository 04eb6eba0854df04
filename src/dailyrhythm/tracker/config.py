"""Configuration management for the tracker.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_DB_PATH = Path.home() / ".dailyrhythm" / "dailyrhythm.db"


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Owner of every habit and sleep entry
    user_id: str

    # Heat grid
    grid_rows: int
    grid_columns: int

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get("DAILYRHYTHM_DB_PATH", str(DEFAULT_DB_PATH))
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            user_id=os.environ.get("DAILYRHYTHM_USER_ID", "local"),
            grid_rows=int(os.environ.get("DAILYRHYTHM_GRID_ROWS", "6")),
            grid_columns=int(os.environ.get("DAILYRHYTHM_GRID_COLUMNS", "40")),
            log_level=os.environ.get("DAILYRHYTHM_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def is_memory_db(self) -> bool:
        """Check if the database lives in memory."""
        return str(self.db_path) == ":memory:"

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if not self.is_memory_db and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.grid_rows <= 0 or self.grid_columns <= 0:
            errors.append(
                f"Grid size must be positive, got {self.grid_rows}x{self.grid_columns}"
            )

        if not self.user_id:
            errors.append("DAILYRHYTHM_USER_ID must not be empty")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
