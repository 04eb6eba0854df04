"""Dashboard statistics across habits and sleep.

Combines per-habit streaks with recent sleep figures for the overview
screen.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..db.sqlite import Database, get_db
from ..config import Config, get_config
from ..habits.manager import HabitManager
from ..sleep.chart import sleep_quality
from ..sleep.manager import SleepManager

RECENT_SLEEP_DAYS = 7


@dataclass
class DashboardStats:
    """Overview figures for the dashboard."""

    total_habits: int = 0
    active_streaks: int = 0  # habits with a streak > 0
    best_current_streak: int = 0
    completed_today: int = 0
    completion_rate_today: float = 0.0  # percentage
    average_sleep: float = 0.0  # hours, last RECENT_SLEEP_DAYS days
    sleep_quality: str = "Poor"
    last_sleep_hours: Optional[float] = None


class Dashboard:
    """Calculates dashboard statistics."""

    def __init__(self, db: Optional[Database] = None, config: Optional[Config] = None):
        """Initialize dashboard.

        Args:
            db: Database instance
            config: Configuration
        """
        self.db = db or get_db()
        self.config = config or get_config()
        self.habits = HabitManager(self.db, self.config)
        self.sleep = SleepManager(self.db, self.config)

    def get_stats(self, today: Optional[date] = None) -> DashboardStats:
        """Get dashboard statistics.

        Args:
            today: Reference day (default: today)

        Returns:
            DashboardStats
        """
        today = today or date.today()
        summaries = self.habits.get_summaries(today)
        streaks = [s.current_streak for s in summaries]
        done_today = sum(1 for s in summaries if s.completed_today)

        sleep_summary = self.sleep.get_summary()
        recent_sleep = self.sleep.get_recent_average(RECENT_SLEEP_DAYS, today)

        return DashboardStats(
            total_habits=len(summaries),
            active_streaks=sum(1 for streak in streaks if streak > 0),
            best_current_streak=max(streaks, default=0),
            completed_today=done_today,
            completion_rate_today=(
                round(done_today / len(summaries) * 100, 1) if summaries else 0.0
            ),
            average_sleep=recent_sleep,
            sleep_quality=sleep_quality(recent_sleep),
            last_sleep_hours=sleep_summary.last_hours,
        )
