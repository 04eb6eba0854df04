"""Sleep manager for sleep entry operations and graph data."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from sqlalchemy import select

from ...utils import calculate_average
from ..config import Config, get_config
from ..db.sqlite import Database, get_db
from .chart import average_sleep, build_chart, default_graph_range, sleep_quality
from .intervals import aggregate
from .models import SleepEntry, to_column
from .schemas import SleepEntryCreate, SleepGraph, SleepSummary

logger = logging.getLogger(__name__)


def _day_start(day: date) -> str:
    return to_column(datetime.combine(day, time.min, tzinfo=timezone.utc))


class SleepManager:
    """Manages sleep entries and their aggregated views."""

    def __init__(self, db: Optional[Database] = None, config: Optional[Config] = None):
        """Initialize sleep manager.

        Args:
            db: Database instance
            config: Configuration (owner id)
        """
        self.db = db or get_db()
        self.config = config or get_config()

    @property
    def user_id(self) -> str:
        return self.config.user_id

    # -------------------------------------------------------------------------
    # Entry Management
    # -------------------------------------------------------------------------

    def log_sleep(self, data: SleepEntryCreate) -> SleepEntry:
        """Log a sleep session.

        Args:
            data: Validated start/end instants

        Returns:
            Created SleepEntry
        """
        with self.db.get_session() as session:
            entry = SleepEntry(
                user_id=self.user_id,
                start_at=to_column(data.start),
                end_at=to_column(data.end),
            )
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)

        logger.info("Logged sleep %s: %.2f hours", entry.id, entry.hours)
        return entry

    def get_entry(self, entry_id: str) -> Optional[SleepEntry]:
        """Get a sleep entry by ID."""
        with self.db.get_session() as session:
            stmt = select(SleepEntry).where(
                SleepEntry.id == entry_id, SleepEntry.user_id == self.user_id
            )
            entry = session.execute(stmt).scalar_one_or_none()
            if entry:
                session.expunge(entry)
            return entry

    def list_entries(
        self,
        start_day: Optional[date] = None,
        end_day: Optional[date] = None,
    ) -> list[SleepEntry]:
        """List sleep entries that start within a date range.

        Args:
            start_day: First day (inclusive, UTC)
            end_day: Last day (inclusive, UTC)

        Returns:
            Entries ordered by start
        """
        with self.db.get_session() as session:
            stmt = select(SleepEntry).where(SleepEntry.user_id == self.user_id)

            if start_day:
                stmt = stmt.where(SleepEntry.start_at >= _day_start(start_day))
            if end_day:
                stmt = stmt.where(SleepEntry.start_at < _day_start(end_day + timedelta(days=1)))

            stmt = stmt.order_by(SleepEntry.start_at)

            entries = session.execute(stmt).scalars().all()
            for entry in entries:
                session.expunge(entry)
            return list(entries)

    def delete_entry(self, entry_id: str) -> bool:
        """Delete a sleep entry.

        Returns:
            True if an entry was deleted
        """
        with self.db.get_session() as session:
            stmt = select(SleepEntry).where(
                SleepEntry.id == entry_id, SleepEntry.user_id == self.user_id
            )
            entry = session.execute(stmt).scalar_one_or_none()
            if not entry:
                logger.warning("Delete requested for unknown sleep entry %s", entry_id)
                return False
            session.delete(entry)
            session.commit()

        logger.info("Deleted sleep entry %s", entry_id)
        return True

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_summary(self, entries: Optional[list[SleepEntry]] = None) -> SleepSummary:
        """Summarize sleep entries (default: all entries).

        Args:
            entries: Entries ordered by start

        Returns:
            SleepSummary with total, average and most recent durations
        """
        if entries is None:
            entries = self.list_entries()

        hours = [entry.hours for entry in entries]
        average = round(calculate_average(hours), 2) if hours else 0.0
        return SleepSummary(
            entry_count=len(hours),
            total_hours=round(sum(hours), 2),
            average_hours=average,
            last_hours=round(hours[-1], 2) if hours else None,
            quality=sleep_quality(average),
        )

    def get_recent_average(self, days: int = 7, today: Optional[date] = None) -> float:
        """Average hours per entry over the last ``days`` days."""
        today = today or date.today()
        entries = self.list_entries(start_day=today - timedelta(days=days - 1), end_day=today)
        return self.get_summary(entries).average_hours

    def get_graph(
        self,
        start_day: Optional[date] = None,
        end_day: Optional[date] = None,
        today: Optional[date] = None,
    ) -> SleepGraph:
        """Build per-day sleep graph data.

        Entries that overlap the range at all are aggregated, so a night
        starting the evening before ``start_day`` still fills its morning.

        Args:
            start_day: First day shown (default: start of previous month)
            end_day: Last day shown (default: end of this month)
            today: Reference day for the default range

        Returns:
            SleepGraph with one row per day and the average over days with data
        """
        default_start, default_end = default_graph_range(today)
        start_day = start_day or default_start
        end_day = end_day or default_end

        with self.db.get_session() as session:
            stmt = select(SleepEntry).where(
                SleepEntry.user_id == self.user_id,
                SleepEntry.end_at >= _day_start(start_day),
                SleepEntry.start_at < _day_start(end_day + timedelta(days=1)),
            )
            entries = session.execute(stmt).scalars().all()
            sessions = [{"start": e.start_at, "end": e.end_at} for e in entries]

        chart = build_chart(aggregate(sessions), start_day, end_day)
        return SleepGraph(
            start_date=start_day,
            end_date=end_day,
            days=chart,
            average_sleep=round(average_sleep(chart), 2),
        )
