"""Habit manager for habit and completion operations."""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from ...utils import adjust_color
from ..config import Config, get_config
from ..db.sqlite import Database, get_db
from .models import Habit, HabitCompletion
from .schemas import GridCell, HabitCreate, HabitGrid, HabitSummary, HabitUpdate
from .streaks import compute_streak, completed_days, longest_streak

logger = logging.getLogger(__name__)

# Muted cell colours for days without a completion
LIGHT_MUTE_PERCENT = 80
DARK_MUTE_PERCENT = -65


class HabitManager:
    """Manages habits, daily completions and streaks."""

    def __init__(self, db: Optional[Database] = None, config: Optional[Config] = None):
        """Initialize habit manager.

        Args:
            db: Database instance
            config: Configuration (owner id, grid size)
        """
        self.db = db or get_db()
        self.config = config or get_config()

    @property
    def user_id(self) -> str:
        return self.config.user_id

    # -------------------------------------------------------------------------
    # Habit Management
    # -------------------------------------------------------------------------

    def create_habit(self, data: HabitCreate) -> Habit:
        """Create a new habit.

        Args:
            data: Validated habit fields

        Returns:
            Created Habit
        """
        with self.db.get_session() as session:
            habit = Habit(
                user_id=self.user_id,
                name=data.name,
                category=data.category,
                icon=data.icon,
                color=data.color,
                description=data.description,
            )
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)

        logger.info("Created habit %s (%s)", habit.id, habit.name)
        return habit

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        """Get a habit with its completions loaded.

        Args:
            habit_id: Habit ID

        Returns:
            Habit or None if it does not exist or belongs to another user
        """
        with self.db.get_session() as session:
            stmt = (
                select(Habit)
                .options(selectinload(Habit.completions))
                .where(Habit.id == habit_id, Habit.user_id == self.user_id)
            )
            habit = session.execute(stmt).scalar_one_or_none()
            if habit:
                session.expunge(habit)
            return habit

    def list_habits(self) -> list[Habit]:
        """List the user's habits, oldest first, with completions loaded."""
        with self.db.get_session() as session:
            stmt = (
                select(Habit)
                .options(selectinload(Habit.completions))
                .where(Habit.user_id == self.user_id)
                .order_by(Habit.created_at)
            )
            habits = session.execute(stmt).scalars().all()
            for habit in habits:
                session.expunge(habit)
            return list(habits)

    def update_habit(self, habit_id: str, data: HabitUpdate) -> Habit:
        """Update a habit's display fields.

        Args:
            habit_id: Habit ID
            data: Fields to change; unset fields are left alone

        Returns:
            Updated Habit

        Raises:
            ValueError: If the habit does not exist
        """
        changes = data.model_dump(exclude_unset=True)

        with self.db.get_session() as session:
            habit = self._get_owned(session, habit_id)
            for field_name, value in changes.items():
                if value is None and field_name != "description":
                    continue
                setattr(habit, field_name, value)

            session.commit()
            session.refresh(habit)
            session.expunge(habit)

        logger.info("Updated habit %s: %s", habit_id, ", ".join(sorted(changes)) or "no changes")
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        """Delete a habit and its completions.

        Args:
            habit_id: Habit ID

        Returns:
            True if a habit was deleted
        """
        with self.db.get_session() as session:
            stmt = select(Habit).where(Habit.id == habit_id, Habit.user_id == self.user_id)
            habit = session.execute(stmt).scalar_one_or_none()
            if not habit:
                logger.warning("Delete requested for unknown habit %s", habit_id)
                return False
            session.delete(habit)
            session.commit()

        logger.info("Deleted habit %s", habit_id)
        return True

    def _get_owned(self, session, habit_id: str) -> Habit:
        stmt = select(Habit).where(Habit.id == habit_id, Habit.user_id == self.user_id)
        habit = session.execute(stmt).scalar_one_or_none()
        if not habit:
            raise ValueError(f"Habit not found: {habit_id}")
        return habit

    # -------------------------------------------------------------------------
    # Completion Management
    # -------------------------------------------------------------------------

    def get_completions(self, habit_id: str) -> list[HabitCompletion]:
        """Get all completion records for one of the user's habits, oldest first."""
        with self.db.get_session() as session:
            stmt = (
                select(HabitCompletion)
                .join(Habit, HabitCompletion.habit_id == Habit.id)
                .where(HabitCompletion.habit_id == habit_id, Habit.user_id == self.user_id)
                .order_by(HabitCompletion.date)
            )
            completions = session.execute(stmt).scalars().all()
            for completion in completions:
                session.expunge(completion)
            return list(completions)

    def set_completion(
        self,
        habit_id: str,
        day: Optional[date] = None,
        completed: bool = True,
    ) -> HabitCompletion:
        """Create or update the completion record for a day.

        Args:
            habit_id: Habit ID
            day: Calendar day (default: today)
            completed: Completion state to record

        Returns:
            The stored HabitCompletion

        Raises:
            ValueError: If the habit does not exist
        """
        day = day or date.today()

        with self.db.get_session() as session:
            self._get_owned(session, habit_id)
            stmt = select(HabitCompletion).where(
                HabitCompletion.habit_id == habit_id,
                HabitCompletion.date == day.isoformat(),
            )
            completion = session.execute(stmt).scalars().first()

            if completion:
                completion.completed = completed
            else:
                completion = HabitCompletion(
                    habit_id=habit_id,
                    date=day.isoformat(),
                    completed=completed,
                )
                session.add(completion)

            session.commit()
            session.refresh(completion)
            session.expunge(completion)

        return completion

    def delete_completion(self, completion_id: str) -> bool:
        """Delete a single completion record.

        Returns:
            True if a record was deleted
        """
        with self.db.get_session() as session:
            stmt = (
                select(HabitCompletion)
                .join(Habit, HabitCompletion.habit_id == Habit.id)
                .where(HabitCompletion.id == completion_id, Habit.user_id == self.user_id)
            )
            completion = session.execute(stmt).scalar_one_or_none()
            if not completion:
                logger.warning("Delete requested for unknown completion %s", completion_id)
                return False
            session.delete(completion)
            session.commit()
        return True

    def toggle_completion(self, habit_id: str, day: Optional[date] = None) -> bool:
        """Toggle a habit's completion for a day.

        Marking an already completed day removes its records; otherwise the
        day is recorded as completed.

        Args:
            habit_id: Habit ID
            day: Calendar day (default: today)

        Returns:
            True if the day is now completed, False if it was unmarked

        Raises:
            ValueError: If the habit does not exist
        """
        day = day or date.today()

        with self.db.get_session() as session:
            self._get_owned(session, habit_id)
            stmt = select(HabitCompletion).where(
                HabitCompletion.habit_id == habit_id,
                HabitCompletion.date == day.isoformat(),
            )
            records = session.execute(stmt).scalars().all()

            if any(r.completed for r in records):
                session.execute(
                    delete(HabitCompletion).where(
                        HabitCompletion.habit_id == habit_id,
                        HabitCompletion.date == day.isoformat(),
                    )
                )
                session.commit()
                logger.info("Unmarked habit %s on %s", habit_id, day)
                return False

            if records:
                records[0].completed = True
            else:
                session.add(
                    HabitCompletion(habit_id=habit_id, date=day.isoformat(), completed=True)
                )
            session.commit()

        logger.info("Marked habit %s on %s", habit_id, day)
        return True

    # -------------------------------------------------------------------------
    # Streaks and Statistics
    # -------------------------------------------------------------------------

    def get_streak(self, habit_id: str, today: Optional[date] = None) -> int:
        """Current streak for a habit."""
        return compute_streak(self.get_completions(habit_id), today)

    def summarize(self, habit: Habit, today: Optional[date] = None) -> HabitSummary:
        """Build the summary figures for a habit with loaded completions."""
        today = today or date.today()
        days = completed_days(habit.completions)

        return HabitSummary(
            id=habit.id,
            name=habit.name,
            category=habit.category,
            icon=habit.icon,
            color=habit.color,
            completed_today=today in days,
            current_streak=compute_streak(habit.completions, today),
            longest_streak=longest_streak(habit.completions),
            total_completions=len(days),
        )

    def get_summaries(self, today: Optional[date] = None) -> list[HabitSummary]:
        """Summaries for all of the user's habits."""
        return [self.summarize(habit, today) for habit in self.list_habits()]

    def get_grid(
        self,
        habit_id: str,
        today: Optional[date] = None,
        dark: bool = False,
    ) -> HabitGrid:
        """Build the heat grid of recent days for a habit.

        Args:
            habit_id: Habit ID
            today: Last day in the grid (default: today)
            dark: Use the dark-theme muted colour

        Returns:
            HabitGrid with rows x columns days ending today

        Raises:
            ValueError: If the habit does not exist
        """
        habit = self.get_habit(habit_id)
        if not habit:
            raise ValueError(f"Habit not found: {habit_id}")

        today = today or date.today()
        rows = self.config.grid_rows
        columns = self.config.grid_columns
        start = today - timedelta(days=rows * columns - 1)
        days = completed_days(habit.completions)

        cells: list[list[Optional[GridCell]]] = [[None] * columns for _ in range(rows)]
        for i in range(rows * columns):
            day = start + timedelta(days=i)
            cells[i % rows][i // rows] = GridCell(date=day, completed=day in days)

        muted = adjust_color(habit.color, DARK_MUTE_PERCENT if dark else LIGHT_MUTE_PERCENT)

        return HabitGrid(
            habit_id=habit.id,
            rows=rows,
            columns=columns,
            color=habit.color,
            muted_color=muted,
            start_date=start,
            end_date=today,
            cells=cells,
        )
