"""SQLAlchemy models for habits and their daily completions.

Tables:
- habits: User-defined recurring activities
- habit_completions: One row per habit per marked day
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..db.models import Base, generate_uuid, utc_now


class Habit(Base):
    """Habit model - a recurring activity tracked by daily completion."""

    __tablename__ = "habits"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    # Display
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    icon: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)  # "#rrggbb"
    description: Mapped[Optional[str]] = mapped_column(String(1000))

    # Timestamps
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)

    # Relationships
    completions: Mapped[list["HabitCompletion"]] = relationship(
        "HabitCompletion",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="HabitCompletion.date",
    )

    def __repr__(self) -> str:
        return f"<Habit(id={self.id}, name='{self.name}')>"


class HabitCompletion(Base):
    """Completion model - asserts a habit was performed on a calendar day."""

    __tablename__ = "habit_completions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    habit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # ISO date
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)

    habit: Mapped["Habit"] = relationship("Habit", back_populates="completions")

    def __repr__(self) -> str:
        return (
            f"<HabitCompletion(habit_id={self.habit_id}, date={self.date}, "
            f"completed={self.completed})>"
        )
