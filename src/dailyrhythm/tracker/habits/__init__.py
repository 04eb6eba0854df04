"""Habits, daily completions and streaks."""

from .manager import HabitManager
from .models import Habit, HabitCompletion
from .schemas import (
    CompletionResponse,
    GridCell,
    HabitCreate,
    HabitGrid,
    HabitResponse,
    HabitSummary,
    HabitUpdate,
)
from .streaks import CompletionRecord, compute_streak, longest_streak

__all__ = [
    "HabitManager",
    "Habit",
    "HabitCompletion",
    "CompletionResponse",
    "GridCell",
    "HabitCreate",
    "HabitGrid",
    "HabitResponse",
    "HabitSummary",
    "HabitUpdate",
    "CompletionRecord",
    "compute_streak",
    "longest_streak",
]
