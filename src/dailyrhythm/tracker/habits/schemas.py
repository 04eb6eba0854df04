"""Pydantic schemas for habits and completions."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ...utils import HEX_COLOR_PATTERN


def _check_color(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not HEX_COLOR_PATTERN.match(value):
        raise ValueError("color must be a hex code like #22c55e")
    return value.lower()


def _check_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class HabitBase(BaseModel):
    """Fields shared by habit create/update operations."""

    name: str = Field(..., min_length=1, max_length=100, description="Habit name")
    category: str = Field("General", min_length=1, max_length=100)
    icon: str = Field("check", min_length=1, max_length=50)
    color: str = Field("#22c55e", description="Hex colour code")
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("name", "category", "icon")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Reject names that are only whitespace."""
        return _check_text(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Require a #RRGGBB colour."""
        return _check_color(v)


class HabitCreate(HabitBase):
    """Schema for creating a new habit."""

    pass


class HabitUpdate(BaseModel):
    """Schema for updating a habit. All fields optional."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = None
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("name", "category", "icon")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        """Reject replacement text that is only whitespace."""
        return _check_text(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        """Require a #RRGGBB colour when one is given."""
        return _check_color(v)


class CompletionResponse(BaseModel):
    """Schema for a completion record."""

    id: UUID
    habit_id: UUID
    date: date
    completed: bool

    model_config = {"from_attributes": True}


class HabitResponse(BaseModel):
    """Schema for habit response, with its completion history."""

    id: UUID
    name: str
    category: str
    icon: str
    color: str
    description: Optional[str]
    created_at: datetime
    completions: list[CompletionResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class HabitSummary(BaseModel):
    """Per-habit figures shown on the habits page and dashboard."""

    id: str
    name: str
    category: str
    icon: str
    color: str
    completed_today: bool
    current_streak: int
    longest_streak: int
    total_completions: int


class GridCell(BaseModel):
    """One day in a habit heat grid."""

    date: date
    completed: bool


class HabitGrid(BaseModel):
    """Calendar-style heat grid for a habit.

    ``cells`` is indexed ``[row][column]``; days run top to bottom, then on
    to the next column, with the most recent day last.
    """

    habit_id: str
    rows: int
    columns: int
    color: str
    muted_color: str
    start_date: date
    end_date: date
    cells: list[list[GridCell]]

    @property
    def completed_count(self) -> int:
        """Number of completed days shown in the grid."""
        return sum(1 for row in self.cells for cell in row if cell.completed)
