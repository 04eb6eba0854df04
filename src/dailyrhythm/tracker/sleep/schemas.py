"""Pydantic schemas for sleep entries and the sleep graph."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from .intervals import Interval, parse_instant


class SleepEntryCreate(BaseModel):
    """Schema for logging a sleep session.

    Both instants are normalised to UTC; naive values are read as UTC.
    Sub-second parts are dropped, matching what the table stores.
    """

    start: datetime
    end: datetime

    @field_validator("start", "end", mode="before")
    @classmethod
    def anchor_utc(cls, v):
        """Parse ISO strings (including a trailing Z) and anchor to UTC."""
        return parse_instant(v).replace(microsecond=0)

    @model_validator(mode="after")
    def end_after_start(self) -> "SleepEntryCreate":
        """Reject sessions that end before or when they start."""
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


class SleepEntryResponse(BaseModel):
    """Schema for sleep entry response."""

    id: UUID
    start: datetime
    end: datetime
    hours: float

    model_config = {"from_attributes": True}


class SleepSummary(BaseModel):
    """Totals over a set of sleep entries."""

    entry_count: int
    total_hours: float
    average_hours: float
    last_hours: Optional[float]
    quality: str


class SleepChartDay(BaseModel):
    """One bar of the sleep graph."""

    date: date
    intervals: list[Interval]
    total_sleep: float
    has_data: bool
    start_time: str
    end_time: str


class SleepGraph(BaseModel):
    """Sleep graph over a date range."""

    start_date: date
    end_date: date
    days: list[SleepChartDay]
    average_sleep: float
