"""Sleep interval aggregation.

Sleep sessions are split into per-day pieces expressed in decimal hours,
then the pieces for each day are merged so overlapping or touching sleep
shows as one block. All day boundaries are UTC.

Hours run from 0 (start-of-day midnight) to 24 (end-of-day midnight), so a
session from 22:00 to 06:00 becomes ``22-24`` on the first day and ``0-6``
on the next.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Union

ONE_DAY = timedelta(days=1)

InstantLike = Union[datetime, date, str]


@dataclass(frozen=True)
class Interval:
    """A span of one day in decimal hours."""

    start: float
    end: float

    @property
    def hours(self) -> float:
        return self.end - self.start


@dataclass
class DayInterval:
    """Sleep intervals falling on one calendar day."""

    date: date
    intervals: list[Interval] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(interval.hours for interval in self.intervals)


def parse_instant(value: InstantLike) -> datetime:
    """Parse a timestamp and anchor it to UTC.

    Naive values are taken to already be UTC. A bare date means midnight.

    Raises:
        ValueError: If a string is not an ISO-8601 date-time
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    elif not isinstance(value, datetime):
        raise ValueError(f"Unsupported timestamp value: {value!r}")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def decimal_hour(moment: datetime) -> float:
    """Time of day as a decimal hour, e.g. 22:30 -> 22.5."""
    return moment.hour + moment.minute / 60 + moment.second / 3600


@dataclass(frozen=True)
class SleepSession:
    """One contiguous sleep interval with absolute start and end."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        start = parse_instant(self.start)
        end = parse_instant(self.end)
        if end < start:
            raise ValueError(f"Sleep session ends before it starts: {start} > {end}")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


def as_session(item: Any) -> SleepSession:
    """Coerce a SleepSession, a mapping with start/end, or a SleepEntry row."""
    if isinstance(item, SleepSession):
        return item
    if isinstance(item, Mapping):
        return SleepSession(item["start"], item["end"])
    return SleepSession(item.start_at, item.end_at)


def transform_sleep_data(sessions: Iterable[Any]) -> list[DayInterval]:
    """Split each session into one interval per calendar day it touches.

    Zero-width pieces are dropped; these come from zero-length sessions and
    from sessions ending exactly at midnight.

    Returns:
        One DayInterval per piece, in session order, unmerged
    """
    pieces: list[DayInterval] = []

    def emit(day: date, start: float, end: float) -> None:
        if end > start:
            pieces.append(DayInterval(day, [Interval(start, end)]))

    for item in sessions:
        session = as_session(item)
        start_day = session.start.date()
        end_day = session.end.date()
        start_hour = decimal_hour(session.start)
        end_hour = decimal_hour(session.end)

        if start_day == end_day:
            emit(start_day, start_hour, end_hour)
            continue

        emit(start_day, start_hour, 24.0)
        day = start_day + ONE_DAY
        while day < end_day:
            emit(day, 0.0, 24.0)
            day += ONE_DAY
        emit(end_day, 0.0, end_hour)

    return pieces


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Merge overlapping or touching intervals, sorted by start."""
    merged: list[Interval] = []
    for interval in sorted(intervals, key=lambda i: (i.start, i.end)):
        if merged and merged[-1].end >= interval.start:
            current = merged[-1]
            merged[-1] = Interval(current.start, max(current.end, interval.end))
        else:
            merged.append(interval)
    return merged


def aggregate(sessions: Iterable[Any]) -> dict[date, list[Interval]]:
    """Per-day merged sleep intervals across all sessions.

    Args:
        sessions: SleepSession objects, mappings with "start"/"end" ISO
            strings or datetimes, or SleepEntry rows

    Returns:
        Mapping of calendar day to its merged intervals, days ascending
    """
    by_day: dict[date, list[Interval]] = defaultdict(list)
    for piece in transform_sleep_data(sessions):
        by_day[piece.date].extend(piece.intervals)

    return {day: merge_intervals(by_day[day]) for day in sorted(by_day)}
