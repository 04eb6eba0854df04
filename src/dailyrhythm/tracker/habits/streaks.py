"""Streak calculation over daily completion records.

Completion dates are the user's local calendar days. Records are reduced to
a set of completed days before any counting, so duplicates and records that
carry a time-of-day collapse onto the same day.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

ONE_DAY = timedelta(days=1)

DayLike = Union[date, datetime, str]


@dataclass(frozen=True)
class CompletionRecord:
    """A habit marked (or explicitly unmarked) on a calendar day."""

    date: date
    completed: bool = True


def to_day(value: DayLike) -> date:
    """Reduce a date, datetime or ISO string to its calendar day.

    Raises:
        ValueError: If a string is not an ISO-8601 date or date-time
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    raise ValueError(f"Unsupported date value: {value!r}")


def _unpack(record: Any) -> tuple[date, bool]:
    if isinstance(record, Mapping):
        return to_day(record["date"]), bool(record.get("completed", False))
    return to_day(record.date), bool(record.completed)


def completed_days(completions: Iterable[Any]) -> set[date]:
    """Collect the calendar days that have at least one completed record.

    Every record's date is parsed, completed or not, so a malformed date
    fails the whole call instead of being skipped.
    """
    days = set()
    for record in completions:
        day, completed = _unpack(record)
        if completed:
            days.add(day)
    return days


def compute_streak(completions: Iterable[Any], today: Optional[DayLike] = None) -> int:
    """Length of the current run of consecutive completed days.

    The run ends today, or yesterday when today has not been marked yet, so
    an unfinished day never breaks a streak before it is over.

    Args:
        completions: CompletionRecord, HabitCompletion rows or mappings
            with "date" and "completed" keys
        today: Reference day (default: date.today())

    Returns:
        Number of consecutive completed days, 0 if the streak is broken
    """
    days = completed_days(completions)
    cursor = date.today() if today is None else to_day(today)

    if cursor not in days:
        cursor -= ONE_DAY
        if cursor not in days:
            return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= ONE_DAY
    return streak


def longest_streak(completions: Iterable[Any]) -> int:
    """Longest run of consecutive completed days anywhere in the history."""
    longest = 0
    run = 0
    previous: Optional[date] = None

    for day in sorted(completed_days(completions)):
        run = run + 1 if previous is not None and day - previous == ONE_DAY else 1
        longest = max(longest, run)
        previous = day

    return longest
