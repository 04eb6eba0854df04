"""Declarative base and column helpers shared by every table.

Feature packages define their own tables against ``Base``:
- habits, habit_completions (``tracker.habits.models``)
- sleep_entries (``tracker.sleep.models``)
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


def utc_now() -> str:
    """Current UTC time as an ISO string for timestamp columns."""
    return datetime.now(timezone.utc).isoformat()
