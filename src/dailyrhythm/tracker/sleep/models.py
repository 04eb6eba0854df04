"""SQLAlchemy model for sleep entries.

Tables:
- sleep_entries: One row per logged sleep session
"""

from datetime import datetime, timezone

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base, generate_uuid, utc_now


def to_column(moment: datetime) -> str:
    """Store instants as second-precision UTC ISO strings so they sort as text."""
    return moment.astimezone(timezone.utc).replace(microsecond=0).isoformat()


class SleepEntry(Base):
    """Sleep entry model - an absolute start/end sleep session."""

    __tablename__ = "sleep_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    # UTC instants
    start_at: Mapped[str] = mapped_column(String(25), nullable=False, index=True)
    end_at: Mapped[str] = mapped_column(String(25), nullable=False)

    # Timestamps
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<SleepEntry(id={self.id}, start={self.start_at}, end={self.end_at})>"

    @property
    def start(self) -> datetime:
        return datetime.fromisoformat(self.start_at)

    @property
    def end(self) -> datetime:
        return datetime.fromisoformat(self.end_at)

    @property
    def hours(self) -> float:
        """Duration in hours."""
        return (self.end - self.start).total_seconds() / 3600
