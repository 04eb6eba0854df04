"""Database module for local SQLite storage."""

from .models import Base, generate_uuid, utc_now
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "generate_uuid",
    "utc_now",
    "Database",
    "get_db",
    "reset_db",
]
