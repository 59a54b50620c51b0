"""
Database schema definitions for task persistence.

Uses SQLite with:
- TEXT timestamps (ISO8601 format, UTC, microsecond precision)
- CHECK constraints for data integrity
- AUTOINCREMENT ids so a deleted id is never handed out again
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


# ==================== Pydantic Models ====================

class TaskRecord(BaseModel):
    """Task database record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    completed: bool = False
    created_at: datetime  # set once at insertion


# ==================== SQL DDL ====================

SCHEMA_SQL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous = NORMAL;
PRAGMA busy_timeout = 5000;

CREATE TABLE IF NOT EXISTS todos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    description TEXT NOT NULL CHECK (length(trim(description)) > 0),
    completed INTEGER NOT NULL DEFAULT 0 CHECK (completed IN (0, 1)),
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""


# ==================== Utility Functions ====================

ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_iso8601(dt: datetime) -> str:
    """Format datetime as the stored ISO8601 UTC string."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(ISO8601_FORMAT)


def now_iso8601() -> str:
    """Get current UTC timestamp in ISO8601 format."""
    return format_iso8601(utc_now())


def parse_iso8601(timestamp: str) -> datetime:
    """Parse a stored ISO8601 timestamp into an aware UTC datetime."""
    dt = datetime.strptime(timestamp, ISO8601_FORMAT)
    return dt.replace(tzinfo=timezone.utc)
