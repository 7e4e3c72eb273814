"""Database layer for fittrack."""

from .engine import get_db_path, init_db
from .repositories import ProfileRepository, WorkoutRepository
from .store import RecordStore

__all__ = [
    "get_db_path",
    "init_db",
    "ProfileRepository",
    "RecordStore",
    "WorkoutRepository",
]
