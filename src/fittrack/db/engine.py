"""Database engine setup and initialization."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_name


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with foreign keys enforced and Row access enabled."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Workouts table
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workouts (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL CHECK (length(trim(name)) > 0),
                date TEXT NOT NULL DEFAULT CURRENT_DATE,
                notes TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        # Exercises table (always reached through the owning workout)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                workout_id TEXT NOT NULL,
                name TEXT NOT NULL CHECK (length(trim(name)) > 0),
                sets INTEGER NOT NULL DEFAULT 0 CHECK (sets >= 0),
                reps INTEGER NOT NULL DEFAULT 0 CHECK (reps >= 0),
                weight_hundredths INTEGER NOT NULL DEFAULT 0
                    CHECK (weight_hundredths BETWEEN 0 AND 9999999999),
                notes TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY (workout_id) REFERENCES workouts(id) ON DELETE CASCADE
            )
        """)

        # Profiles table, one per user
        await db.execute("""
            CREATE TABLE IF NOT EXISTS profiles (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL UNIQUE,
                username TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        # Ownership and creation time never change once written
        await db.execute("""
            CREATE TRIGGER IF NOT EXISTS workouts_immutable_columns
            BEFORE UPDATE OF user_id, created_at ON workouts
            WHEN NEW.user_id IS NOT OLD.user_id OR NEW.created_at IS NOT OLD.created_at
            BEGIN
                SELECT RAISE(ABORT, 'workouts.user_id and workouts.created_at are immutable');
            END
        """)
        await db.execute("""
            CREATE TRIGGER IF NOT EXISTS exercises_workout_immutable
            BEFORE UPDATE OF workout_id ON exercises
            WHEN NEW.workout_id IS NOT OLD.workout_id
            BEGIN
                SELECT RAISE(ABORT, 'exercises.workout_id is immutable');
            END
        """)
        await db.execute("""
            CREATE TRIGGER IF NOT EXISTS profiles_immutable_columns
            BEFORE UPDATE OF user_id, created_at ON profiles
            WHEN NEW.user_id IS NOT OLD.user_id OR NEW.created_at IS NOT OLD.created_at
            BEGIN
                SELECT RAISE(ABORT, 'profiles.user_id and profiles.created_at are immutable');
            END
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workouts_user_date
            ON workouts(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_workout
            ON exercises(workout_id)
        """)

        await db.commit()

    logger.info("Initialized database at %s", db_path)
