"""Data access layer for fittrack."""

import logging
from collections.abc import Callable, Mapping
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import AsyncIterator
from uuid import uuid4

import aiosqlite

from ..exceptions import (
    AuthorizationError,
    StoreError,
    ValidationError,
    WorkoutNotFoundError,
)
from ..models.identity import Identity
from ..models.profile import Profile
from ..models.workout import (
    WEIGHT_QUANTUM,
    Exercise,
    ExerciseInput,
    Workout,
    validate_exercise_batch,
    validate_name,
)
from .engine import connect, get_db_path
from .store import RecordStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None, now: datetime) -> datetime:
    """Return a timestamp strictly after `previous`, preferring `now`."""
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def _format_ts(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _clean_text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def coerce_date(value: date | datetime | str | None) -> date | None:
    """Accept a date, datetime or ISO string; raise ValidationError otherwise."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}", field="date")


class _Repository:
    """Shared connection handling and clock for the repositories."""

    def __init__(
        self,
        db_path: Path | None = None,
        store: RecordStore | None = None,
        clock: Clock | None = None,
    ):
        self.db_path = db_path or get_db_path()
        self.store = store or RecordStore()
        self._clock = clock or utcnow

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection, translating store failures into StoreError.

        Uncommitted work is discarded when the connection closes, so a
        failure part-way through an operation leaves nothing behind.
        """
        try:
            async with connect(self.db_path) as db:
                yield db
        except aiosqlite.Error as e:
            logger.error("Record store failure during %s: %s", operation, e)
            raise StoreError(str(e), details={"operation": operation}) from e


class WorkoutRepository(_Repository):
    """Repository for workouts and their exercises.

    Every call takes the authenticated identity explicitly. Ownership is
    checked here before touching the store, and the store re-checks it in
    every statement it runs.
    """

    async def create_workout(
        self,
        identity: Identity,
        owner: str,
        name: str,
        workout_date: date | str | None = None,
        notes: str | None = None,
    ) -> Workout:
        """Create a workout. The date defaults to today."""
        name = validate_name(name)
        workout_date = coerce_date(workout_date)
        self._guard_owner(identity, owner)

        now = self._now()
        workout = Workout(
            id=str(uuid4()),
            owner=owner,
            name=name,
            date=workout_date or now.date(),
            notes=_clean_text(notes),
            created_at=now,
            updated_at=now,
        )
        async with self._session("create_workout") as db:
            await self.store.insert_workout(db, identity, self._workout_row(workout))
            await db.commit()

        logger.info("Created workout %s for %s", workout.id, owner)
        return workout

    async def add_exercises(
        self,
        identity: Identity,
        workout_id: str,
        exercises: list[ExerciseInput | Mapping],
    ) -> list[Exercise]:
        """Add a batch of exercises to a workout the caller owns.

        The batch is validated before anything is written and inserted in
        one transaction. The parent workout is never rolled back.
        """
        entries = validate_exercise_batch(exercises)

        async with self._session("add_exercises") as db:
            row = await self.store.select_workout(db, identity, workout_id)
            if row is None:
                logger.warning(
                    "add_exercises: workout %s not visible to %s", workout_id, identity.user_id
                )
                raise WorkoutNotFoundError(workout_id)
            if not entries:
                return []

            now = self._now()
            created = []
            for entry in entries:
                exercise = Exercise(
                    id=str(uuid4()),
                    workout_id=workout_id,
                    name=entry.name,
                    sets=entry.sets,
                    reps=entry.reps,
                    weight=entry.weight,
                    notes=entry.notes,
                    created_at=now,
                )
                stored = self._exercise_row(exercise)
                await self.store.insert_exercise(db, identity, stored)
                created.append(self._row_to_exercise(stored))

            await self._touch(db, identity, row)
            await db.commit()

        logger.info("Added %d exercise(s) to workout %s", len(created), workout_id)
        return created

    async def list_workouts(
        self, identity: Identity, owner: str, limit: int | None = None
    ) -> list[Workout]:
        """List workouts newest date first; `limit=None` is unbounded."""
        self._guard_owner(identity, owner)
        if limit is not None and limit < 1:
            raise ValidationError("limit must be a positive integer", field="limit")

        async with self._session("list_workouts") as db:
            rows = await self.store.select_workouts(db, identity, limit)
        return [self._row_to_workout(row) for row in rows]

    async def count_workouts(self, identity: Identity, owner: str) -> int:
        """Count every workout the owner has, not just a recent window."""
        self._guard_owner(identity, owner)
        async with self._session("count_workouts") as db:
            return await self.store.count_workouts(db, identity)

    async def get_workout(self, identity: Identity, workout_id: str) -> Workout:
        """Get a single workout."""
        async with self._session("get_workout") as db:
            row = await self._guarded_workout(db, identity, workout_id)
        return self._row_to_workout(row)

    async def get_exercises_for(
        self, identity: Identity, workout_id: str
    ) -> list[Exercise]:
        """Get a workout's exercises in insertion order.

        A workout with no exercises, or one the caller cannot see, yields
        an empty list.
        """
        async with self._session("get_exercises_for") as db:
            rows = await self.store.select_exercises(db, identity, workout_id)
        return [self._row_to_exercise(row) for row in rows]

    async def update_workout(
        self,
        identity: Identity,
        workout_id: str,
        name: str | None = None,
        workout_date: date | str | None = None,
        notes: str | None = None,
    ) -> Workout:
        """Edit a workout in place. None leaves a field unchanged; empty notes clear it."""
        fields: dict = {}
        if name is not None:
            fields["name"] = validate_name(name)
        if workout_date is not None:
            fields["date"] = coerce_date(workout_date).isoformat()
        if notes is not None:
            fields["notes"] = _clean_text(notes)

        async with self._session("update_workout") as db:
            row = await self._guarded_workout(db, identity, workout_id)
            previous = _parse_ts(row["updated_at"])
            fields["updated_at"] = _format_ts(next_timestamp(previous, self._now()))
            await self.store.update_workout(db, identity, workout_id, fields)
            await db.commit()
            row = await self.store.select_workout(db, identity, workout_id)

        logger.info("Updated workout %s", workout_id)
        return self._row_to_workout(row)

    async def delete_workout(self, identity: Identity, workout_id: str) -> None:
        """Delete a workout and, through the cascade, all of its exercises."""
        async with self._session("delete_workout") as db:
            owner = await self.store.lookup_owner(db, workout_id)
            self._guard_record(identity, workout_id, owner)
            deleted = await self.store.delete_workout(db, identity, workout_id)
            if deleted == 0:
                raise WorkoutNotFoundError(workout_id)
            await db.commit()

        logger.info("Deleted workout %s", workout_id)

    async def _guarded_workout(
        self, db: aiosqlite.Connection, identity: Identity, workout_id: str
    ) -> aiosqlite.Row:
        row = await self.store.select_workout(db, identity, workout_id)
        if row is None:
            owner = await self.store.lookup_owner(db, workout_id)
            self._guard_record(identity, workout_id, owner)
            # Visible by owner but not by row: removed between the two reads
            raise WorkoutNotFoundError(workout_id)
        return row

    async def _touch(
        self, db: aiosqlite.Connection, identity: Identity, row: aiosqlite.Row
    ) -> None:
        previous = _parse_ts(row["updated_at"])
        await self.store.update_workout(
            db,
            identity,
            row["id"],
            {"updated_at": _format_ts(next_timestamp(previous, self._now()))},
        )

    def _guard_owner(self, identity: Identity, owner: str) -> None:
        if not identity.owns(owner):
            logger.warning("%s attempted to act as %s", identity.user_id, owner)
            raise AuthorizationError(
                "You can only access your own workouts",
                details={"owner": owner},
            )

    def _guard_record(
        self, identity: Identity, workout_id: str, owner: str | None
    ) -> None:
        if owner is None:
            raise WorkoutNotFoundError(workout_id)
        if not identity.owns(owner):
            logger.warning(
                "%s denied access to workout %s", identity.user_id, workout_id
            )
            raise AuthorizationError(details={"workout_id": workout_id})

    def _workout_row(self, workout: Workout) -> dict:
        return {
            "id": workout.id,
            "user_id": workout.owner,
            "name": workout.name,
            "date": workout.date.isoformat(),
            "notes": workout.notes,
            "created_at": _format_ts(workout.created_at),
            "updated_at": _format_ts(workout.updated_at),
        }

    def _exercise_row(self, exercise: Exercise) -> dict:
        return {
            "id": exercise.id,
            "workout_id": exercise.workout_id,
            "name": exercise.name,
            "sets": exercise.sets,
            "reps": exercise.reps,
            "weight_hundredths": int(exercise.weight.scaleb(2)),
            "notes": exercise.notes,
            "created_at": _format_ts(exercise.created_at),
        }

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        """Convert a database row to a Workout."""
        return Workout(
            id=row["id"],
            owner=row["user_id"],
            name=row["name"],
            date=date.fromisoformat(row["date"]),
            notes=row["notes"],
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )

    def _row_to_exercise(self, row: Mapping) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            workout_id=row["workout_id"],
            name=row["name"],
            sets=row["sets"],
            reps=row["reps"],
            weight=Decimal(row["weight_hundredths"]).scaleb(-2).quantize(WEIGHT_QUANTUM),
            notes=row["notes"],
            created_at=_parse_ts(row["created_at"]),
        )


class ProfileRepository(_Repository):
    """Repository for user profiles."""

    async def get(self, identity: Identity) -> Profile | None:
        """Get the caller's profile, if one was created."""
        async with self._session("get_profile") as db:
            row = await self.store.select_profile(db, identity)
        return self._row_to_profile(row) if row else None

    async def get_or_create(self, identity: Identity) -> Profile:
        """Get the caller's profile, creating an empty one on first use."""
        async with self._session("get_or_create_profile") as db:
            row = await self.store.select_profile(db, identity)
            if row is None:
                now = _format_ts(self._now())
                await self.store.insert_profile(
                    db,
                    identity,
                    {
                        "id": str(uuid4()),
                        "user_id": identity.user_id,
                        "username": None,
                        "created_at": now,
                        "updated_at": now,
                    },
                )
                await db.commit()
                row = await self.store.select_profile(db, identity)
                logger.info("Created profile for %s", identity.user_id)
        return self._row_to_profile(row)

    async def update_username(self, identity: Identity, username: str | None) -> Profile:
        """Set the display username; blank clears it."""
        profile = await self.get_or_create(identity)
        username = username.strip() if username else None

        async with self._session("update_profile") as db:
            await self.store.update_profile(
                db,
                identity,
                {
                    "username": username or None,
                    "updated_at": _format_ts(next_timestamp(profile.updated_at, self._now())),
                },
            )
            await db.commit()
            row = await self.store.select_profile(db, identity)
        return self._row_to_profile(row)

    def _row_to_profile(self, row: aiosqlite.Row) -> Profile:
        """Convert a database row to a Profile."""
        return Profile(
            id=row["id"],
            owner=row["user_id"],
            username=row["username"],
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )
