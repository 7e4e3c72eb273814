"""Owner-scoped statements against the record store.

Every statement here is filtered by the requesting identity, the same way
row-level security policies filter a hosted database: rows belonging to
other users are invisible to selects and untouched by updates and deletes,
and inserts on behalf of anyone else are rejected. The repositories add
their own guards on top; this layer never trusts that they ran.
"""

import aiosqlite

from ..exceptions import StoreError
from ..models.identity import Identity


class PolicyViolation(StoreError):
    """Raised when a write would create a row the identity may not own."""

    def __init__(self, table: str) -> None:
        super().__init__(f"new row violates row-level security policy for table \"{table}\"")
        self.table = table


class RecordStore:
    """Identity-scoped access to the workouts, exercises and profiles tables."""

    # Workouts

    async def insert_workout(
        self, db: aiosqlite.Connection, identity: Identity, row: dict
    ) -> None:
        if row["user_id"] != identity.user_id:
            raise PolicyViolation("workouts")
        await db.execute(
            """
            INSERT INTO workouts (id, user_id, name, date, notes, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                row["id"],
                row["user_id"],
                row["name"],
                row["date"],
                row["notes"],
                row["created_at"],
                row["updated_at"],
            ),
        )

    async def select_workout(
        self, db: aiosqlite.Connection, identity: Identity, workout_id: str
    ) -> aiosqlite.Row | None:
        cursor = await db.execute(
            "SELECT * FROM workouts WHERE id = ? AND user_id = ?",
            (workout_id, identity.user_id),
        )
        return await cursor.fetchone()

    async def select_workouts(
        self, db: aiosqlite.Connection, identity: Identity, limit: int | None = None
    ) -> list[aiosqlite.Row]:
        # rowid DESC: same-day workouts list newest insert first
        query = "SELECT * FROM workouts WHERE user_id = ? ORDER BY date DESC, rowid DESC"
        params: tuple = (identity.user_id,)
        if limit is not None:
            query += " LIMIT ?"
            params += (limit,)
        cursor = await db.execute(query, params)
        return list(await cursor.fetchall())

    async def count_workouts(self, db: aiosqlite.Connection, identity: Identity) -> int:
        cursor = await db.execute(
            "SELECT COUNT(*) FROM workouts WHERE user_id = ?", (identity.user_id,)
        )
        row = await cursor.fetchone()
        return row[0]

    async def lookup_owner(self, db: aiosqlite.Connection, workout_id: str) -> str | None:
        """Return only the owner of a workout, or None if it does not exist.

        Exposes ownership metadata, never row contents, so callers can tell
        a missing workout from someone else's.
        """
        cursor = await db.execute(
            "SELECT user_id FROM workouts WHERE id = ?", (workout_id,)
        )
        row = await cursor.fetchone()
        return row["user_id"] if row else None

    async def update_workout(
        self,
        db: aiosqlite.Connection,
        identity: Identity,
        workout_id: str,
        fields: dict,
    ) -> int:
        assignments = ", ".join(f"{column} = ?" for column in fields)
        cursor = await db.execute(
            f"UPDATE workouts SET {assignments} WHERE id = ? AND user_id = ?",
            (*fields.values(), workout_id, identity.user_id),
        )
        return cursor.rowcount

    async def delete_workout(
        self, db: aiosqlite.Connection, identity: Identity, workout_id: str
    ) -> int:
        cursor = await db.execute(
            "DELETE FROM workouts WHERE id = ? AND user_id = ?",
            (workout_id, identity.user_id),
        )
        return cursor.rowcount

    # Exercises

    async def insert_exercise(
        self, db: aiosqlite.Connection, identity: Identity, row: dict
    ) -> None:
        cursor = await db.execute(
            """
            INSERT INTO exercises
            (id, workout_id, name, sets, reps, weight_hundredths, notes, created_at)
            SELECT ?, ?, ?, ?, ?, ?, ?, ?
            WHERE EXISTS (
                SELECT 1 FROM workouts WHERE workouts.id = ? AND workouts.user_id = ?
            )
            """,
            (
                row["id"],
                row["workout_id"],
                row["name"],
                row["sets"],
                row["reps"],
                row["weight_hundredths"],
                row["notes"],
                row["created_at"],
                row["workout_id"],
                identity.user_id,
            ),
        )
        if cursor.rowcount != 1:
            raise PolicyViolation("exercises")

    async def select_exercises(
        self, db: aiosqlite.Connection, identity: Identity, workout_id: str
    ) -> list[aiosqlite.Row]:
        cursor = await db.execute(
            """
            SELECT exercises.* FROM exercises
            JOIN workouts ON workouts.id = exercises.workout_id
            WHERE exercises.workout_id = ? AND workouts.user_id = ?
            ORDER BY exercises.rowid
            """,
            (workout_id, identity.user_id),
        )
        return list(await cursor.fetchall())

    # Profiles

    async def select_profile(
        self, db: aiosqlite.Connection, identity: Identity
    ) -> aiosqlite.Row | None:
        cursor = await db.execute(
            "SELECT * FROM profiles WHERE user_id = ?", (identity.user_id,)
        )
        return await cursor.fetchone()

    async def insert_profile(
        self, db: aiosqlite.Connection, identity: Identity, row: dict
    ) -> None:
        if row["user_id"] != identity.user_id:
            raise PolicyViolation("profiles")
        # The unique user_id makes concurrent lazy creation a no-op for the loser
        await db.execute(
            """
            INSERT OR IGNORE INTO profiles (id, user_id, username, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                row["id"],
                row["user_id"],
                row["username"],
                row["created_at"],
                row["updated_at"],
            ),
        )

    async def update_profile(
        self, db: aiosqlite.Connection, identity: Identity, fields: dict
    ) -> int:
        assignments = ", ".join(f"{column} = ?" for column in fields)
        cursor = await db.execute(
            f"UPDATE profiles SET {assignments} WHERE user_id = ?",
            (*fields.values(), identity.user_id),
        )
        return cursor.rowcount
