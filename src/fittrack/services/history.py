"""Workout history: workouts joined with their exercises."""

import asyncio
import logging

from ..config import get_settings
from ..db.repositories import WorkoutRepository
from ..models.identity import Identity
from ..models.workout import Exercise, WorkoutWithExercises

logger = logging.getLogger(__name__)


class HistoryService:
    """Builds the history view.

    Exercises for each workout are fetched as independent concurrent
    requests and matched back to their workout by id.
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository | None = None,
        concurrency: int | None = None,
    ):
        self.workout_repo = workout_repo or WorkoutRepository()
        self.concurrency = concurrency or get_settings().history_concurrency

    async def get_history(
        self, identity: Identity, limit: int | None = None
    ) -> list[WorkoutWithExercises]:
        """List the caller's workouts, newest first, each with its exercises."""
        workouts = await self.workout_repo.list_workouts(
            identity, identity.user_id, limit=limit
        )
        if not workouts:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch(workout_id: str) -> tuple[str, list[Exercise]]:
            async with semaphore:
                exercises = await self.workout_repo.get_exercises_for(identity, workout_id)
            return workout_id, exercises

        results = await asyncio.gather(*(fetch(w.id) for w in workouts))
        by_workout = dict(results)

        logger.debug(
            "Loaded history for %s: %d workout(s)", identity.user_id, len(workouts)
        )
        return [
            WorkoutWithExercises(workout=w, exercises=by_workout.get(w.id, []))
            for w in workouts
        ]
