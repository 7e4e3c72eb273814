"""Logging a new workout together with its exercises."""

import logging
from collections.abc import Mapping
from datetime import date

from ..db.repositories import WorkoutRepository, coerce_date
from ..exceptions import FitTrackError, IncompleteWorkoutError, ValidationError
from ..models.identity import Identity
from ..models.workout import (
    ExerciseInput,
    WorkoutWithExercises,
    validate_exercise_batch,
    validate_name,
)

logger = logging.getLogger(__name__)


class WorkoutLogService:
    """Creates a workout and then its exercise set as one logical operation."""

    def __init__(self, workout_repo: WorkoutRepository | None = None):
        self.workout_repo = workout_repo or WorkoutRepository()

    async def log_workout(
        self,
        identity: Identity,
        name: str,
        exercises: list[ExerciseInput | Mapping],
        workout_date: date | str | None = None,
        notes: str | None = None,
    ) -> WorkoutWithExercises:
        """Save a workout with at least one exercise.

        Everything is validated before the first write. If the workout is
        created but its exercises then fail to save, the workout is kept
        and IncompleteWorkoutError reports which one it was.
        """
        validate_name(name)
        coerce_date(workout_date)
        if not exercises:
            raise ValidationError("Add at least one exercise", field="exercises")
        entries = validate_exercise_batch(exercises)

        workout = await self.workout_repo.create_workout(
            identity, identity.user_id, name, workout_date=workout_date, notes=notes
        )
        try:
            saved = await self.workout_repo.add_exercises(identity, workout.id, entries)
        except FitTrackError as e:
            logger.error(
                "Workout %s saved without its exercises: %s", workout.id, e.message
            )
            raise IncompleteWorkoutError(workout.id, e.message) from e

        return WorkoutWithExercises(workout=workout, exercises=saved)
