"""Workout routes."""

from fastapi import APIRouter, Depends, Query

from ...db.repositories import WorkoutRepository
from ...models.identity import Identity
from ...notifications import Notification
from ...services import WorkoutLogService
from ..deps import get_identity, get_log_service, get_workout_repo
from ..schemas import ExerciseBatch, WorkoutCreate, WorkoutUpdate

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("")
async def list_workouts(
    limit: int | None = Query(default=None),
    identity: Identity = Depends(get_identity),
    repo: WorkoutRepository = Depends(get_workout_repo),
):
    """List the caller's workouts, newest first."""
    workouts = await repo.list_workouts(identity, identity.user_id, limit=limit)
    return {"workouts": [w.to_dict() for w in workouts]}


@router.post("", status_code=201)
async def create_workout(
    body: WorkoutCreate,
    identity: Identity = Depends(get_identity),
    service: WorkoutLogService = Depends(get_log_service),
):
    """Save a new workout together with its exercises."""
    logged = await service.log_workout(
        identity,
        body.name,
        [e.to_input() for e in body.exercises],
        workout_date=body.date,
        notes=body.notes,
    )
    return {
        "workout": logged.to_dict(),
        "notification": Notification(
            title="Workout saved!",
            description="Your workout was recorded successfully.",
        ).to_dict(),
    }


@router.get("/{workout_id}")
async def get_workout(
    workout_id: str,
    identity: Identity = Depends(get_identity),
    repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Get one workout with its exercises."""
    workout = await repo.get_workout(identity, workout_id)
    exercises = await repo.get_exercises_for(identity, workout_id)
    data = workout.to_dict()
    data["exercises"] = [e.to_dict() for e in exercises]
    return {"workout": data}


@router.patch("/{workout_id}")
async def update_workout(
    workout_id: str,
    body: WorkoutUpdate,
    identity: Identity = Depends(get_identity),
    repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Edit a workout's name, date or notes."""
    workout = await repo.update_workout(
        identity,
        workout_id,
        name=body.name,
        workout_date=body.date,
        notes=body.notes,
    )
    return {"workout": workout.to_dict()}


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: str,
    identity: Identity = Depends(get_identity),
    repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Delete a workout and all of its exercises."""
    await repo.delete_workout(identity, workout_id)
    return {
        "status": "deleted",
        "notification": Notification(title="Workout deleted").to_dict(),
    }


@router.get("/{workout_id}/exercises")
async def list_exercises(
    workout_id: str,
    identity: Identity = Depends(get_identity),
    repo: WorkoutRepository = Depends(get_workout_repo),
):
    """List a workout's exercises (empty if it has none)."""
    exercises = await repo.get_exercises_for(identity, workout_id)
    return {"exercises": [e.to_dict() for e in exercises]}


@router.post("/{workout_id}/exercises", status_code=201)
async def add_exercises(
    workout_id: str,
    body: ExerciseBatch,
    identity: Identity = Depends(get_identity),
    repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Append exercises to an existing workout."""
    created = await repo.add_exercises(
        identity, workout_id, [e.to_input() for e in body.exercises]
    )
    return {"exercises": [e.to_dict() for e in created]}
