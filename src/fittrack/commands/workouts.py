"""Workout management commands."""

import re

import click

from ..db import WorkoutRepository, get_db_path
from ..exceptions import ValidationError
from ..models.workout import ExerciseInput
from ..services import WorkoutLogService
from .base import (
    async_command,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_identity,
)

# "Bench Press:3x8@60", "Plank:3x1", "Pull Up"
EXERCISE_SPEC = re.compile(
    r"^(?P<name>[^:]+?)\s*(?::\s*(?P<sets>\d+)\s*x\s*(?P<reps>\d+)\s*(?:@\s*(?P<weight>\d+(?:\.\d+)?))?)?\s*$"
)


def parse_exercise_spec(spec: str) -> ExerciseInput:
    """Parse NAME[:SETSxREPS[@WEIGHT]] into an ExerciseInput."""
    match = EXERCISE_SPEC.match(spec)
    if not match:
        raise ValidationError(
            f"Cannot parse exercise {spec!r}; expected NAME[:SETSxREPS[@WEIGHT]]",
            field="exercises",
        )
    return ExerciseInput(
        name=match.group("name"),
        sets=int(match.group("sets") or 0),
        reps=int(match.group("reps") or 0),
        weight=match.group("weight") or 0,
    )


@click.group()
@click.pass_context
def workouts(ctx):
    """Log, list, view and delete workouts."""
    ensure_initialized(ctx)


@workouts.command()
@click.argument("name")
@click.option(
    "--exercise", "-e", "exercise_specs", multiple=True,
    help='Exercise as NAME[:SETSxREPS[@WEIGHT]], e.g. "Bench Press:3x8@60". Repeatable.',
)
@click.option("--date", "-d", "workout_date", default=None, help="Workout date (YYYY-MM-DD, default: today)")
@click.option("--notes", "-n", default=None, help="Notes about the session")
@click.pass_context
@async_command
async def log(ctx, name: str, exercise_specs: tuple[str, ...], workout_date: str | None, notes: str | None):
    """Log a new workout.

    Without --exercise options the exercises are asked for interactively.
    """
    identity = get_identity(ctx)

    if exercise_specs:
        exercises = [parse_exercise_spec(spec) for spec in exercise_specs]
    else:
        from ..clients import ManualInputClient

        exercises = await ManualInputClient().collect_exercises()
        if not exercises:
            echo_info("Cancelled")
            return

    service = WorkoutLogService(WorkoutRepository(get_db_path()))
    logged = await service.log_workout(
        identity, name, exercises, workout_date=workout_date, notes=notes
    )

    echo_success(
        f"Workout saved! {logged.workout.name} on {logged.workout.date.isoformat()} "
        f"with {logged.exercise_count} exercise(s) (ID: {logged.workout.id})"
    )


@workouts.command(name="list")
@click.option("--limit", "-l", type=int, default=None, help="Show only the most recent N workouts")
@click.pass_context
@async_command
async def list_workouts(ctx, limit: int | None):
    """List your workouts, newest first."""
    identity = get_identity(ctx)
    repo = WorkoutRepository(get_db_path())

    all_workouts = await repo.list_workouts(identity, identity.user_id, limit=limit)

    if not all_workouts:
        echo_info("No workouts yet. Log one with 'fittrack workouts log'")
        return

    headers = ["ID", "Date", "Name", "Notes"]
    rows = []
    for workout in all_workouts:
        notes = workout.notes or ""
        rows.append([
            workout.id,
            workout.date.isoformat(),
            workout.name[:30] + "..." if len(workout.name) > 30 else workout.name,
            notes[:40] + "..." if len(notes) > 40 else notes,
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_workouts)} workout(s)")


@workouts.command()
@click.argument("workout_id")
@click.pass_context
@async_command
async def show(ctx, workout_id: str):
    """Show a workout and its exercises."""
    identity = get_identity(ctx)
    repo = WorkoutRepository(get_db_path())

    workout = await repo.get_workout(identity, workout_id)
    exercises = await repo.get_exercises_for(identity, workout_id)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"{workout.name} ({workout.date.isoformat()})")
    click.echo("=" * 60)
    if workout.notes:
        click.echo(f"Notes: {workout.notes}")
    click.echo()

    if not exercises:
        click.echo("No exercises recorded")
        return

    for exercise in exercises:
        click.echo(f"  - {exercise.get_summary()}")


@workouts.command()
@click.argument("workout_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: str, force: bool):
    """Delete a workout and all of its exercises."""
    identity = get_identity(ctx)
    repo = WorkoutRepository(get_db_path())

    workout = await repo.get_workout(identity, workout_id)

    if not force:
        click.echo(f"Workout: {workout.name} ({workout.date.isoformat()})")
        if not click.confirm("Are you sure you want to delete this workout?"):
            echo_info("Cancelled")
            return

    await repo.delete_workout(identity, workout_id)
    echo_success(f"Workout {workout_id} deleted")
