"""Dashboard and history commands."""

import click

from ..db import WorkoutRepository, get_db_path
from ..services import DashboardService, HistoryService
from .base import async_command, echo_info, ensure_initialized, format_table, get_identity


@click.command()
@click.pass_context
@async_command
async def stats(ctx):
    """Show recent workouts and weekly/monthly counters."""
    ensure_initialized(ctx)
    identity = get_identity(ctx)

    service = DashboardService(WorkoutRepository(get_db_path()))
    dashboard = await service.get_dashboard(identity)

    click.echo()
    click.echo(f"Recent workouts:  {dashboard.stats.total_workouts}")
    click.echo(f"This week:        {dashboard.stats.this_week}")
    click.echo(f"This month:       {dashboard.stats.this_month}")
    click.echo(f"All time:         {dashboard.lifetime_workouts}")
    click.echo()

    if not dashboard.recent_workouts:
        echo_info("No workouts yet. Log one with 'fittrack workouts log'")
        return

    rows = [
        [w.date.isoformat(), w.name, w.notes or ""]
        for w in dashboard.recent_workouts
    ]
    click.echo(format_table(["Date", "Name", "Notes"], rows))


@click.command()
@click.option("--limit", "-l", type=int, default=None, help="Show only the most recent N workouts")
@click.pass_context
@async_command
async def history(ctx, limit: int | None):
    """Show every workout with its exercises."""
    ensure_initialized(ctx)
    identity = get_identity(ctx)

    service = HistoryService(WorkoutRepository(get_db_path()))
    entries = await service.get_history(identity, limit=limit)

    if not entries:
        echo_info("No workouts recorded")
        return

    for entry in entries:
        workout = entry.workout
        click.echo()
        click.echo(
            click.style(f"{workout.date.isoformat()}  {workout.name}", bold=True)
            + f"  ({entry.exercise_count} exercise(s))"
        )
        if workout.notes:
            click.echo(f"  Notes: {workout.notes}")
        if not entry.exercises:
            click.echo("  No exercises recorded")
        for exercise in entry.exercises:
            click.echo(f"  - {exercise.get_summary()}")
