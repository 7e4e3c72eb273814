"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the fittrack database.

    Creates the data directory and the SQLite schema for workouts,
    exercises and profiles. Safe to run more than once.
    """
    data_dir = get_settings().data_dir
    echo_info(f"Initializing fittrack in {data_dir}")

    db_path = get_db_path(data_dir)
    await init_db(db_path)
    echo_success(f"Database initialized at {db_path}")

    click.echo()
    click.echo("fittrack is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Log a workout:")
    click.echo('     fittrack --user you workouts log "Push Day" -e "Bench Press:3x8@60"')
    click.echo()
    click.echo("  2. See your stats:")
    click.echo("     fittrack --user you stats")
