"""CLI entry point for fittrack."""

import click

from . import __version__
from .commands import history, init, profile, serve, stats, workouts
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="fittrack")
@click.option(
    "--user", "-u", envvar="FITTRACK_USER", default=None,
    help="Authenticated user id (or set FITTRACK_USER)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show log output")
@click.pass_context
def main(ctx, user: str | None, verbose: bool):
    """fittrack: log workouts and track your training history.

    Example usage:

        # Initialize the database
        fittrack init

        # Log a workout
        fittrack --user me workouts log "Push Day" -e "Bench Press:3x8@60"

        # See recent workouts and counters
        fittrack --user me stats

        # Full history with exercises
        fittrack --user me history
    """
    ctx.ensure_object(dict)
    ctx.obj["user"] = user
    configure_logging("INFO" if verbose else "WARNING")


# Register commands
main.add_command(init)
main.add_command(workouts)
main.add_command(stats)
main.add_command(history)
main.add_command(profile)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
