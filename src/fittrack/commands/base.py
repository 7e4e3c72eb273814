"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..db import get_db_path
from ..exceptions import FitTrackError
from ..models.identity import Identity


def async_command(f):
    """Decorator to run async Click commands.

    FitTrackError is reported as a notification and exits with status 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except FitTrackError as e:
            notification = e.to_notification()
            echo_error(f"{notification.title}: {notification.description}")
            raise click.exceptions.Exit(1)

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'fittrack init' first."
        )
        ctx.exit(1)


def get_identity(ctx: click.Context) -> Identity:
    """Identity from --user / FITTRACK_USER, or exit."""
    user_id = (ctx.find_root().obj or {}).get("user")
    if not user_id or not user_id.strip():
        echo_error("No user given. Pass --user or set FITTRACK_USER.")
        ctx.exit(1)
    return Identity.from_user_id(user_id)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = []
    lines.append("".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)))
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)
