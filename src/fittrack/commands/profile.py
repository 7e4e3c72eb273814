"""Profile commands."""

import click

from ..db import ProfileRepository, get_db_path
from .base import async_command, echo_success, ensure_initialized, get_identity


@click.group()
@click.pass_context
def profile(ctx):
    """View or change your profile."""
    ensure_initialized(ctx)


@profile.command()
@click.pass_context
@async_command
async def show(ctx):
    """Show your profile."""
    identity = get_identity(ctx)
    current = await ProfileRepository(get_db_path()).get_or_create(identity)

    click.echo(f"User:     {current.owner}")
    click.echo(f"Username: {current.username or '(not set)'}")
    if current.created_at:
        click.echo(f"Since:    {current.created_at.strftime('%Y-%m-%d')}")


@profile.command(name="set")
@click.argument("username")
@click.pass_context
@async_command
async def set_username(ctx, username: str):
    """Set your display username."""
    identity = get_identity(ctx)
    updated = await ProfileRepository(get_db_path()).update_username(identity, username)
    echo_success(f"Username set to {updated.display_name}")
