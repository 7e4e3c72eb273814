"""Web server command."""

import click

from ..config import get_settings
from .base import ensure_initialized


@click.command()
@click.option("--host", default=None, help="Host to bind to (default: FITTRACK_HOST or 127.0.0.1)")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to (default: FITTRACK_PORT or 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool):
    """Start the API server.

    Requests must carry the authenticated user in the X-User-Id header,
    as set by the identity provider in front of the server.

    Examples:

        # Start on default port (8000)
        fittrack serve

        # Start on custom port
        fittrack serve --port 3000

        # Development mode with auto-reload
        fittrack serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    click.echo()
    click.echo(click.style("Starting fittrack API server...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "fittrack.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=settings.log_level.lower(),
    )
