"""FastAPI application for the fittrack API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from .exception_handlers import register_exception_handlers
from .routers import history, profile, workouts

logger = logging.getLogger(__name__)


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    db_path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - runs on startup and shutdown."""
        # Startup: Initialize database
        if not db_path.exists():
            await init_db(db_path)
        logger.info("Serving fittrack with database %s", db_path)
        yield

    app = FastAPI(
        title="fittrack",
        description="Workout logging and history",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db_path = db_path

    register_exception_handlers(app)

    # Include routers
    app.include_router(workouts.router)
    app.include_router(history.router)
    app.include_router(profile.router)

    @app.get("/")
    async def root():
        """Root redirect to the dashboard."""
        return RedirectResponse(url="/api/dashboard", status_code=302)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
