"""Dependency injection for API routes."""

from fastapi import Header, Request

from ..db.repositories import ProfileRepository, WorkoutRepository
from ..models.identity import Identity
from ..services import DashboardService, HistoryService, WorkoutLogService


async def get_identity(x_user_id: str | None = Header(default=None)) -> Identity:
    """Identity asserted by the upstream identity provider."""
    return Identity.from_user_id(x_user_id)


def get_workout_repo(request: Request) -> WorkoutRepository:
    return WorkoutRepository(request.app.state.db_path)


def get_profile_repo(request: Request) -> ProfileRepository:
    return ProfileRepository(request.app.state.db_path)


def get_log_service(request: Request) -> WorkoutLogService:
    return WorkoutLogService(get_workout_repo(request))


def get_history_service(request: Request) -> HistoryService:
    return HistoryService(get_workout_repo(request))


def get_dashboard_service(request: Request) -> DashboardService:
    return DashboardService(get_workout_repo(request))
