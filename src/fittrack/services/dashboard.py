"""Dashboard: recent workouts and summary counters."""

from datetime import datetime

from ..config import get_settings
from ..db.repositories import WorkoutRepository, utcnow
from ..models.identity import Identity
from ..models.stats import Dashboard
from .stats import compute_stats


class DashboardService:
    """Assembles the dashboard from a bounded window of recent workouts."""

    def __init__(
        self,
        workout_repo: WorkoutRepository | None = None,
        window: int | None = None,
        clock=None,
    ):
        self.workout_repo = workout_repo or WorkoutRepository()
        self.window = window or get_settings().recent_window
        self._clock = clock or utcnow

    async def get_dashboard(
        self, identity: Identity, now: datetime | None = None
    ) -> Dashboard:
        recent = await self.workout_repo.list_workouts(
            identity, identity.user_id, limit=self.window
        )
        # Stats stay windowed; the true count is reported alongside
        lifetime = await self.workout_repo.count_workouts(identity, identity.user_id)
        return Dashboard(
            recent_workouts=recent,
            stats=compute_stats(recent, now or self._clock()),
            lifetime_workouts=lifetime,
        )
