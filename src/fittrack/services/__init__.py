"""Application services built on the repositories."""

from .dashboard import DashboardService
from .history import HistoryService
from .stats import compute_stats
from .workout_log import WorkoutLogService

__all__ = [
    "compute_stats",
    "DashboardService",
    "HistoryService",
    "WorkoutLogService",
]
