"""CLI commands for fittrack."""

from .init import init
from .profile import profile
from .serve import serve
from .stats import history, stats
from .workouts import workouts

__all__ = [
    "history",
    "init",
    "profile",
    "serve",
    "stats",
    "workouts",
]
