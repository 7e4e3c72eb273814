"""Data models for fittrack."""

from .identity import Identity
from .profile import Profile
from .stats import Dashboard, Stats
from .workout import Exercise, ExerciseInput, Workout, WorkoutWithExercises

__all__ = [
    "Dashboard",
    "Exercise",
    "ExerciseInput",
    "Identity",
    "Profile",
    "Stats",
    "Workout",
    "WorkoutWithExercises",
]
