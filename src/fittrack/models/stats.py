"""Dashboard statistics models."""

from dataclasses import dataclass, field

from .workout import Workout


@dataclass(frozen=True)
class Stats:
    """Summary counters over a window of recent workouts."""

    total_workouts: int = 0
    this_week: int = 0
    this_month: int = 0

    def to_dict(self) -> dict:
        return {
            "total_workouts": self.total_workouts,
            "this_week": self.this_week,
            "this_month": self.this_month,
        }


@dataclass
class Dashboard:
    """Recent workouts plus the stats computed over them."""

    recent_workouts: list[Workout] = field(default_factory=list)
    stats: Stats = field(default_factory=Stats)
    lifetime_workouts: int = 0

    def to_dict(self) -> dict:
        return {
            "recent_workouts": [w.to_dict() for w in self.recent_workouts],
            "stats": self.stats.to_dict(),
            "lifetime_workouts": self.lifetime_workouts,
        }
