"""Summary counters over a window of recent workouts."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from ..models.stats import Stats
from ..models.workout import Workout

WEEK_DAYS = 7
MONTH_DAYS = 30


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_stats(
    workouts: Sequence[Workout],
    now: date | datetime,
    week_days: int = WEEK_DAYS,
    month_days: int = MONTH_DAYS,
) -> Stats:
    """Count workouts in the trailing week and month.

    Boundaries are inclusive and compare calendar dates only, so with
    now=2025-01-31 a workout dated 2025-01-24 counts towards the week.
    `total_workouts` is the size of the given window, not a lifetime total.
    """
    today = _as_date(now)
    week_start = today - timedelta(days=week_days)
    month_start = today - timedelta(days=month_days)

    dates = [_as_date(w.date) for w in workouts]
    return Stats(
        total_workouts=len(dates),
        this_week=sum(1 for d in dates if d >= week_start),
        this_month=sum(1 for d in dates if d >= month_start),
    )
