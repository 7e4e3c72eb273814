"""Tests for the workout log, history and dashboard services."""

import asyncio
from datetime import date

import aiosqlite
import pytest

from fittrack.db import RecordStore, WorkoutRepository
from fittrack.exceptions import IncompleteWorkoutError, ValidationError
from fittrack.models import Exercise, ExerciseInput, Workout
from fittrack.services import DashboardService, HistoryService, WorkoutLogService


class FailingExerciseStore(RecordStore):
    """Store whose exercise inserts always fail."""

    async def insert_exercise(self, db, identity, row):
        raise aiosqlite.OperationalError("disk I/O error")


class SlowExerciseRepo:
    """Repository stub whose exercise fetches complete in reverse order."""

    def __init__(self, workouts: list[Workout]):
        self.workouts = workouts
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_workouts(self, identity, owner, limit=None):
        return self.workouts[:limit] if limit else list(self.workouts)

    async def get_exercises_for(self, identity, workout_id):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        position = next(i for i, w in enumerate(self.workouts) if w.id == workout_id)
        # Earlier workouts answer last
        await asyncio.sleep(0.01 * (len(self.workouts) - position))
        self.in_flight -= 1
        return [Exercise(workout_id=workout_id, name=f"{workout_id}-exercise")]


class TestWorkoutLogService:
    """Tests for WorkoutLogService."""

    @pytest.mark.asyncio
    async def test_logs_workout_with_exercises(self, db_path, clock, alice):
        repo = WorkoutRepository(db_path, clock=clock)
        service = WorkoutLogService(repo)

        logged = await service.log_workout(
            alice,
            "Push Day",
            [ExerciseInput(name="Bench Press", sets=3, reps=8, weight=60)],
            notes="good session",
        )

        assert logged.workout.owner == "alice"
        assert logged.workout.date == date(2025, 1, 31)
        assert logged.exercise_count == 1
        assert [e.name for e in await repo.get_exercises_for(alice, logged.workout.id)] == [
            "Bench Press"
        ]

    @pytest.mark.asyncio
    async def test_requires_an_exercise(self, db_path, alice):
        repo = WorkoutRepository(db_path)
        service = WorkoutLogService(repo)

        with pytest.raises(ValidationError) as exc_info:
            await service.log_workout(alice, "Push Day", [])

        assert exc_info.value.field == "exercises"
        assert await repo.list_workouts(alice, "alice") == []

    @pytest.mark.asyncio
    async def test_invalid_exercise_creates_no_workout(self, db_path, alice):
        """Validation happens before the workout is written."""
        repo = WorkoutRepository(db_path)
        service = WorkoutLogService(repo)

        with pytest.raises(ValidationError):
            await service.log_workout(
                alice, "Push Day", [{"name": "Bench Press", "reps": -8}]
            )

        assert await repo.list_workouts(alice, "alice") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exercise",
        [
            {"name": "Bench Press", "sets": 2**70},
            {"name": "Bench Press", "reps": float("inf")},
            {"name": "Bench Press", "weight": "1e30"},
        ],
    )
    async def test_out_of_range_exercise_creates_no_workout(self, db_path, alice, exercise):
        """Values the store cannot hold are rejected before the workout is written."""
        repo = WorkoutRepository(db_path)
        service = WorkoutLogService(repo)

        with pytest.raises(ValidationError):
            await service.log_workout(alice, "Push Day", [exercise])

        assert await repo.list_workouts(alice, "alice") == []

    @pytest.mark.asyncio
    async def test_empty_name(self, db_path, alice):
        service = WorkoutLogService(WorkoutRepository(db_path))

        with pytest.raises(ValidationError):
            await service.log_workout(alice, "  ", [{"name": "Squat"}])

    @pytest.mark.asyncio
    async def test_exercise_failure_reports_incomplete(self, db_path, alice):
        """The workout stays when its exercises fail to save."""
        repo = WorkoutRepository(db_path, store=FailingExerciseStore())
        service = WorkoutLogService(repo)

        with pytest.raises(IncompleteWorkoutError) as exc_info:
            await service.log_workout(alice, "Push Day", [{"name": "Bench Press"}])

        workouts = await repo.list_workouts(alice, "alice")
        assert [w.id for w in workouts] == [exc_info.value.workout_id]
        assert await repo.get_exercises_for(alice, exc_info.value.workout_id) == []
        assert "disk I/O error" in exc_info.value.message


class TestHistoryService:
    """Tests for HistoryService."""

    @pytest.mark.asyncio
    async def test_joins_by_workout_id(self, alice):
        """Out-of-order responses still land on the right workout."""
        workouts = [
            Workout(id=f"w{i}", owner="alice", name=f"Workout {i}", date=date(2025, 1, 30 - i))
            for i in range(4)
        ]
        repo = SlowExerciseRepo(workouts)
        service = HistoryService(repo, concurrency=4)

        history = await service.get_history(alice)

        assert [entry.workout.id for entry in history] == ["w0", "w1", "w2", "w3"]
        for entry in history:
            assert [e.name for e in entry.exercises] == [f"{entry.workout.id}-exercise"]
        assert repo.max_in_flight > 1

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, alice):
        workouts = [
            Workout(id=f"w{i}", owner="alice", name=f"Workout {i}", date=date(2025, 1, 1))
            for i in range(6)
        ]
        repo = SlowExerciseRepo(workouts)
        service = HistoryService(repo, concurrency=2)

        await service.get_history(alice)

        assert repo.max_in_flight <= 2

    @pytest.mark.asyncio
    async def test_against_database(self, db_path, clock, alice, bob):
        repo = WorkoutRepository(db_path, clock=clock)
        push = await repo.create_workout(alice, "alice", "Push", date(2025, 1, 30))
        pull = await repo.create_workout(alice, "alice", "Pull", date(2025, 1, 29))
        await repo.create_workout(bob, "bob", "Bob's")
        await repo.add_exercises(alice, push.id, [{"name": "Bench Press"}, {"name": "Dips"}])

        history = await HistoryService(repo).get_history(alice)

        assert [entry.workout.id for entry in history] == [push.id, pull.id]
        assert history[0].exercise_count == 2
        assert history[1].exercises == []

    @pytest.mark.asyncio
    async def test_empty_history(self, db_path, alice):
        assert await HistoryService(WorkoutRepository(db_path)).get_history(alice) == []


class TestDashboardService:
    """Tests for DashboardService."""

    @pytest.mark.asyncio
    async def test_dashboard_uses_recent_window(self, db_path, clock, alice):
        repo = WorkoutRepository(db_path, clock=clock)
        for day in (
            date(2025, 1, 30),
            date(2025, 1, 25),
            date(2025, 1, 20),
            date(2024, 12, 20),
            date(2024, 12, 10),
            date(2024, 12, 1),
        ):
            await repo.create_workout(alice, "alice", f"Day {day.isoformat()}", day)
        service = DashboardService(repo, window=5, clock=clock)

        dashboard = await service.get_dashboard(alice)

        assert [w.name for w in dashboard.recent_workouts] == [
            "Day 2025-01-30",
            "Day 2025-01-25",
            "Day 2025-01-20",
            "Day 2024-12-20",
            "Day 2024-12-10",
        ]
        assert dashboard.stats.total_workouts == 5
        assert dashboard.stats.this_week == 2
        assert dashboard.stats.this_month == 3
        assert dashboard.lifetime_workouts == 6

    @pytest.mark.asyncio
    async def test_empty_dashboard(self, db_path, alice):
        dashboard = await DashboardService(WorkoutRepository(db_path)).get_dashboard(alice)

        assert dashboard.recent_workouts == []
        assert dashboard.stats.total_workouts == 0
        assert dashboard.to_dict()["lifetime_workouts"] == 0
