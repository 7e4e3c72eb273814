"""Tests for data models."""

from datetime import date
from decimal import Decimal

import pytest

from fittrack.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ErrorCode,
    IncompleteWorkoutError,
    ValidationError,
    WorkoutNotFoundError,
)
from fittrack.models import (
    Exercise,
    ExerciseInput,
    Identity,
    Profile,
    Workout,
    WorkoutWithExercises,
)
from fittrack.models.workout import to_weight, validate_exercise_batch, validate_name
from fittrack.notifications import Severity


class TestExerciseInput:
    """Tests for ExerciseInput validation."""

    def test_defaults_are_zero(self):
        """Missing numeric fields default to zero."""
        entry = ExerciseInput.from_dict({"name": "Plank"}).validated()

        assert entry.sets == 0
        assert entry.reps == 0
        assert entry.weight == Decimal("0.00")
        assert entry.notes is None

    def test_normalizes_values(self):
        """Names are stripped and weight is quantized to two decimals."""
        entry = ExerciseInput(
            name="  Bench Press ", sets="3", reps=8, weight="62.5", notes="  "
        ).validated()

        assert entry.name == "Bench Press"
        assert entry.sets == 3
        assert entry.weight == Decimal("62.50")
        assert entry.notes is None

    @pytest.mark.parametrize("field", ["sets", "reps", "weight"])
    def test_negative_values_rejected(self, field):
        """Any negative numeric field is a validation error."""
        data = {"name": "Squat", "sets": 3, "reps": 5, "weight": 100}
        data[field] = -1

        with pytest.raises(ValidationError) as exc_info:
            ExerciseInput.from_dict(data).validated()

        assert exc_info.value.field == field

    def test_empty_name_rejected(self):
        """Whitespace-only names are empty."""
        with pytest.raises(ValidationError):
            ExerciseInput(name="   ").validated()

    def test_fractional_sets_rejected(self):
        """Sets and reps must be whole numbers."""
        with pytest.raises(ValidationError):
            ExerciseInput(name="Row", sets=2.5).validated()

    def test_non_numeric_weight_rejected(self):
        with pytest.raises(ValidationError):
            to_weight("heavy")

    @pytest.mark.parametrize("weight", ["1e30", "100000000", "99999999.999", 1e300])
    def test_oversized_weight_rejected(self, weight):
        """Weights must fit ten digits with two decimals."""
        with pytest.raises(ValidationError) as exc_info:
            ExerciseInput(name="Squat", weight=weight).validated()

        assert exc_info.value.field == "weight"

    def test_largest_weight_accepted(self):
        assert to_weight("99999999.99") == Decimal("99999999.99")

    @pytest.mark.parametrize("field", ["sets", "reps"])
    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 2**70])
    def test_unrepresentable_counts_rejected(self, field, value):
        """Infinite, NaN and out-of-range counts are validation errors."""
        with pytest.raises(ValidationError) as exc_info:
            ExerciseInput.from_dict({"name": "Squat", field: value}).validated()

        assert exc_info.value.field == field

    def test_largest_count_accepted(self):
        entry = ExerciseInput(name="Squat", reps=2**63 - 1).validated()

        assert entry.reps == 2**63 - 1


class TestExerciseBatch:
    """Tests for whole-batch validation."""

    def test_error_names_position(self):
        """The failing entry's position is reported."""
        batch = [
            {"name": "Squat", "sets": 3},
            {"name": "Lunge", "reps": -2},
        ]

        with pytest.raises(ValidationError) as exc_info:
            validate_exercise_batch(batch)

        assert exc_info.value.message.startswith("Exercise 2:")
        assert exc_info.value.details["index"] == 1

    def test_mixed_inputs(self):
        """Mappings and ExerciseInput instances can be mixed."""
        batch = validate_exercise_batch(
            [ExerciseInput(name="Squat"), {"name": "Deadlift", "weight": 140}]
        )

        assert [e.name for e in batch] == ["Squat", "Deadlift"]


class TestWorkout:
    """Tests for Workout and Exercise models."""

    def test_validate_name(self):
        assert validate_name(" Leg Day ") == "Leg Day"
        with pytest.raises(ValidationError):
            validate_name("")

    def test_workout_to_dict(self):
        """Test workout serialization."""
        workout = Workout(
            id="w1", owner="alice", name="Push Day", date=date(2025, 1, 30), notes=None
        )
        data = workout.to_dict()

        assert data["id"] == "w1"
        assert data["owner"] == "alice"
        assert data["date"] == "2025-01-30"
        assert data["created_at"] is None

    def test_with_exercises_to_dict(self):
        """History entries embed their exercises."""
        workout = Workout(id="w1", owner="alice", name="Push Day", date=date(2025, 1, 30))
        entry = WorkoutWithExercises(
            workout=workout,
            exercises=[Exercise(workout_id="w1", name="Bench Press", weight=Decimal("60.00"))],
        )
        data = entry.to_dict()

        assert data["exercise_count"] == 1
        assert data["exercises"][0]["weight"] == "60.00"

    def test_exercise_summary(self):
        exercise = Exercise(
            workout_id="w1", name="Bench Press", sets=3, reps=8,
            weight=Decimal("60.00"), notes="paused",
        )
        assert exercise.get_summary() == "Bench Press: 3x8 @ 60.00 kg (paused)"


class TestIdentityAndProfile:
    """Tests for Identity and Profile."""

    def test_identity_requires_user_id(self):
        with pytest.raises(AuthenticationError):
            Identity.from_user_id(None)
        with pytest.raises(AuthenticationError):
            Identity.from_user_id("  ")

    def test_identity_owns(self):
        identity = Identity.from_user_id(" alice ")
        assert identity.user_id == "alice"
        assert identity.owns("alice")
        assert not identity.owns("bob")

    def test_profile_display_name(self):
        assert Profile(owner="alice").display_name == "alice"
        assert Profile(owner="alice", username="Al").display_name == "Al"


class TestExceptions:
    """Tests for the error hierarchy."""

    def test_to_dict(self):
        error = ValidationError("Name is required", field="name")
        data = error.to_dict()

        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert data["error"]["details"] == {"field": "name"}
        assert error.status_code == 400

    def test_notification(self):
        notification = AuthorizationError().to_notification()

        assert notification.title == "Access denied"
        assert notification.severity == Severity.DESTRUCTIVE

    def test_notification_title_override(self):
        notification = WorkoutNotFoundError("w1").to_notification("Could not load workout")

        assert notification.title == "Could not load workout"
        assert "w1" in notification.description

    def test_incomplete_workout_is_store_error(self):
        error = IncompleteWorkoutError("w1", "disk full")

        assert error.code == ErrorCode.WORKOUT_INCOMPLETE
        assert error.status_code == 500
        assert error.details["workout_id"] == "w1"
