"""Workout and exercise data models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from ..exceptions import ValidationError

WEIGHT_QUANTUM = Decimal("0.01")
# DECIMAL(10, 2)
MAX_WEIGHT = Decimal("99999999.99")
# SQLite INTEGER is a signed 64-bit value
MAX_COUNT = 2**63 - 1


def validate_name(name: str | None, field_name: str = "name") -> str:
    """Return the stripped name, or raise if it is empty."""
    if name is None or not str(name).strip():
        raise ValidationError(f"{field_name.capitalize()} is required", field=field_name)
    return str(name).strip()


def _non_negative_int(value, field_name: str) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number", field=field_name)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a whole number", field=field_name)
    if number != value and not isinstance(value, str):
        # fractional counts
        raise ValidationError(f"{field_name} must be a whole number", field=field_name)
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative", field=field_name)
    if number > MAX_COUNT:
        raise ValidationError(f"{field_name} is too large", field=field_name)
    return number


def to_weight(value) -> Decimal:
    """Coerce a weight to a two-decimal Decimal, rejecting negatives."""
    if value is None or value == "":
        return Decimal("0.00")
    if isinstance(value, bool):
        raise ValidationError("weight must be a number", field="weight")
    try:
        weight = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("weight must be a number", field="weight")
    if not weight.is_finite():
        raise ValidationError("weight must be a number", field="weight")
    if weight < 0:
        raise ValidationError("weight cannot be negative", field="weight")
    try:
        weight = weight.quantize(WEIGHT_QUANTUM)
    except InvalidOperation:
        raise ValidationError("weight is too large", field="weight")
    if weight > MAX_WEIGHT:
        raise ValidationError("weight is too large", field="weight")
    return weight


def _optional_text(value) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass
class ExerciseInput:
    """An exercise entry as submitted by the user, before it is stored."""

    name: str
    sets: int = 0
    reps: int = 0
    weight: Decimal = Decimal("0.00")
    notes: str | None = None

    def validated(self) -> "ExerciseInput":
        """Return a normalized copy, raising ValidationError on bad input."""
        return ExerciseInput(
            name=validate_name(self.name, "name"),
            sets=_non_negative_int(self.sets, "sets"),
            reps=_non_negative_int(self.reps, "reps"),
            weight=to_weight(self.weight),
            notes=_optional_text(self.notes),
        )

    @classmethod
    def from_dict(cls, data: Mapping) -> "ExerciseInput":
        """Create from a mapping; missing numeric fields default to zero."""
        return cls(
            name=data.get("name", ""),
            sets=data.get("sets", 0),
            reps=data.get("reps", 0),
            weight=data.get("weight", 0),
            notes=data.get("notes"),
        )


def validate_exercise_batch(
    exercises: list["ExerciseInput | Mapping"],
) -> list[ExerciseInput]:
    """Validate a whole batch up front so a bad entry writes nothing.

    Errors name the offending position in the batch.
    """
    validated = []
    for index, item in enumerate(exercises):
        entry = item if isinstance(item, ExerciseInput) else ExerciseInput.from_dict(item)
        try:
            validated.append(entry.validated())
        except ValidationError as e:
            raise ValidationError(
                f"Exercise {index + 1}: {e.message}",
                field=e.field,
                details={"index": index},
            ) from e
    return validated


@dataclass
class Exercise:
    """A stored exercise entry belonging to a workout."""

    workout_id: str
    name: str
    sets: int = 0
    reps: int = 0
    weight: Decimal = Decimal("0.00")
    notes: str | None = None
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": str(self.weight),
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def get_summary(self) -> str:
        """One-line description, e.g. 'Bench Press: 3x8 @ 60.00 kg'."""
        summary = f"{self.name}: {self.sets}x{self.reps} @ {self.weight} kg"
        if self.notes:
            summary += f" ({self.notes})"
        return summary


@dataclass
class Workout:
    """A dated training session owned by one user."""

    owner: str
    name: str
    date: date
    notes: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "date": self.date.isoformat(),
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class WorkoutWithExercises:
    """A workout joined with its exercise set, as shown in the history view."""

    workout: Workout
    exercises: list[Exercise] = field(default_factory=list)

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    def to_dict(self) -> dict:
        data = self.workout.to_dict()
        data["exercises"] = [e.to_dict() for e in self.exercises]
        data["exercise_count"] = self.exercise_count
        return data
