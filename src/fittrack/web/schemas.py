"""Request bodies for the JSON API.

Field checks (empty names, negative numbers) are left to the domain layer
so the API reports them the same way the CLI does.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ..models.workout import ExerciseInput


class ExerciseIn(BaseModel):
    name: str = ""
    sets: int = 0
    reps: int = 0
    weight: Decimal = Decimal("0")
    notes: str | None = None

    def to_input(self) -> ExerciseInput:
        return ExerciseInput(
            name=self.name,
            sets=self.sets,
            reps=self.reps,
            weight=self.weight,
            notes=self.notes,
        )


class WorkoutCreate(BaseModel):
    name: str = ""
    date: datetime.date | None = None
    notes: str | None = None
    exercises: list[ExerciseIn] = Field(default_factory=list)


class WorkoutUpdate(BaseModel):
    name: str | None = None
    date: datetime.date | None = None
    notes: str | None = None


class ExerciseBatch(BaseModel):
    exercises: list[ExerciseIn] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    username: str | None = None
