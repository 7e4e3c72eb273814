"""Manual workout entry via interactive questionnaire."""

import questionary
from questionary import Style

from ..exceptions import ValidationError
from ..models.workout import ExerciseInput, to_weight

# Custom style for questionnaire
custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _validate_count(text: str) -> bool | str:
    if not text.strip():
        return True
    if text.strip().isdigit():
        return True
    return "Enter a whole number (0 or more)"


def _validate_weight(text: str) -> bool | str:
    try:
        to_weight(text.strip())
    except ValidationError as e:
        return e.message
    return True


class ManualInputClient:
    """Interactive questionnaire for entering a workout's exercises."""

    async def collect_exercises(self) -> list[ExerciseInput]:
        """Ask for exercises until the user stops. Returns [] if cancelled."""
        exercises: list[ExerciseInput] = []

        while True:
            number = len(exercises) + 1
            name = await questionary.text(
                f"Exercise {number} name:",
                validate=lambda text: bool(text.strip()) or "Exercise name is required",
                style=custom_style,
            ).ask_async()
            if name is None:
                return []

            sets = await questionary.text(
                "Sets:", default="0", validate=_validate_count, style=custom_style
            ).ask_async()
            reps = await questionary.text(
                "Reps:", default="0", validate=_validate_count, style=custom_style
            ).ask_async()
            weight = await questionary.text(
                "Weight (kg):", default="0", validate=_validate_weight, style=custom_style
            ).ask_async()
            notes = await questionary.text(
                "Notes (optional):", style=custom_style
            ).ask_async()
            if None in (sets, reps, weight, notes):
                return []

            exercises.append(
                ExerciseInput(
                    name=name.strip(),
                    sets=int(sets or 0),
                    reps=int(reps or 0),
                    weight=to_weight(weight),
                    notes=notes or None,
                )
            )

            another = await questionary.confirm(
                "Add another exercise?", default=False, style=custom_style
            ).ask_async()
            if not another:
                return exercises
