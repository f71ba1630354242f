"""Description builder — human-readable text for each workout."""

from __future__ import annotations

from plan_generator.formatting import format_pace
from plan_generator.models.enums import WorkoutType
from plan_generator.workout_builder.catalog import WorkoutTemplate

_TYPE_LABELS: dict[WorkoutType, str] = {
    WorkoutType.EASY: "easy",
    WorkoutType.TEMPO: "tempo",
    WorkoutType.INTERVALS: "total intervals",
    WorkoutType.LONG: "long run",
    WorkoutType.RECOVERY: "recovery",
}


def build_workout_description(
    template: WorkoutTemplate,
    distance: float,
    target_pace: int,
) -> str:
    """Build the one-line workout description.

    e.g. '5.0 miles tempo @ 7:02/mile. Comfortably hard effort ...'
    """
    label = _TYPE_LABELS.get(template.type)
    volume = f"{distance:.1f} miles {label}" if label else f"{distance:.1f} miles"
    return f"{volume} @ {format_pace(target_pace)}/mile. {template.description}"
