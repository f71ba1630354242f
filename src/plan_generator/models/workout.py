"""Workout — a single materialized session of a training plan."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from plan_generator.models.enums import HARD_WORKOUT_TYPES, WorkoutType


@dataclass(frozen=True)
class Workout:
    """One prescribed run.

    ``completed`` belongs to the run-logging collaborator; the engine only
    ever creates workouts with ``completed=False``.
    """

    id: str
    plan_id: str
    user_id: str
    week: int
    day: int
    type: WorkoutType
    distance: float  # miles
    duration: int  # minutes
    target_pace: int  # seconds per mile
    description: str
    completed: bool = False
    scheduled_date: date | None = None

    @property
    def is_hard(self) -> bool:
        return self.type in HARD_WORKOUT_TYPES
