"""Workout builder — template catalog, weekly selection and scheduling."""

from plan_generator.workout_builder.catalog import (
    WORKOUT_TEMPLATES,
    WorkoutTemplate,
    find_template,
    get_templates,
)
from plan_generator.workout_builder.scheduling import schedule_week
from plan_generator.workout_builder.selector import select_workouts_for_week

__all__ = [
    "WORKOUT_TEMPLATES",
    "WorkoutTemplate",
    "find_template",
    "get_templates",
    "schedule_week",
    "select_workouts_for_week",
]
