"""Serialization module — export plans and workouts for storage and display."""

from plan_generator.serialization.json_export import (
    plan_to_dict,
    to_json_string,
    workout_to_dict,
)
from plan_generator.serialization.summary import build_plan_summary
from plan_generator.serialization.table import workouts_to_dataframe

__all__ = [
    "build_plan_summary",
    "plan_to_dict",
    "to_json_string",
    "workout_to_dict",
    "workouts_to_dataframe",
]
