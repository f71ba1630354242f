"""JSON serialization for TrainingPlan and Workout objects.

Produces plain dicts that the persistence collaborator can store directly:
enum members become their string values and dates become ISO-8601 strings.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Iterable

from plan_generator.models.plan import TrainingPlan
from plan_generator.models.workout import Workout


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def plan_to_dict(plan: TrainingPlan) -> dict:
    """Convert a TrainingPlan to a JSON-ready dict."""
    return {
        "id": plan.id,
        "userId": plan.user_id,
        "vdot": plan.vdot,
        "weeklyFrequency": plan.weekly_frequency,
        "targetRace": plan.target_race.value,
        "targetDate": _iso(plan.target_date),
        "currentWeek": plan.current_week,
        "totalWeeks": plan.total_weeks,
        "paces": plan.paces.as_dict(),
        "createdAt": _iso(plan.created_at),
        "updatedAt": _iso(plan.updated_at),
        "isActive": plan.is_active,
    }


def workout_to_dict(workout: Workout) -> dict:
    """Convert a Workout to a JSON-ready dict."""
    return {
        "id": workout.id,
        "planId": workout.plan_id,
        "userId": workout.user_id,
        "week": workout.week,
        "day": workout.day,
        "type": workout.type.value,
        "distance": workout.distance,
        "duration": workout.duration,
        "targetPace": workout.target_pace,
        "description": workout.description,
        "completed": workout.completed,
        "scheduledDate": _iso(workout.scheduled_date),
    }


def to_json_string(
    workouts: Iterable[Workout],
    plan: TrainingPlan | None = None,
    indent: int = 2,
) -> str:
    """Serialize workouts (and optionally their plan) to a JSON string."""
    payload: dict = {"workouts": [workout_to_dict(w) for w in workouts]}
    if plan is not None:
        payload["plan"] = plan_to_dict(plan)
    return json.dumps(payload, indent=indent)
