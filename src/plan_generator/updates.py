"""Plan maintenance: pace re-mapping, plan supersession, regeneration.

These helpers back the persistence collaborator when a runner's VDOT or
weekly frequency changes. Completed workouts are history and are never
touched; only incomplete workouts are recalculated or replaced.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable

from plan_generator.models.enums import PaceType, WorkoutType
from plan_generator.models.paces import VDOTPaces
from plan_generator.models.plan import TrainingPlan
from plan_generator.models.request import PlanGenerationRequest, PlanPreferences
from plan_generator.models.workout import Workout
from plan_generator.plan_builder import (
    fit_to_duration,
    generate_14_day_block,
    generate_plan,
)
from plan_generator.workout_builder.catalog import find_template
from plan_generator.workout_builder.description_builder import build_workout_description

logger = logging.getLogger(__name__)

# Pace zone a stored workout follows when paces change
WORKOUT_PACE_TYPES: dict[WorkoutType, PaceType] = {
    WorkoutType.EASY: PaceType.EASY,
    WorkoutType.RECOVERY: PaceType.EASY,
    WorkoutType.LONG: PaceType.EASY,
    WorkoutType.TEMPO: PaceType.THRESHOLD,
    WorkoutType.INTERVALS: PaceType.INTERVAL,
}


@dataclass(frozen=True)
class RegenerationResult:
    """Outcome of regenerating a plan's upcoming workouts."""

    retained: tuple[Workout, ...]  # completed history, unchanged
    removed: tuple[Workout, ...]  # incomplete workouts the caller should delete
    generated: tuple[Workout, ...]  # new block to insert


def pace_type_for_workout(workout_type: WorkoutType | str) -> PaceType | None:
    """Pace zone for a workout type, or None for types with no mapping."""
    return WORKOUT_PACE_TYPES.get(WorkoutType(workout_type))


def update_workout_paces(
    plan: TrainingPlan,
    workouts: Iterable[Workout],
    new_paces: VDOTPaces,
    preferences: PlanPreferences | None = None,
) -> list[Workout]:
    """Re-pace every incomplete workout after a VDOT change.

    Target pace, duration and description are recalculated. Distance is kept
    unless the slower pace pushes the workout past
    ``preferences.max_workout_duration``, in which case it is shortened to
    fit. Completed workouts and unmapped types pass through unchanged.
    """
    max_duration = preferences.max_workout_duration if preferences else None
    updated: list[Workout] = []
    changed = 0
    for workout in workouts:
        pace_type = pace_type_for_workout(workout.type)
        if workout.completed or pace_type is None:
            updated.append(workout)
            continue

        target_pace = new_paces[pace_type]
        distance, duration = fit_to_duration(workout.distance, target_pace, max_duration)
        template = find_template(plan.target_race, workout.type)
        description = (
            build_workout_description(template, distance, target_pace)
            if template is not None
            else workout.description
        )
        updated.append(
            dataclasses.replace(
                workout,
                distance=round(distance, 2),
                duration=duration,
                target_pace=target_pace,
                description=description,
            )
        )
        changed += 1

    logger.info("Re-paced %d incomplete workouts for plan %s", changed, plan.id)
    return updated


def supersede_plan(
    current: TrainingPlan,
    request: PlanGenerationRequest,
    now: datetime | None = None,
    today: date | None = None,
) -> tuple[TrainingPlan, TrainingPlan]:
    """Replace *current* with a plan generated from *request*.

    Returns:
        (retired, replacement): *current* deactivated at *now*, and the new
        active plan. The persistence collaborator must store both atomically.
    """
    now = now or datetime.now(timezone.utc)
    replacement = generate_plan(request, now=now, today=today)
    retired = current.deactivate(now)
    logger.info("Superseded plan %s with %s", current.id, replacement.id)
    return retired, replacement


def regenerate_upcoming_workouts(
    plan: TrainingPlan,
    workouts: Iterable[Workout],
    request: PlanGenerationRequest,
    start: date | None = None,
    now: datetime | None = None,
) -> RegenerationResult:
    """Replace the incomplete workouts of *plan* with a fresh 14-day block.

    Used when weekly frequency (or another structural input) changes. The new
    workouts are rebound to *plan* with ids keyed by calendar date.
    """
    existing = list(workouts)
    generated = [
        dataclasses.replace(
            workout,
            id=f"workout_{plan.id}_{workout.scheduled_date:%Y%m%d}",
            plan_id=plan.id,
            user_id=plan.user_id,
        )
        for workout in generate_14_day_block(request, start=start, now=now)
    ]
    logger.info(
        "Regenerated %d workouts for plan %s, replacing %d",
        len(generated),
        plan.id,
        sum(1 for w in existing if not w.completed),
    )
    return RegenerationResult(
        retained=tuple(w for w in existing if w.completed),
        removed=tuple(w for w in existing if not w.completed),
        generated=tuple(generated),
    )
