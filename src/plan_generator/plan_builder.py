"""PlanBuilder — turns a PlanGenerationRequest into a plan and its workouts.

Usage::

    plan = generate_plan(request)
    week_one = generate_week_workouts(plan, 1, request)
    block = generate_14_day_block(request, start=date(2026, 3, 2))

Every function is pure: identical inputs (including the injected ``now`` /
``start``) give identical outputs.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from plan_generator.exceptions import (
    DegenerateScheduleError,
    InvalidInputError,
)
from plan_generator.math.periodization import (
    estimate_weekly_mileage,
    get_progression_factor,
    resolve_total_weeks,
)
from plan_generator.math.vdot import clamp_vdot, get_paces
from plan_generator.models.enums import (
    BLOCK_WEEKS,
    DAYS_PER_WEEK,
    MAX_PLAN_WEEKS,
    MAX_WEEKLY_FREQUENCY,
    MIN_PLAN_WEEKS,
    MIN_WEEKLY_FREQUENCY,
    ExperienceLevel,
    RaceDistance,
)
from plan_generator.models.plan import TrainingPlan
from plan_generator.models.request import PlanGenerationRequest
from plan_generator.models.workout import Workout
from plan_generator.workout_builder.catalog import WorkoutTemplate, get_templates
from plan_generator.workout_builder.description_builder import build_workout_description
from plan_generator.workout_builder.scheduling import (
    schedule_week,
    training_day_offsets,
    week_start_on_or_after,
)
from plan_generator.workout_builder.selector import select_workouts_for_week

logger = logging.getLogger(__name__)


def validate_request(request: PlanGenerationRequest) -> tuple[RaceDistance, ExperienceLevel]:
    """Check a request before anything is built.

    Returns:
        The parsed (race, experience level).

    Raises:
        InvalidInputError: Bad frequency, VDOT, mileage or preferences.
        UnsupportedRaceError: Unknown target race.
    """
    frequency = request.weekly_frequency
    if (
        isinstance(frequency, bool)
        or not isinstance(frequency, int)
        or not MIN_WEEKLY_FREQUENCY <= frequency <= MAX_WEEKLY_FREQUENCY
    ):
        raise InvalidInputError(
            f"weekly_frequency must be an integer in "
            f"[{MIN_WEEKLY_FREQUENCY}, {MAX_WEEKLY_FREQUENCY}], got {frequency!r}"
        )
    if request.current_vdot <= 0:
        raise InvalidInputError(f"current_vdot must be positive, got {request.current_vdot}")
    if request.weekly_mileage is not None and request.weekly_mileage <= 0:
        raise InvalidInputError(
            f"weekly_mileage must be positive, got {request.weekly_mileage}"
        )

    race = RaceDistance.parse(request.target_race)
    get_templates(race)
    level = ExperienceLevel.parse(request.experience_level)

    prefs = request.preferences
    if prefs is not None:
        if prefs.max_workout_duration is not None and prefs.max_workout_duration <= 0:
            raise InvalidInputError(
                f"max_workout_duration must be positive, got {prefs.max_workout_duration}"
            )
        training_day_offsets(frequency, prefs)

    return race, level


def generate_plan(
    request: PlanGenerationRequest,
    now: datetime | None = None,
    today: date | None = None,
) -> TrainingPlan:
    """Build a new TrainingPlan.

    Args:
        request: The runner's goal and fitness.
        now: Creation timestamp. Defaults to the current UTC time.
        today: Reference day for target-date arithmetic. Defaults to now's date.

    Returns:
        An active TrainingPlan with a provisional id.

    Raises:
        InvalidInputError, UnsupportedRaceError: See validate_request().
        DegenerateScheduleError: If the plan would be shorter than MIN_PLAN_WEEKS.
    """
    race, level = validate_request(request)
    now = now or datetime.now(timezone.utc)
    today = today or now.date()

    total_weeks = resolve_total_weeks(race, level, request.target_date, today)
    if total_weeks < MIN_PLAN_WEEKS:
        raise DegenerateScheduleError(total_weeks, MIN_PLAN_WEEKS)

    vdot = clamp_vdot(request.current_vdot)
    plan = TrainingPlan(
        id=f"plan_{request.user_id}_{int(now.timestamp())}",
        user_id=request.user_id,
        vdot=vdot,
        weekly_frequency=request.weekly_frequency,
        target_race=race,
        total_weeks=total_weeks,
        paces=get_paces(vdot),
        created_at=now,
        updated_at=now,
        target_date=request.target_date,
    )
    logger.info(
        "Generated %d-week %s plan for user %s (VDOT %.1f, %d runs/week)",
        total_weeks,
        race.value,
        request.user_id,
        vdot,
        request.weekly_frequency,
    )
    return plan


def weekly_mileage_for_week(
    plan: TrainingPlan,
    week: int,
    request: PlanGenerationRequest,
) -> float:
    """Target mileage for *week*: baseline volume x progression factor.

    The baseline is the runner's stated weekly mileage when given, otherwise
    estimated from race, experience and VDOT.
    """
    if plan.total_weeks > MAX_PLAN_WEEKS:
        raise InvalidInputError(
            f"Plan cannot exceed {MAX_PLAN_WEEKS} weeks, got {plan.total_weeks}"
        )
    factor = get_progression_factor(week, plan.total_weeks)
    base = request.weekly_mileage or estimate_weekly_mileage(
        plan.target_race, request.experience_level, plan.vdot,
    )
    return round(base * factor, 1)


def fit_to_duration(
    distance: float,
    target_pace: float,
    max_duration: int | None,
) -> tuple[float, int]:
    """Distance and duration at *target_pace*, shortened to fit *max_duration* minutes."""
    duration = round(distance * target_pace / 60)
    if max_duration is not None and duration > max_duration:
        return max_duration * 60 / target_pace, max_duration
    return distance, duration


def _create_workout(
    template: WorkoutTemplate,
    plan: TrainingPlan,
    week: int,
    day: int,
    weekly_mileage: float,
    max_duration: int | None,
) -> Workout:
    target_pace = plan.paces[template.pace_type]
    distance, duration = fit_to_duration(
        weekly_mileage * template.distance_ratio, target_pace, max_duration,
    )

    return Workout(
        id=f"workout_{plan.id}_w{week}_d{day}",
        plan_id=plan.id,
        user_id=plan.user_id,
        week=week,
        day=day,
        type=template.type,
        distance=round(distance, 2),
        duration=duration,
        target_pace=target_pace,
        description=build_workout_description(template, distance, target_pace),
    )


def generate_week_workouts(
    plan: TrainingPlan,
    week: int,
    request: PlanGenerationRequest,
) -> list[Workout]:
    """Materialize the workouts for one week of *plan*.

    Workouts get ``day = index + 1`` and no calendar date.

    Raises:
        DegenerateScheduleError: If plan.total_weeks < MIN_PLAN_WEEKS.
        InvalidInputError: If week is outside the plan.
    """
    weekly_mileage = weekly_mileage_for_week(plan, week, request)
    templates = select_workouts_for_week(
        get_templates(plan.target_race),
        plan.weekly_frequency,
        week,
        plan.total_weeks,
    )
    max_duration = (
        request.preferences.max_workout_duration if request.preferences else None
    )

    workouts = [
        _create_workout(template, plan, week, day, weekly_mileage, max_duration)
        for day, template in enumerate(templates, start=1)
    ]
    logger.debug(
        "Week %d/%d of %s: %.1f miles over %d workouts",
        week,
        plan.total_weeks,
        plan.id,
        weekly_mileage,
        len(workouts),
    )
    return workouts


def schedule_block(
    plan: TrainingPlan,
    request: PlanGenerationRequest,
    start: date,
    first_week: int = 1,
    weeks: int = BLOCK_WEEKS,
) -> list[Workout]:
    """Generate and date *weeks* consecutive weeks of *plan*.

    The block starts on the Monday on or after *start*. Weeks past the end of
    the plan are not generated.
    """
    monday = week_start_on_or_after(start)
    last_week = min(plan.total_weeks, first_week + weeks - 1)

    scheduled: list[Workout] = []
    for offset, week in enumerate(range(first_week, last_week + 1)):
        week_workouts = generate_week_workouts(plan, week, request)
        scheduled.extend(
            schedule_week(
                week_workouts,
                monday + timedelta(days=DAYS_PER_WEEK * offset),
                request.preferences,
            )
        )
    return scheduled


def generate_14_day_block(
    request: PlanGenerationRequest,
    start: date | None = None,
    now: datetime | None = None,
) -> list[Workout]:
    """Build a fresh plan and schedule its first two weeks.

    Args:
        request: The runner's goal and fitness.
        start: Any day in the week before the block; the block starts on the
            Monday on or after it. Defaults to today.
        now: Plan creation timestamp. Defaults to the current UTC time.

    Returns:
        Workouts for weeks 1 and 2 in strictly increasing date order.
    """
    now = now or datetime.now(timezone.utc)
    start = start or now.date()
    plan = generate_plan(request, now=now, today=start)
    workouts = schedule_block(plan, request, start)
    logger.info(
        "Scheduled %d workouts for user %s starting %s",
        len(workouts),
        request.user_id,
        workouts[0].scheduled_date.isoformat() if workouts else "-",
    )
    return workouts
