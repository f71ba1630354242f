"""Training-plan generation engine — VDOT, periodization and workout planning."""

from plan_generator.exceptions import (
    DegenerateScheduleError,
    InvalidInputError,
    PlanGeneratorError,
    UnsupportedRaceError,
)
from plan_generator.math.periodization import (
    get_phase_for_week,
    get_progression_factor,
    resolve_total_weeks,
)
from plan_generator.math.vdot import (
    calculate_from_recent_runs,
    calculate_vdot_from_race,
    estimate_baseline_vdot,
    get_equivalent_times,
    get_paces,
    predict_race_time,
    suggest_target_vdot,
)
from plan_generator.models import (
    ExperienceLevel,
    PlanGenerationRequest,
    PlanPreferences,
    RaceDistance,
    TrainingPlan,
    VDOTPaces,
    Workout,
    WorkoutType,
)
from plan_generator.plan_builder import (
    generate_14_day_block,
    generate_plan,
    generate_week_workouts,
)
from plan_generator.updates import (
    regenerate_upcoming_workouts,
    supersede_plan,
    update_workout_paces,
)

__all__ = [
    "DegenerateScheduleError",
    "ExperienceLevel",
    "InvalidInputError",
    "PlanGenerationRequest",
    "PlanGeneratorError",
    "PlanPreferences",
    "RaceDistance",
    "TrainingPlan",
    "UnsupportedRaceError",
    "VDOTPaces",
    "Workout",
    "WorkoutType",
    "calculate_from_recent_runs",
    "calculate_vdot_from_race",
    "estimate_baseline_vdot",
    "generate_14_day_block",
    "generate_plan",
    "generate_week_workouts",
    "get_equivalent_times",
    "get_paces",
    "get_phase_for_week",
    "get_progression_factor",
    "predict_race_time",
    "regenerate_upcoming_workouts",
    "resolve_total_weeks",
    "suggest_target_vdot",
    "supersede_plan",
    "update_workout_paces",
]
