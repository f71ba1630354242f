"""Data models for the plan generator."""

from plan_generator.models.enums import (
    ExperienceLevel,
    PaceType,
    RaceDistance,
    TrainingPhase,
    WorkoutType,
)
from plan_generator.models.paces import VDOTPaces
from plan_generator.models.plan import TrainingPlan
from plan_generator.models.request import (
    InjuryRecord,
    PlanGenerationRequest,
    PlanPreferences,
)
from plan_generator.models.run import RunRecord
from plan_generator.models.workout import Workout

__all__ = [
    "ExperienceLevel",
    "InjuryRecord",
    "PaceType",
    "PlanGenerationRequest",
    "PlanPreferences",
    "RaceDistance",
    "RunRecord",
    "TrainingPhase",
    "TrainingPlan",
    "VDOTPaces",
    "Workout",
    "WorkoutType",
]
