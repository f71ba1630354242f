"""Plan generation request and its optional preference blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from plan_generator.models.enums import ExperienceLevel, RaceDistance


@dataclass(frozen=True)
class InjuryRecord:
    """A past or current injury reported by the runner."""

    type: str
    severity: str  # "minor" | "moderate" | "severe"
    recovered: bool = True


@dataclass(frozen=True)
class PlanPreferences:
    """Optional scheduling preferences.

    Attributes:
        avoid_back_to_back: Keep hard workouts off consecutive days.
        preferred_rest_days: Weekdays to keep free, Sunday = 0 ... Saturday = 6.
        max_workout_duration: Cap on a single workout in minutes.
    """

    avoid_back_to_back: bool = False
    preferred_rest_days: tuple[int, ...] = field(default_factory=tuple)
    max_workout_duration: int | None = None


@dataclass(frozen=True)
class PlanGenerationRequest:
    """Everything the engine needs to build a plan for one runner."""

    user_id: str
    current_vdot: float
    target_race: RaceDistance | str
    weekly_frequency: int
    experience_level: ExperienceLevel | str
    target_date: date | None = None
    weekly_mileage: float | None = None
    injury_history: tuple[InjuryRecord, ...] = field(default_factory=tuple)
    preferences: PlanPreferences | None = None
