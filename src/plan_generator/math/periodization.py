"""Periodization math: plan duration, weekly volume, build/peak/taper factors.

The macrocycle has three phases:
- BUILD (first 70% of weeks): volume ramps linearly from 70% to 100%
- PEAK (next 20%): volume held near the top, 95% to 100%
- TAPER (remainder): linear decay from 100% to 60%

References:
    Pfitzinger & Douglas (2009), Advanced Marathoning, 2nd ed.
    Bosquet et al. (2007), Effects of tapering on performance: a meta-analysis.
    Mujika & Padilla (2003), Scientific bases for precompetition tapering.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from plan_generator.exceptions import DegenerateScheduleError, InvalidInputError
from plan_generator.models.enums import (
    BASE_PLAN_WEEKS,
    BASE_WEEKLY_MILEAGE,
    BUILD_END_FACTOR,
    BUILD_PHASE_FRACTION,
    BUILD_START_FACTOR,
    MAX_MILEAGE_SCALE,
    MIN_MILEAGE_SCALE,
    MIN_PLAN_WEEKS,
    MILEAGE_REFERENCE_VDOT,
    PEAK_END_FACTOR,
    PEAK_PHASE_FRACTION,
    PEAK_START_FACTOR,
    TAPER_END_FACTOR,
    TAPER_START_FACTOR,
    TARGET_DATE_MAX_WEEKS,
    TARGET_DATE_MIN_WEEKS,
    ExperienceLevel,
    RaceDistance,
    TrainingPhase,
)


@dataclass(frozen=True)
class PhaseLengths:
    """Number of weeks in each phase of a plan."""

    build: int
    peak: int
    taper: int


def get_base_plan_duration(
    race: RaceDistance | str,
    level: ExperienceLevel | str,
) -> int:
    """Default plan length in weeks for a race and experience level."""
    return BASE_PLAN_WEEKS[RaceDistance.parse(race)][ExperienceLevel.parse(level)]


def calculate_weeks_to_target(target_date: date, today: date | None = None) -> int:
    """Whole weeks (rounded up) from *today* until *target_date*.

    May be zero or negative for a date in the past; see resolve_total_weeks().
    """
    today = today or date.today()
    return math.ceil((target_date - today).days / 7)


def resolve_total_weeks(
    race: RaceDistance | str,
    level: ExperienceLevel | str,
    target_date: date | None = None,
    today: date | None = None,
) -> int:
    """Plan length: weeks to the target date clamped to
    [TARGET_DATE_MIN_WEEKS, TARGET_DATE_MAX_WEEKS], or the base duration.
    """
    if target_date is None:
        return get_base_plan_duration(race, level)
    weeks = calculate_weeks_to_target(target_date, today)
    return max(TARGET_DATE_MIN_WEEKS, min(TARGET_DATE_MAX_WEEKS, weeks))


def estimate_weekly_mileage(
    race: RaceDistance | str,
    level: ExperienceLevel | str,
    vdot: float,
) -> int:
    """Baseline weekly mileage scaled by fitness.

    The race/level table is defined at VDOT 50 and scaled by
    clamp(vdot / 50, 0.7, 1.3).
    """
    base = BASE_WEEKLY_MILEAGE[RaceDistance.parse(race)][ExperienceLevel.parse(level)]
    scale = max(MIN_MILEAGE_SCALE, min(MAX_MILEAGE_SCALE, vdot / MILEAGE_REFERENCE_VDOT))
    return round(base * scale)


def allocate_phase_lengths(total_weeks: int) -> PhaseLengths:
    """Split a plan into build / peak / taper week counts.

    Raises:
        DegenerateScheduleError: If total_weeks < MIN_PLAN_WEEKS.
    """
    if total_weeks < MIN_PLAN_WEEKS:
        raise DegenerateScheduleError(total_weeks, MIN_PLAN_WEEKS)

    build = math.floor(total_weeks * BUILD_PHASE_FRACTION)
    peak = math.floor(total_weeks * PEAK_PHASE_FRACTION)
    return PhaseLengths(build=build, peak=peak, taper=total_weeks - build - peak)


def _check_week(week: int, total_weeks: int) -> PhaseLengths:
    lengths = allocate_phase_lengths(total_weeks)
    if not 1 <= week <= total_weeks:
        raise InvalidInputError(
            f"Week {week} is outside plan range (1-{total_weeks})"
        )
    return lengths


def _interpolate(start: float, end: float, position: int, length: int) -> float:
    # position is 0-indexed within the phase
    return start + (end - start) * position / max(1, length - 1)


def get_progression_factor(week: int, total_weeks: int) -> float:
    """Volume multiplier for *week* of a *total_weeks* plan.

    Args:
        week: 1-indexed week number.
        total_weeks: Plan length (minimum MIN_PLAN_WEEKS).

    Returns:
        Multiplier applied to the baseline weekly mileage.

    Raises:
        DegenerateScheduleError: If total_weeks < MIN_PLAN_WEEKS.
        InvalidInputError: If week is outside [1, total_weeks].
    """
    lengths = _check_week(week, total_weeks)

    if week <= lengths.build:
        return _interpolate(BUILD_START_FACTOR, BUILD_END_FACTOR, week - 1, lengths.build)
    if week <= lengths.build + lengths.peak:
        return _interpolate(
            PEAK_START_FACTOR, PEAK_END_FACTOR, week - lengths.build - 1, lengths.peak,
        )
    return _interpolate(
        TAPER_START_FACTOR,
        TAPER_END_FACTOR,
        week - lengths.build - lengths.peak - 1,
        lengths.taper,
    )


def get_phase_for_week(week: int, total_weeks: int) -> TrainingPhase:
    """Training phase that *week* falls in."""
    lengths = _check_week(week, total_weeks)
    if week <= lengths.build:
        return TrainingPhase.BUILD
    if week <= lengths.build + lengths.peak:
        return TrainingPhase.PEAK
    return TrainingPhase.TAPER
