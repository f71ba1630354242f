"""VDOT calculations: race performance <-> fitness score <-> training paces.

Implements the Daniels-Gilbert oxygen-power model. A race performance gives
a velocity (and so an oxygen cost) and a duration (and so the fraction of
VO2max sustainable for that long); VDOT is their ratio. Training paces are
the velocities whose oxygen cost equals a fixed fraction of VDOT.

References:
    Daniels & Gilbert (1979). Oxygen Power: Performance Tables for
        Distance Runners.
    Daniels (2013). Daniels' Running Formula, 3rd ed.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Iterable

import numpy as np

from plan_generator.exceptions import InvalidInputError
from plan_generator.models.enums import (
    DEFAULT_EFFORT_WEIGHT,
    DEFAULT_VDOT,
    DEFAULT_VDOT_BY_LEVEL,
    EQUIVALENT_RACE_MILES,
    IMPROVEMENT_RATE_PER_WEEK,
    IMPROVEMENT_REFERENCE_WEEKS,
    MAX_RUN_DISTANCE_MILES,
    METERS_PER_MILE,
    MILES_PER_KM,
    MIN_IMPROVEMENT,
    MIN_RECENCY_WEIGHT,
    PCT_MAX_BASE,
    PCT_MAX_FAST_COEFF,
    PCT_MAX_FAST_RATE,
    PCT_MAX_SLOW_COEFF,
    PCT_MAX_SLOW_RATE,
    PREDICT_ITERATIONS,
    PREDICT_MAX_MINUTES,
    PREDICT_MIN_MINUTES,
    RPE_MAX,
    RPE_MIN,
    RUN_RECENCY_DECAY_DAYS,
    VDOT_MAX,
    VDOT_MIN,
    VO2_COST_INTERCEPT,
    VO2_COST_LINEAR,
    VO2_COST_QUADRATIC,
    ZONE_PCT_VO2MAX,
    ExperienceLevel,
    PaceType,
)
from plan_generator.models.paces import VDOTPaces
from plan_generator.models.run import RunRecord


def clamp_vdot(vdot: float) -> float:
    """Clamp a VDOT value into [VDOT_MIN, VDOT_MAX]."""
    return max(VDOT_MIN, min(VDOT_MAX, vdot))


# ---------------------------------------------------------------------------
# Daniels-Gilbert building blocks
# ---------------------------------------------------------------------------


def oxygen_cost(velocity_m_per_min: float) -> float:
    """VO2 (ml/kg/min) required to run at *velocity_m_per_min*."""
    v = velocity_m_per_min
    return VO2_COST_INTERCEPT + VO2_COST_LINEAR * v + VO2_COST_QUADRATIC * v * v


def fraction_of_vo2max(duration_min: float) -> float:
    """Fraction of VO2max sustainable for *duration_min* minutes."""
    return (
        PCT_MAX_BASE
        + PCT_MAX_FAST_COEFF * math.exp(-PCT_MAX_FAST_RATE * duration_min)
        + PCT_MAX_SLOW_COEFF * math.exp(-PCT_MAX_SLOW_RATE * duration_min)
    )


def velocity_for_oxygen_cost(vo2: float) -> float:
    """Invert the oxygen-cost quadratic: velocity (m/min) for a VO2.

    0.000104*v^2 + 0.182258*v + (-4.60 - VO2) = 0, positive root.
    """
    a = VO2_COST_QUADRATIC
    b = VO2_COST_LINEAR
    c = VO2_COST_INTERCEPT - vo2
    return (-b + math.sqrt(b * b - 4 * a * c)) / (2 * a)


def _raw_vdot(distance_m: float, duration_min: float) -> float:
    velocity = distance_m / duration_min
    return oxygen_cost(velocity) / fraction_of_vo2max(duration_min)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def calculate_vdot_from_race(distance: float, time_seconds: float) -> float:
    """Calculate VDOT from a race performance.

    Args:
        distance: Race distance in miles.
        time_seconds: Finishing time in seconds.

    Returns:
        VDOT clamped to [VDOT_MIN, VDOT_MAX], rounded to 0.1.

    Raises:
        InvalidInputError: If distance or time is not positive.
    """
    if distance <= 0 or time_seconds <= 0:
        raise InvalidInputError(
            f"Invalid race data: distance={distance}, time_seconds={time_seconds}"
        )

    vdot = _raw_vdot(distance * METERS_PER_MILE, time_seconds / 60.0)
    return round(clamp_vdot(vdot), 1)


def calculate_from_recent_runs(
    runs: Iterable[RunRecord],
    as_of: date | None = None,
) -> int:
    """Estimate current VDOT from logged runs.

    Each qualifying run is converted with the race formula and weighted by
    recency (linear decay over RUN_RECENCY_DECAY_DAYS, floor
    MIN_RECENCY_WEIGHT) and perceived effort (RPE / 10, or
    DEFAULT_EFFORT_WEIGHT when not recorded or outside 1-10).

    Args:
        runs: Run history from the run-logging collaborator.
        as_of: Reference day for recency. Defaults to the newest run date,
            which keeps the estimate independent of the wall clock.

    Returns:
        Integer VDOT, or DEFAULT_VDOT when no run qualifies.
    """
    qualifying = [
        run for run in runs
        if run.distance > 0
        and run.duration is not None
        and run.duration > 0
        and run.distance <= MAX_RUN_DISTANCE_MILES
    ]
    if not qualifying:
        return DEFAULT_VDOT

    if as_of is None:
        dated = [run.date for run in qualifying if run.date is not None]
        as_of = max(dated) if dated else None

    vdots: list[float] = []
    weights: list[float] = []
    for run in qualifying:
        vdots.append(calculate_vdot_from_race(run.distance, run.duration))

        if run.date is not None and as_of is not None:
            days_old = (as_of - run.date).days
            recency = max(MIN_RECENCY_WEIGHT, 1 - days_old / RUN_RECENCY_DECAY_DAYS)
        else:
            recency = 1.0
        effort = (
            run.perceived_effort / RPE_MAX
            if run.perceived_effort is not None
            and RPE_MIN <= run.perceived_effort <= RPE_MAX
            else DEFAULT_EFFORT_WEIGHT
        )
        weights.append(min(recency, 1.0) * effort)

    weighted = float(np.average(np.array(vdots), weights=np.array(weights)))
    return round(clamp_vdot(weighted))


def get_paces(vdot: float) -> VDOTPaces:
    """Training paces for a VDOT.

    Args:
        vdot: Fitness score; clamped to [VDOT_MIN, VDOT_MAX].

    Returns:
        VDOTPaces in whole seconds per mile.
    """
    clamped = clamp_vdot(vdot)
    paces: dict[str, int] = {}
    for pace_type in PaceType:
        velocity = velocity_for_oxygen_cost(clamped * ZONE_PCT_VO2MAX[pace_type])
        paces[pace_type.value] = round(METERS_PER_MILE / velocity * 60)
    return VDOTPaces(**paces)


def predict_race_time(vdot: float, distance: float) -> float:
    """Predict a race time for *distance* miles at fitness *vdot*.

    Solves ``_raw_vdot(distance, t) == vdot`` for t by bisection. For a fixed
    distance the implied VDOT falls monotonically as the time grows, so the
    initial bracket is halved or doubled until it straddles the answer.

    Returns:
        Predicted time in seconds, rounded to 0.1.

    Raises:
        InvalidInputError: If distance is not positive.
    """
    if distance <= 0:
        raise InvalidInputError(f"Distance must be positive, got {distance}")

    target = clamp_vdot(vdot)
    distance_m = distance * METERS_PER_MILE
    low, high = PREDICT_MIN_MINUTES, PREDICT_MAX_MINUTES
    # Widen the bracket until it contains the solution
    while _raw_vdot(distance_m, low) <= target:
        low /= 2
    while _raw_vdot(distance_m, high) > target:
        high *= 2
    for _ in range(PREDICT_ITERATIONS):
        mid = (low + high) / 2
        if _raw_vdot(distance_m, mid) > target:
            low = mid  # Too fast for this fitness
        else:
            high = mid
    return round((low + high) / 2 * 60, 1)


def get_equivalent_times(vdot: float) -> dict[str, float]:
    """Predicted times (seconds) at mile, 5k, 10k, half marathon and marathon."""
    return {
        name: predict_race_time(vdot, miles)
        for name, miles in EQUIVALENT_RACE_MILES.items()
    }


def suggest_target_vdot(
    current_vdot: float,
    experience_level: ExperienceLevel | str,
    weeks: int = IMPROVEMENT_REFERENCE_WEEKS,
) -> float:
    """Suggest a realistic goal VDOT for the end of a training block.

    The weekly improvement rate falls with experience and the total gain grows
    with the square root of the horizon, so doubling the weeks gives less
    than double the gain.

    Raises:
        InvalidInputError: If weeks is not positive.
    """
    if weeks <= 0:
        raise InvalidInputError(f"weeks must be positive, got {weeks}")
    level = ExperienceLevel.parse(experience_level)

    rate = IMPROVEMENT_RATE_PER_WEEK[level]
    improvement = rate * IMPROVEMENT_REFERENCE_WEEKS * math.sqrt(
        weeks / IMPROVEMENT_REFERENCE_WEEKS
    )
    improvement = max(improvement, MIN_IMPROVEMENT)
    return round(min(VDOT_MAX, current_vdot + improvement), 1)


def estimate_baseline_vdot(
    experience_level: ExperienceLevel | str,
    baseline_distance_km: float | None = None,
    baseline_time_seconds: float | None = None,
) -> float:
    """Starting VDOT for a new runner.

    Uses a baseline run when both distance (km) and time are known, otherwise
    the default for the experience level.
    """
    level = ExperienceLevel.parse(experience_level)
    if baseline_distance_km and baseline_time_seconds:
        return calculate_vdot_from_race(
            baseline_distance_km * MILES_PER_KM, baseline_time_seconds
        )
    return float(DEFAULT_VDOT_BY_LEVEL[level])
