"""Weekly workout selection from the template catalog.

Frequency determines how many sessions a week holds; plan progress decides
which quality session (tempo or intervals) leads the week:

    f >= 3: easy, quality, long
    f >= 4: + easy (recovery every RECOVERY_RUN_WEEK_INTERVAL-th week)
    f >= 5: + second quality, rotating through tempo/interval templates
    f >= 6: + recovery (easy if the race has none)
    f >= 7: + easy

The list is then truncated to exactly f sessions.
"""

from __future__ import annotations

from typing import Sequence

from plan_generator.models.enums import (
    INTERVAL_BIAS_PHASE_START,
    RECOVERY_RUN_WEEK_INTERVAL,
    TEMPO_ONLY_PHASE_END,
    WorkoutType,
)
from plan_generator.workout_builder.catalog import WorkoutTemplate


def _first(templates: Sequence[WorkoutTemplate], workout_type: WorkoutType) -> WorkoutTemplate | None:
    return next((t for t in templates if t.type == workout_type), None)


def select_quality_workout(
    templates: Sequence[WorkoutTemplate],
    week_number: int,
    total_weeks: int,
) -> WorkoutTemplate:
    """Pick the week's main quality session from plan progress.

    Early weeks build threshold with tempo, the middle of the plan alternates
    tempo (odd weeks) and intervals (even weeks), the final stretch is
    interval-biased.
    """
    tempo = _first(templates, WorkoutType.TEMPO)
    intervals = _first(templates, WorkoutType.INTERVALS)
    progress = week_number / total_weeks

    if progress < TEMPO_ONLY_PHASE_END:
        return tempo
    if progress < INTERVAL_BIAS_PHASE_START:
        return intervals if week_number % 2 == 0 else tempo
    return intervals


def select_second_quality_workout(
    templates: Sequence[WorkoutTemplate],
    week_number: int,
) -> WorkoutTemplate:
    """Rotate through the race's tempo and interval templates by week."""
    quality = [
        t for t in templates
        if t.type in (WorkoutType.TEMPO, WorkoutType.INTERVALS)
    ]
    return quality[week_number % len(quality)]


def select_workouts_for_week(
    templates: Sequence[WorkoutTemplate],
    frequency: int,
    week_number: int,
    total_weeks: int,
) -> list[WorkoutTemplate]:
    """Choose the ordered session templates for one week.

    Args:
        templates: Catalog entry for the target race.
        frequency: Runs per week.
        week_number: 1-indexed week.
        total_weeks: Plan length.

    Returns:
        Exactly ``frequency`` templates (fewer only if frequency exceeds the
        seven-slot selection).
    """
    easy = _first(templates, WorkoutType.EASY)
    recovery = _first(templates, WorkoutType.RECOVERY) or easy

    selected = [
        easy,
        select_quality_workout(templates, week_number, total_weeks),
        _first(templates, WorkoutType.LONG),
    ]

    if frequency >= 4:
        selected.append(
            recovery if week_number % RECOVERY_RUN_WEEK_INTERVAL == 0 else easy
        )
    if frequency >= 5:
        selected.append(select_second_quality_workout(templates, week_number))
    if frequency >= 6:
        selected.append(recovery)
    if frequency >= 7:
        selected.append(easy)

    return selected[:frequency]
