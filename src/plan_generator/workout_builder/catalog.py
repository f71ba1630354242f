"""Workout template catalog — the archetypes available for each target race.

Each template gives the share of weekly mileage the workout takes and the
pace zone it is run at. PlanBuilder materializes templates into Workouts.
"""

from __future__ import annotations

from dataclasses import dataclass

from plan_generator.exceptions import UnsupportedRaceError
from plan_generator.models.enums import PaceType, RaceDistance, WorkoutType


@dataclass(frozen=True)
class WorkoutTemplate:
    """Template for a single workout archetype.

    Attributes:
        type: Workout archetype.
        name: Display name.
        description: Purpose of the session, appended to workout descriptions.
        distance_ratio: Fraction of weekly mileage, in (0, 1].
        pace_type: Pace zone the workout is run at.
        effort_level: Perceived effort 1-10.
        recovery_days: Easy days recommended afterwards.
    """

    type: WorkoutType
    name: str
    description: str
    distance_ratio: float
    pace_type: PaceType
    effort_level: int
    recovery_days: int


_EASY = WorkoutTemplate(
    type=WorkoutType.EASY,
    name="Easy Run",
    description="Conversational pace for aerobic base building",
    distance_ratio=0.25,
    pace_type=PaceType.EASY,
    effort_level=4,
    recovery_days=0,
)

WORKOUT_TEMPLATES: dict[RaceDistance, tuple[WorkoutTemplate, ...]] = {
    RaceDistance.FIVE_K: (
        _EASY,
        WorkoutTemplate(
            type=WorkoutType.TEMPO,
            name="Tempo Run",
            description="Comfortably hard effort to improve lactate threshold",
            distance_ratio=0.2,
            pace_type=PaceType.THRESHOLD,
            effort_level=7,
            recovery_days=1,
        ),
        WorkoutTemplate(
            type=WorkoutType.INTERVALS,
            name="5K Intervals",
            description="Short intervals at 5K pace with equal rest",
            distance_ratio=0.15,
            pace_type=PaceType.INTERVAL,
            effort_level=8,
            recovery_days=2,
        ),
        WorkoutTemplate(
            type=WorkoutType.LONG,
            name="Long Run",
            description="Steady aerobic run for endurance",
            distance_ratio=0.3,
            pace_type=PaceType.EASY,
            effort_level=5,
            recovery_days=1,
        ),
        WorkoutTemplate(
            type=WorkoutType.RECOVERY,
            name="Recovery Run",
            description="Very easy pace for active recovery",
            distance_ratio=0.15,
            pace_type=PaceType.EASY,
            effort_level=3,
            recovery_days=0,
        ),
    ),
    RaceDistance.TEN_K: (
        _EASY,
        WorkoutTemplate(
            type=WorkoutType.TEMPO,
            name="Threshold Run",
            description="10K pace tempo efforts",
            distance_ratio=0.25,
            pace_type=PaceType.THRESHOLD,
            effort_level=7,
            recovery_days=1,
        ),
        WorkoutTemplate(
            type=WorkoutType.INTERVALS,
            name="10K Intervals",
            description="Medium intervals at 10K pace",
            distance_ratio=0.2,
            pace_type=PaceType.INTERVAL,
            effort_level=8,
            recovery_days=2,
        ),
        WorkoutTemplate(
            type=WorkoutType.LONG,
            name="Long Run",
            description="Extended aerobic run for endurance",
            distance_ratio=0.35,
            pace_type=PaceType.EASY,
            effort_level=5,
            recovery_days=1,
        ),
    ),
    RaceDistance.HALF_MARATHON: (
        WorkoutTemplate(
            type=WorkoutType.EASY,
            name="Easy Run",
            description="Conversational pace for aerobic development",
            distance_ratio=0.3,
            pace_type=PaceType.EASY,
            effort_level=4,
            recovery_days=0,
        ),
        WorkoutTemplate(
            type=WorkoutType.TEMPO,
            name="Half Marathon Pace",
            description="Race pace segments with recovery",
            distance_ratio=0.25,
            pace_type=PaceType.THRESHOLD,
            effort_level=7,
            recovery_days=1,
        ),
        WorkoutTemplate(
            type=WorkoutType.LONG,
            name="Long Run",
            description="Progressive long run building endurance",
            distance_ratio=0.4,
            pace_type=PaceType.EASY,
            effort_level=6,
            recovery_days=2,
        ),
        WorkoutTemplate(
            type=WorkoutType.INTERVALS,
            name="Lactate Intervals",
            description="Longer intervals to improve lactate clearance",
            distance_ratio=0.2,
            pace_type=PaceType.THRESHOLD,
            effort_level=8,
            recovery_days=1,
        ),
    ),
    RaceDistance.MARATHON: (
        WorkoutTemplate(
            type=WorkoutType.EASY,
            name="Easy Run",
            description="Aerobic base building at conversational pace",
            distance_ratio=0.35,
            pace_type=PaceType.EASY,
            effort_level=4,
            recovery_days=0,
        ),
        WorkoutTemplate(
            type=WorkoutType.TEMPO,
            name="Marathon Pace",
            description="Race pace practice with progression",
            distance_ratio=0.25,
            pace_type=PaceType.MARATHON,
            effort_level=6,
            recovery_days=1,
        ),
        WorkoutTemplate(
            type=WorkoutType.LONG,
            name="Long Run",
            description="Extended run for marathon endurance",
            distance_ratio=0.45,
            pace_type=PaceType.EASY,
            effort_level=6,
            recovery_days=2,
        ),
        WorkoutTemplate(
            type=WorkoutType.INTERVALS,
            name="Threshold Work",
            description="Lactate threshold development",
            distance_ratio=0.2,
            pace_type=PaceType.THRESHOLD,
            effort_level=7,
            recovery_days=1,
        ),
    ),
}

# Every race needs the archetypes the selector draws from.
_REQUIRED_TYPES = frozenset({
    WorkoutType.EASY,
    WorkoutType.TEMPO,
    WorkoutType.INTERVALS,
    WorkoutType.LONG,
})

_missing_races = set(RaceDistance) - set(WORKOUT_TEMPLATES)
if _missing_races:
    raise RuntimeError(f"Workout catalog missing races: {sorted(_missing_races)}")
for _race, _templates in WORKOUT_TEMPLATES.items():
    _missing_types = _REQUIRED_TYPES - {t.type for t in _templates}
    if _missing_types:
        raise RuntimeError(f"{_race.value} catalog missing {sorted(_missing_types)}")


def get_templates(race: RaceDistance | str) -> tuple[WorkoutTemplate, ...]:
    """Look up the workout templates for a race.

    Raises:
        UnsupportedRaceError: If the race has no catalog entry.
    """
    key = RaceDistance.parse(race)
    try:
        return WORKOUT_TEMPLATES[key]
    except KeyError:
        raise UnsupportedRaceError(race) from None


def find_template(
    race: RaceDistance | str, workout_type: WorkoutType | str,
) -> WorkoutTemplate | None:
    """First template of *workout_type* for *race*, or None."""
    wanted = WorkoutType(workout_type)
    for template in get_templates(race):
        if template.type == wanted:
            return template
    return None
