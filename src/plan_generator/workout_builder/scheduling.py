"""Calendar scheduling — maps a week's workouts onto weekdays.

Training days come from a fixed rotation (Mon, Wed, Fri, Sun, Tue, Thu, Sat)
so that low frequencies get well-spaced days. The first ``f`` rotation days
are used and placed in calendar order, so scheduled dates always increase.
"""

from __future__ import annotations

import dataclasses
from datetime import date, timedelta
from typing import Iterable, Sequence

from plan_generator.exceptions import InvalidInputError
from plan_generator.models.enums import DAYS_PER_WEEK, DEFAULT_WEEKDAY_ROTATION
from plan_generator.models.request import PlanPreferences
from plan_generator.models.workout import Workout


def week_start_on_or_after(from_date: date) -> date:
    """Return the Monday on or after *from_date*."""
    return from_date + timedelta(days=(7 - from_date.weekday()) % 7)


def _monday_offset(weekday: int) -> int:
    """Convert Sunday=0 numbering to days after Monday."""
    return (weekday + 6) % DAYS_PER_WEEK


def available_weekdays(rest_days: Iterable[int] = ()) -> tuple[int, ...]:
    """Rotation order of weekdays (Sunday = 0) with *rest_days* removed.

    Raises:
        InvalidInputError: If a rest day is outside 0-6.
    """
    rest = set(rest_days)
    invalid = sorted(d for d in rest if not 0 <= d <= 6)
    if invalid:
        raise InvalidInputError(f"Rest days must be 0-6 (Sunday = 0), got {invalid}")
    return tuple(d for d in DEFAULT_WEEKDAY_ROTATION if d not in rest)


def training_day_offsets(
    frequency: int,
    preferences: PlanPreferences | None = None,
) -> list[int]:
    """Days after Monday on which to train, in calendar order.

    Raises:
        InvalidInputError: If the rest days leave fewer than *frequency* days.
    """
    rest_days = preferences.preferred_rest_days if preferences else ()
    weekdays = available_weekdays(rest_days)
    if frequency > len(weekdays):
        raise InvalidInputError(
            f"{frequency} runs per week do not fit in {len(weekdays)} "
            f"available days (rest days: {sorted(rest_days)})"
        )
    return sorted(_monday_offset(d) for d in weekdays[:frequency])


def _adjacent(a: int, b: int) -> bool:
    # Sunday and the following Monday count as adjacent
    return (a - b) % DAYS_PER_WEEK in (1, DAYS_PER_WEEK - 1)


def assign_offsets(
    workouts: Sequence[Workout],
    offsets: Sequence[int],
    avoid_back_to_back: bool = False,
) -> list[int]:
    """Pick a day offset for each workout.

    Without *avoid_back_to_back* workouts take the offsets in order. With it,
    hard workouts are placed first on days not adjacent to another hard day
    (where the offsets allow), and the rest fill the remaining days in order.
    """
    if not avoid_back_to_back:
        return list(offsets[: len(workouts)])

    free = list(offsets)
    assigned: dict[int, int] = {}
    hard_days: list[int] = []
    for i, workout in enumerate(workouts):
        if not workout.is_hard:
            continue
        choice = next(
            (o for o in free if not any(_adjacent(o, h) for h in hard_days)),
            free[0],
        )
        free.remove(choice)
        hard_days.append(choice)
        assigned[i] = choice

    for i in range(len(workouts)):
        if i not in assigned:
            assigned[i] = free.pop(0)
    return [assigned[i] for i in range(len(workouts))]


def schedule_week(
    workouts: Sequence[Workout],
    week_start: date,
    preferences: PlanPreferences | None = None,
) -> list[Workout]:
    """Attach scheduled dates to one week of workouts.

    Returns the workouts sorted by date, with ``day`` renumbered to the
    chronological position within the week.
    """
    offsets = training_day_offsets(len(workouts), preferences)
    avoid = bool(preferences and preferences.avoid_back_to_back)
    chosen = assign_offsets(workouts, offsets, avoid)

    placed = sorted(zip(chosen, workouts), key=lambda pair: pair[0])
    return [
        dataclasses.replace(
            workout,
            day=position,
            scheduled_date=week_start + timedelta(days=offset),
        )
        for position, (offset, workout) in enumerate(placed, start=1)
    ]
