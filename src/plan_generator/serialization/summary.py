"""Plain-English plan summary for display to the runner."""

from __future__ import annotations

from typing import Sequence

from plan_generator.formatting import format_distance, format_duration, format_pace
from plan_generator.models.enums import PaceType, RaceDistance
from plan_generator.models.plan import TrainingPlan
from plan_generator.models.workout import Workout

_RACE_NAMES = {
    RaceDistance.FIVE_K: "5K",
    RaceDistance.TEN_K: "10K",
    RaceDistance.HALF_MARATHON: "Half Marathon",
    RaceDistance.MARATHON: "Marathon",
}

# Number of upcoming workouts listed in the summary
_PREVIEW_WORKOUTS = 3


def build_plan_summary(
    plan: TrainingPlan,
    workouts: Sequence[Workout],
    target_vdot: float | None = None,
    distance_unit: str = "miles",
) -> str:
    """Summarize a plan and its first few workouts.

    Workout distances are shown in *distance_unit* ("miles" or "km").

    e.g.::

        Your 10-week 5K plan is ready!
        4 runs per week, current VDOT 45.0 (target 51.0)
        Key paces: easy 8:57/mile, tempo 7:27/mile, intervals 6:49/mile
        ...
    """
    vdot_line = f"{plan.weekly_frequency} runs per week, current VDOT {plan.vdot:.1f}"
    if target_vdot is not None:
        vdot_line += f" (target {target_vdot:.1f})"

    paces = plan.paces
    lines = [
        f"Your {plan.total_weeks}-week {_RACE_NAMES[plan.target_race]} plan is ready!",
        vdot_line,
        "Key paces: "
        f"easy {format_pace(paces[PaceType.EASY])}/mile, "
        f"tempo {format_pace(paces[PaceType.THRESHOLD])}/mile, "
        f"intervals {format_pace(paces[PaceType.INTERVAL])}/mile",
    ]
    if plan.target_date is not None:
        lines.append(f"Race day: {plan.target_date.isoformat()}")

    upcoming = [w for w in workouts if not w.completed][:_PREVIEW_WORKOUTS]
    if upcoming:
        lines.append("")
        lines.append("Upcoming workouts:")
        for w in upcoming:
            when = w.scheduled_date.strftime("%a %b %d") if w.scheduled_date else f"Week {w.week}"
            lines.append(
                f"- {when}: {w.type.value.title()} {format_distance(w.distance, distance_unit)} "
                f"({format_duration(w.duration)})"
            )
    return "\n".join(lines)
