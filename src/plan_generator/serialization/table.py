"""Tabular view of workouts for CSV export and quick inspection."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from plan_generator.formatting import format_pace
from plan_generator.models.workout import Workout

COLUMNS = [
    "scheduled_date",
    "week",
    "day",
    "type",
    "distance",
    "duration",
    "target_pace",
    "pace",
    "completed",
    "description",
]


def workouts_to_dataframe(workouts: Iterable[Workout]) -> pd.DataFrame:
    """One row per workout, ordered by scheduled date, then week and day.

    ``pace`` is the target pace formatted as M:SS; unscheduled workouts have
    a missing ``scheduled_date``.
    """
    rows = [
        {
            "scheduled_date": (
                pd.Timestamp(w.scheduled_date) if w.scheduled_date else pd.NaT
            ),
            "week": w.week,
            "day": w.day,
            "type": w.type.value,
            "distance": w.distance,
            "duration": w.duration,
            "target_pace": w.target_pace,
            "pace": format_pace(w.target_pace),
            "completed": w.completed,
            "description": w.description,
        }
        for w in workouts
    ]
    frame = pd.DataFrame(rows, columns=COLUMNS)
    if frame.empty:
        return frame
    return frame.sort_values(
        ["scheduled_date", "week", "day"], na_position="last",
    ).reset_index(drop=True)
