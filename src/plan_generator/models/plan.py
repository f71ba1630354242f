"""TrainingPlan — the periodized plan value object."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime

from plan_generator.models.enums import RaceDistance
from plan_generator.models.paces import VDOTPaces


@dataclass(frozen=True)
class TrainingPlan:
    """A generated plan. Never edited in place; superseded plans are deactivated.

    ``id`` is provisional; the persistence collaborator assigns the durable one.
    """

    id: str
    user_id: str
    vdot: float
    weekly_frequency: int
    target_race: RaceDistance
    total_weeks: int
    paces: VDOTPaces
    created_at: datetime
    updated_at: datetime
    target_date: date | None = None
    current_week: int = 1
    is_active: bool = True

    def deactivate(self, at: datetime) -> TrainingPlan:
        """Return an inactive copy stamped with *at*."""
        return dataclasses.replace(self, is_active=False, updated_at=at)
