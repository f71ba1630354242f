"""Custom exception hierarchy for the plan generator."""

from __future__ import annotations


class PlanGeneratorError(Exception):
    """Base exception for all plan_generator errors."""


class InvalidInputError(PlanGeneratorError, ValueError):
    """A structurally invalid value (non-positive distance/time, bad frequency, ...)."""


class UnsupportedRaceError(PlanGeneratorError):
    """The requested target race has no workout catalog."""

    def __init__(self, race: object) -> None:
        super().__init__(f"Unsupported target race: {race!r}")
        self.race = race


class DegenerateScheduleError(PlanGeneratorError):
    """A plan is too short to be periodized (fewer than MIN_PLAN_WEEKS)."""

    def __init__(self, total_weeks: int, min_weeks: int) -> None:
        super().__init__(
            f"Plan must be at least {min_weeks} weeks, got {total_weeks}"
        )
        self.total_weeks = total_weeks
