"""Logged run supplied by the run-logging collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RunRecord:
    """A single logged run.

    Attributes:
        distance: Distance in miles.
        duration: Elapsed time in seconds, if recorded.
        date: Day the run took place, if known.
        perceived_effort: RPE on a 1-10 scale, if recorded.
    """

    distance: float
    duration: float | None = None
    date: date | None = None
    perceived_effort: int | None = None
