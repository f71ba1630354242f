"""Training pace zones derived from a VDOT score."""

from __future__ import annotations

from dataclasses import dataclass

from plan_generator.models.enums import PaceType


@dataclass(frozen=True)
class VDOTPaces:
    """Five Daniels training paces in seconds per mile.

    Larger values are slower: easy > marathon > threshold > interval > repetition.
    """

    easy: int
    marathon: int
    threshold: int
    interval: int
    repetition: int

    def __getitem__(self, pace_type: PaceType | str) -> int:
        return getattr(self, PaceType(pace_type).value)

    def as_dict(self) -> dict[str, int]:
        return {pace_type.value: self[pace_type] for pace_type in PaceType}
