"""Shared test fixtures: plan requests, fixed clocks, generated plans."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable

import pytest

from plan_generator.models import PlanGenerationRequest, TrainingPlan
from plan_generator.plan_builder import generate_plan

# Fixed clock so generated ids and dates are reproducible
FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
BLOCK_START = date(2026, 3, 1)  # Sunday; blocks start Monday 2026-03-02


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def block_start() -> date:
    return BLOCK_START


@pytest.fixture
def request_factory() -> Callable[..., PlanGenerationRequest]:
    """Build a PlanGenerationRequest with intermediate 5K defaults."""

    def factory(**overrides) -> PlanGenerationRequest:
        defaults = dict(
            user_id="runner-1",
            current_vdot=45.0,
            target_race="5k",
            weekly_frequency=4,
            experience_level="intermediate",
        )
        defaults.update(overrides)
        return PlanGenerationRequest(**defaults)

    return factory


@pytest.fixture
def five_k_request(
    request_factory: Callable[..., PlanGenerationRequest],
) -> PlanGenerationRequest:
    """Intermediate runner, VDOT 45, 4 runs/week, 30 miles/week."""
    return request_factory(weekly_mileage=30.0)


@pytest.fixture
def five_k_plan(five_k_request: PlanGenerationRequest) -> TrainingPlan:
    """10-week plan built from five_k_request."""
    return generate_plan(five_k_request, now=FIXED_NOW, today=BLOCK_START)
