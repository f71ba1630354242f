"""Tests for PlanBuilder: plan creation, weekly workouts, 14-day blocks."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime, timedelta, timezone
from typing import Callable

import pytest

from plan_generator.exceptions import (
    DegenerateScheduleError,
    InvalidInputError,
    UnsupportedRaceError,
)
from plan_generator.math.vdot import get_paces
from plan_generator.models import (
    PlanGenerationRequest,
    PlanPreferences,
    RaceDistance,
    TrainingPlan,
    WorkoutType,
)
from plan_generator.plan_builder import (
    fit_to_duration,
    generate_14_day_block,
    generate_plan,
    generate_week_workouts,
    weekly_mileage_for_week,
)
from plan_generator.workout_builder.catalog import get_templates
from plan_generator.workout_builder.selector import select_workouts_for_week

RequestFactory = Callable[..., PlanGenerationRequest]


class TestGeneratePlan:
    def test_5k_intermediate_duration(self, request_factory: RequestFactory) -> None:
        plan = generate_plan(request_factory())
        assert 8 <= plan.total_weeks <= 12
        assert plan.total_weeks == 10

    def test_plan_fields(self, five_k_request: PlanGenerationRequest, now: datetime) -> None:
        plan = generate_plan(five_k_request, now=now)
        assert plan.id == f"plan_runner-1_{int(now.timestamp())}"
        assert plan.user_id == "runner-1"
        assert plan.target_race == RaceDistance.FIVE_K
        assert plan.weekly_frequency == 4
        assert plan.current_week == 1
        assert plan.is_active
        assert plan.created_at == plan.updated_at == now
        assert plan.paces == get_paces(45)

    def test_target_date_sets_duration(
        self, request_factory: RequestFactory, block_start: date,
    ) -> None:
        request = request_factory(target_date=block_start + timedelta(weeks=15))
        plan = generate_plan(request, today=block_start)
        assert plan.total_weeks == 15
        assert plan.target_date == block_start + timedelta(weeks=15)

    def test_near_target_date_clamped(
        self, request_factory: RequestFactory, block_start: date,
    ) -> None:
        request = request_factory(target_date=block_start + timedelta(days=10))
        assert generate_plan(request, today=block_start).total_weeks == 8

    def test_vdot_clamped(self, request_factory: RequestFactory) -> None:
        assert generate_plan(request_factory(current_vdot=95)).vdot == 85
        assert generate_plan(request_factory(current_vdot=12)).vdot == 20

    def test_deterministic(self, five_k_request: PlanGenerationRequest, now: datetime) -> None:
        assert generate_plan(five_k_request, now=now) == generate_plan(five_k_request, now=now)

    @pytest.mark.parametrize("frequency", [0, 1, 8, 4.0, True, "4"])
    def test_bad_frequency_raises(self, request_factory: RequestFactory, frequency) -> None:
        with pytest.raises(InvalidInputError, match="weekly_frequency"):
            generate_plan(request_factory(weekly_frequency=frequency))

    def test_unknown_race_raises(self, request_factory: RequestFactory) -> None:
        with pytest.raises(UnsupportedRaceError):
            generate_plan(request_factory(target_race="ultra"))

    def test_unknown_level_raises(self, request_factory: RequestFactory) -> None:
        with pytest.raises(InvalidInputError, match="experience level"):
            generate_plan(request_factory(experience_level="elite"))

    @pytest.mark.parametrize("vdot", [0, -10])
    def test_non_positive_vdot_raises(self, request_factory: RequestFactory, vdot: float) -> None:
        with pytest.raises(InvalidInputError, match="current_vdot"):
            generate_plan(request_factory(current_vdot=vdot))

    def test_non_positive_mileage_raises(self, request_factory: RequestFactory) -> None:
        with pytest.raises(InvalidInputError, match="weekly_mileage"):
            generate_plan(request_factory(weekly_mileage=0))

    def test_rest_days_leaving_too_few_days_raise(self, request_factory: RequestFactory) -> None:
        prefs = PlanPreferences(preferred_rest_days=(0, 1, 2))
        with pytest.raises(InvalidInputError, match="do not fit"):
            generate_plan(request_factory(weekly_frequency=6, preferences=prefs))

    def test_non_positive_duration_cap_raises(self, request_factory: RequestFactory) -> None:
        prefs = PlanPreferences(max_workout_duration=0)
        with pytest.raises(InvalidInputError, match="max_workout_duration"):
            generate_plan(request_factory(preferences=prefs))


class TestWeeklyMileage:
    def test_stated_mileage_times_progression(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        assert weekly_mileage_for_week(five_k_plan, 1, five_k_request) == pytest.approx(21.0)
        assert weekly_mileage_for_week(five_k_plan, 7, five_k_request) == pytest.approx(30.0)

    def test_estimated_when_not_stated(
        self, request_factory: RequestFactory, now: datetime,
    ) -> None:
        request = request_factory(current_vdot=50)
        plan = generate_plan(request, now=now)
        # 5k intermediate at VDOT 50 is 25 miles/week before progression
        assert weekly_mileage_for_week(plan, 7, request) == pytest.approx(25.0)

    def test_plan_over_max_weeks_raises(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        too_long = dataclasses.replace(five_k_plan, total_weeks=60)
        with pytest.raises(InvalidInputError, match="52"):
            weekly_mileage_for_week(too_long, 1, five_k_request)


class TestGenerateWeekWorkouts:
    @pytest.mark.parametrize("frequency", range(2, 8))
    def test_exactly_frequency_workouts(
        self, request_factory: RequestFactory, now: datetime, frequency: int,
    ) -> None:
        request = request_factory(weekly_frequency=frequency, weekly_mileage=30.0)
        plan = generate_plan(request, now=now)
        for week in range(1, plan.total_weeks + 1):
            assert len(generate_week_workouts(plan, week, request)) == frequency

    def test_week_one_workouts(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        workouts = generate_week_workouts(five_k_plan, 1, five_k_request)
        assert [w.type for w in workouts] == [
            WorkoutType.EASY, WorkoutType.TEMPO, WorkoutType.LONG, WorkoutType.EASY,
        ]
        assert [w.distance for w in workouts] == pytest.approx([5.25, 4.2, 6.3, 5.25])
        assert [w.day for w in workouts] == [1, 2, 3, 4]
        assert all(w.scheduled_date is None and not w.completed for w in workouts)

    def test_paces_and_durations(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        paces = five_k_plan.paces
        for w in generate_week_workouts(five_k_plan, 4, five_k_request):
            expected_pace = paces.threshold if w.type == WorkoutType.TEMPO else (
                paces.interval if w.type == WorkoutType.INTERVALS else paces.easy
            )
            assert w.target_pace == expected_pace
            assert w.duration == pytest.approx(w.distance * w.target_pace / 60, abs=1)

    def test_distance_matches_ratio_weighted_mileage(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        for week in range(1, five_k_plan.total_weeks + 1):
            mileage = weekly_mileage_for_week(five_k_plan, week, five_k_request)
            templates = select_workouts_for_week(
                get_templates("5k"), 4, week, five_k_plan.total_weeks,
            )
            workouts = generate_week_workouts(five_k_plan, week, five_k_request)
            expected = mileage * sum(t.distance_ratio for t in templates)
            assert sum(w.distance for w in workouts) == pytest.approx(expected, abs=0.05)

    def test_ids_unique(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        ids = [
            w.id
            for week in (1, 2)
            for w in generate_week_workouts(five_k_plan, week, five_k_request)
        ]
        assert len(ids) == len(set(ids))
        assert ids[0] == f"workout_{five_k_plan.id}_w1_d1"

    def test_description_mentions_pace(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        tempo = generate_week_workouts(five_k_plan, 1, five_k_request)[1]
        assert tempo.description.startswith("4.2 miles tempo @ ")

    def test_duration_cap_shortens_workouts(
        self, request_factory: RequestFactory, now: datetime,
    ) -> None:
        request = request_factory(
            weekly_mileage=40.0, preferences=PlanPreferences(max_workout_duration=30),
        )
        plan = generate_plan(request, now=now)
        workouts = generate_week_workouts(plan, 7, request)
        assert all(w.duration <= 30 for w in workouts)
        long_run = next(w for w in workouts if w.type == WorkoutType.LONG)
        assert long_run.duration == 30
        assert long_run.distance * long_run.target_pace / 60 == pytest.approx(30, abs=0.1)

    @pytest.mark.parametrize("max_duration", [None, 60])
    def test_fit_to_duration_under_cap(self, max_duration) -> None:
        assert fit_to_duration(5.0, 540, max_duration) == (5.0, 45)

    def test_fit_to_duration_over_cap(self) -> None:
        distance, duration = fit_to_duration(5.0, 540, 30)
        assert duration == 30
        assert distance == pytest.approx(30 * 60 / 540)

    def test_week_outside_plan_raises(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        with pytest.raises(InvalidInputError):
            generate_week_workouts(five_k_plan, five_k_plan.total_weeks + 1, five_k_request)

    def test_degenerate_plan_raises(
        self, five_k_plan: TrainingPlan, five_k_request: PlanGenerationRequest,
    ) -> None:
        short = dataclasses.replace(five_k_plan, total_weeks=3)
        with pytest.raises(DegenerateScheduleError):
            generate_week_workouts(short, 1, five_k_request)


class TestGenerate14DayBlock:
    def test_four_runs_gives_eight_workouts(
        self, five_k_request: PlanGenerationRequest, block_start: date, now: datetime,
    ) -> None:
        block = generate_14_day_block(five_k_request, start=block_start, now=now)
        assert len(block) == 8
        dates = [w.scheduled_date for w in block]
        assert len(set(dates)) == 8
        assert all(a < b for a, b in zip(dates, dates[1:]))

    def test_follows_weekday_rotation(
        self, five_k_request: PlanGenerationRequest, block_start: date, now: datetime,
    ) -> None:
        block = generate_14_day_block(five_k_request, start=block_start, now=now)
        assert [w.scheduled_date for w in block] == [
            date(2026, 3, 2), date(2026, 3, 4), date(2026, 3, 6), date(2026, 3, 8),
            date(2026, 3, 9), date(2026, 3, 11), date(2026, 3, 13), date(2026, 3, 15),
        ]
        assert [w.week for w in block] == [1] * 4 + [2] * 4

    @pytest.mark.parametrize("frequency", range(2, 8))
    def test_strictly_increasing_for_every_frequency(
        self,
        request_factory: RequestFactory,
        block_start: date,
        now: datetime,
        frequency: int,
    ) -> None:
        request = request_factory(weekly_frequency=frequency)
        block = generate_14_day_block(request, start=block_start, now=now)
        dates = [w.scheduled_date for w in block]
        assert len(block) == 2 * frequency
        assert all(a < b for a, b in zip(dates, dates[1:]))
        assert dates[0] >= block_start
        assert dates[-1] < block_start + timedelta(days=15)

    def test_back_to_back_hard_days_avoided(
        self, request_factory: RequestFactory, block_start: date, now: datetime,
    ) -> None:
        request = request_factory(
            weekly_frequency=5, preferences=PlanPreferences(avoid_back_to_back=True),
        )
        block = generate_14_day_block(request, start=block_start, now=now)
        for week in (1, 2):
            hard = sorted(w.scheduled_date for w in block if w.week == week and w.is_hard)
            assert all((b - a).days > 1 for a, b in zip(hard, hard[1:]))

    def test_rest_days_respected(
        self, request_factory: RequestFactory, block_start: date, now: datetime,
    ) -> None:
        request = request_factory(
            weekly_frequency=5, preferences=PlanPreferences(preferred_rest_days=(5, 6)),
        )
        block = generate_14_day_block(request, start=block_start, now=now)
        # Friday and Saturday (date.weekday() 4 and 5) stay free
        assert not {w.scheduled_date.weekday() for w in block} & {4, 5}

    def test_deterministic(
        self, five_k_request: PlanGenerationRequest, block_start: date, now: datetime,
    ) -> None:
        first = generate_14_day_block(five_k_request, start=block_start, now=now)
        second = generate_14_day_block(five_k_request, start=block_start, now=now)
        assert first == second

    def test_default_start_is_today(self, five_k_request: PlanGenerationRequest) -> None:
        now = datetime(2026, 3, 4, 8, 0, tzinfo=timezone.utc)  # Wednesday
        block = generate_14_day_block(five_k_request, now=now)
        assert block[0].scheduled_date == date(2026, 3, 9)
