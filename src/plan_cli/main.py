"""plan-generator command line.

Usage:
    plan-generator block --request request.json --format text
    plan-generator block --user-id u1 --vdot 45 --race 5k --frequency 4 \
        --level intermediate --start 2026-03-01 --format csv
    plan-generator paces --vdot 50
    plan-generator paces --race-miles 3.1 --race-time 20:00
    plan-generator daemon --once      # single run (for cron)
    plan-generator daemon             # APScheduler weekly loop
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Sequence

from plan_generator.exceptions import InvalidInputError, PlanGeneratorError
from plan_generator.formatting import format_pace, format_race_time, parse_pace
from plan_generator.math.vdot import (
    calculate_vdot_from_race,
    get_equivalent_times,
    get_paces,
    suggest_target_vdot,
)
from plan_generator.models import (
    InjuryRecord,
    PlanGenerationRequest,
    PlanPreferences,
)
from plan_generator.models.enums import PaceType
from plan_generator.plan_builder import generate_plan, schedule_block
from plan_generator.serialization import (
    build_plan_summary,
    to_json_string,
    workouts_to_dataframe,
)

from plan_cli.config import (
    LOG_LEVEL,
    OUTPUT_DIR,
    REQUEST_PATH,
    SCHEDULER_DAY,
    SCHEDULER_HOUR,
    SCHEDULER_MINUTE,
)

logger = logging.getLogger(__name__)

# Exit status when the engine rejects the input
EXIT_INVALID_INPUT = 2


# ---------------------------------------------------------------------------
# Request loading
# ---------------------------------------------------------------------------


def request_from_dict(data: dict) -> PlanGenerationRequest:
    """Build a PlanGenerationRequest from decoded JSON.

    Keys match the dataclass field names; ``target_date`` is ISO-8601.

    Raises:
        InvalidInputError: If a required key is missing or a date is malformed.
    """
    try:
        target_date = data.get("target_date")
        prefs = data.get("preferences")
        return PlanGenerationRequest(
            user_id=str(data["user_id"]),
            current_vdot=float(data["current_vdot"]),
            target_race=data["target_race"],
            weekly_frequency=data["weekly_frequency"],
            experience_level=data["experience_level"],
            target_date=date.fromisoformat(target_date) if target_date else None,
            weekly_mileage=data.get("weekly_mileage"),
            injury_history=tuple(
                InjuryRecord(**injury) for injury in data.get("injury_history", ())
            ),
            preferences=(
                PlanPreferences(
                    avoid_back_to_back=prefs.get("avoid_back_to_back", False),
                    preferred_rest_days=tuple(prefs.get("preferred_rest_days", ())),
                    max_workout_duration=prefs.get("max_workout_duration"),
                )
                if prefs
                else None
            ),
        )
    except KeyError as exc:
        raise InvalidInputError(f"Request is missing {exc.args[0]!r}") from None
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Malformed request: {exc}") from None


def load_request(path: Path) -> PlanGenerationRequest:
    """Load a PlanGenerationRequest from a JSON file."""
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"{path} is not valid JSON: {exc}") from None
    return request_from_dict(data)


def _request_from_args(args: argparse.Namespace) -> PlanGenerationRequest:
    if args.request:
        return load_request(args.request)

    missing = [
        flag for flag, value in (
            ("--user-id", args.user_id),
            ("--vdot", args.vdot),
            ("--race", args.race),
            ("--frequency", args.frequency),
            ("--level", args.level),
        )
        if value is None
    ]
    if missing:
        raise InvalidInputError(
            f"Either --request or all of {', '.join(missing)} must be given"
        )

    prefs = None
    if args.rest_days or args.avoid_back_to_back or args.max_duration:
        prefs = PlanPreferences(
            avoid_back_to_back=args.avoid_back_to_back,
            preferred_rest_days=tuple(args.rest_days or ()),
            max_workout_duration=args.max_duration,
        )
    return PlanGenerationRequest(
        user_id=args.user_id,
        current_vdot=args.vdot,
        target_race=args.race,
        weekly_frequency=args.frequency,
        experience_level=args.level,
        target_date=args.target_date,
        weekly_mileage=args.weekly_mileage,
        preferences=prefs,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def render_block(
    request: PlanGenerationRequest,
    start: date,
    fmt: str = "json",
    now: datetime | None = None,
    distance_unit: str = "miles",
) -> str:
    """Generate a 14-day block and render it as json, csv or text."""
    now = now or datetime.now(timezone.utc)
    plan = generate_plan(request, now=now, today=start)
    workouts = schedule_block(plan, request, start)

    if fmt == "csv":
        return workouts_to_dataframe(workouts).to_csv(index=False)
    if fmt == "text":
        target = suggest_target_vdot(
            plan.vdot, request.experience_level, plan.total_weeks,
        )
        return build_plan_summary(
            plan, workouts, target_vdot=target, distance_unit=distance_unit,
        )
    return to_json_string(workouts, plan=plan)


def _cmd_block(args: argparse.Namespace) -> int:
    request = _request_from_args(args)
    output = render_block(
        request, args.start or date.today(), args.format, distance_unit=args.units,
    )
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output)
        logger.info("Wrote %s block to %s", args.format, args.output)
    else:
        print(output)
    return 0


def render_paces(vdot: float) -> str:
    """Training paces and equivalent race times for a VDOT, one per line."""
    paces = get_paces(vdot)
    lines = [f"VDOT {vdot:.1f}", "", "Training paces (per mile):"]
    lines += [
        f"  {pace_type.value:<11} {format_pace(paces[pace_type])}"
        for pace_type in PaceType
    ]
    lines += ["", "Equivalent race times:"]
    lines += [
        f"  {name:<14} {format_race_time(seconds)}"
        for name, seconds in get_equivalent_times(vdot).items()
    ]
    return "\n".join(lines)


def _cmd_paces(args: argparse.Namespace) -> int:
    if args.vdot is not None:
        vdot = args.vdot
    elif args.race_miles is not None and args.race_time is not None:
        vdot = calculate_vdot_from_race(args.race_miles, _parse_race_time(args.race_time))
    else:
        raise InvalidInputError("Give --vdot, or both --race-miles and --race-time")
    print(render_paces(vdot))
    return 0


def _parse_race_time(value: str) -> int:
    """Parse 'H:MM:SS' or 'M:SS' into seconds."""
    if value.count(":") == 2:
        hours, rest = value.split(":", 1)
        if not hours.isdigit():
            raise InvalidInputError(f"Race time must look like H:MM:SS, got {value!r}")
        return int(hours) * 3600 + parse_pace(rest)
    return parse_pace(value)


def weekly_job(
    request_path: Path = REQUEST_PATH,
    output_dir: Path = OUTPUT_DIR,
    today: date | None = None,
) -> Path | None:
    """Execute one scheduler cycle: build next block, write it as JSON.

    Returns:
        The file written, or None if the cycle failed.
    """
    logger.info("Starting weekly plan job")
    today = today or date.today()

    try:
        request = load_request(request_path)
        output = render_block(request, today, "json")
    except FileNotFoundError:
        logger.error("Request not found at %s", request_path)
        return None
    except PlanGeneratorError as exc:
        logger.error("Plan generation failed: %s", exc)
        return None

    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{request.user_id}_{today.isoformat()}.json"
    path.write_text(output)
    logger.info("Weekly plan job complete, wrote %s", path)
    return path


def _cmd_daemon(args: argparse.Namespace) -> int:
    if args.once:
        return 0 if weekly_job() else 1

    from apscheduler.schedulers.blocking import BlockingScheduler

    scheduler = BlockingScheduler()
    scheduler.add_job(
        weekly_job,
        "cron",
        day_of_week=SCHEDULER_DAY,
        hour=SCHEDULER_HOUR,
        minute=SCHEDULER_MINUTE,
        id="weekly_plan_job",
    )
    logger.info(
        "Scheduler started, weekly job on %s at %02d:%02d",
        SCHEDULER_DAY,
        SCHEDULER_HOUR,
        SCHEDULER_MINUTE,
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plan-generator",
        description="Generate VDOT-based running training plans",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    block = sub.add_parser("block", help="Generate the next 14-day block")
    block.add_argument("--request", type=Path, help="JSON request file")
    block.add_argument("--user-id")
    block.add_argument("--vdot", type=float)
    block.add_argument("--race", help="5k, 10k, half_marathon or marathon")
    block.add_argument("--frequency", type=int, help="Runs per week (2-7)")
    block.add_argument("--level", help="beginner, intermediate or advanced")
    block.add_argument("--target-date", type=date.fromisoformat)
    block.add_argument("--weekly-mileage", type=float)
    block.add_argument(
        "--rest-days", type=int, nargs="*", help="Weekdays to keep free (Sunday = 0)",
    )
    block.add_argument("--avoid-back-to-back", action="store_true")
    block.add_argument("--max-duration", type=int, help="Workout cap in minutes")
    block.add_argument(
        "--start", type=date.fromisoformat, help="Block starts the Monday on or after",
    )
    block.add_argument("--format", choices=("json", "csv", "text"), default="json")
    block.add_argument(
        "--units", choices=("miles", "km"), default="miles", help="Distances in text output",
    )
    block.add_argument("--output", type=Path, help="Write to file instead of stdout")
    block.set_defaults(func=_cmd_block)

    paces = sub.add_parser("paces", help="Show training paces for a fitness level")
    paces.add_argument("--vdot", type=float)
    paces.add_argument("--race-miles", type=float)
    paces.add_argument("--race-time", help="Finish time, H:MM:SS or M:SS")
    paces.set_defaults(func=_cmd_paces)

    daemon = sub.add_parser("daemon", help="Regenerate the block on a weekly schedule")
    daemon.add_argument("--once", action="store_true", help="Run once and exit")
    daemon.set_defaults(func=_cmd_daemon)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except PlanGeneratorError as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_INPUT
    except FileNotFoundError as exc:
        logger.error("File not found: %s", exc.filename)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
