"""Formatting helpers for paces, race times and workout durations."""

from __future__ import annotations

from plan_generator.exceptions import InvalidInputError
from plan_generator.models.enums import MILES_PER_KM


def format_pace(s_per_mile: float) -> str:
    """Convert seconds-per-mile to 'M:SS'. e.g. 493 -> '8:13'."""
    if s_per_mile <= 0:
        return "--"
    total = round(s_per_mile)
    return f"{total // 60}:{total % 60:02d}"


def parse_pace(pace: str) -> int:
    """Convert 'M:SS' to seconds. e.g. '8:13' -> 493."""
    try:
        minutes, seconds = (int(part) for part in pace.strip().split(":"))
    except ValueError:
        raise InvalidInputError(f"Pace must look like M:SS, got {pace!r}") from None
    if minutes < 0 or not 0 <= seconds < 60:
        raise InvalidInputError(f"Pace must look like M:SS, got {pace!r}")
    return minutes * 60 + seconds


def format_race_time(seconds: float) -> str:
    """Convert seconds to 'H:MM:SS' (or 'M:SS' under an hour)."""
    if seconds <= 0:
        return "--"
    total = round(seconds)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def format_duration(minutes: float) -> str:
    """Convert minutes to human string. e.g. 90 -> '1h 30m'."""
    if minutes <= 0:
        return "0m"
    h = int(minutes) // 60
    m = int(minutes) % 60
    if h > 0 and m > 0:
        return f"{h}h {m}m"
    if h > 0:
        return f"{h}h"
    return f"{m}m"


def format_distance(miles: float, unit: str = "miles") -> str:
    """Format a distance in miles, or converted to km."""
    if unit == "km":
        return f"{miles / MILES_PER_KM:.2f} km"
    return f"{miles:.2f} miles"
