"""Enumerations and physical constants for the plan generator.

All thresholds and constants cite their published source where one exists.
Phase-boundary values without a citation are coaching judgment calls.
"""

from __future__ import annotations

from enum import Enum, IntEnum, auto

from plan_generator.exceptions import InvalidInputError, UnsupportedRaceError


class RaceDistance(str, Enum):
    """Target races supported by the workout catalog."""

    FIVE_K = "5k"
    TEN_K = "10k"
    HALF_MARATHON = "half_marathon"
    MARATHON = "marathon"

    @property
    def distance_miles(self) -> float:
        return RACE_DISTANCE_MILES[self]

    @classmethod
    def parse(cls, value: RaceDistance | str) -> RaceDistance:
        """Coerce a race key into a RaceDistance.

        Raises:
            UnsupportedRaceError: If *value* is not a known race key.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedRaceError(value) from None


class ExperienceLevel(str, Enum):
    """Runner experience level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: ExperienceLevel | str) -> ExperienceLevel:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(f"Unknown experience level: {value!r}") from None


class WorkoutType(str, Enum):
    """Workout archetypes."""

    EASY = "easy"
    LONG = "long"
    TEMPO = "tempo"
    INTERVALS = "intervals"
    RECOVERY = "recovery"
    RACE = "race"


class PaceType(str, Enum):
    """Daniels training pace zones, slowest first."""

    EASY = "easy"
    MARATHON = "marathon"
    THRESHOLD = "threshold"
    INTERVAL = "interval"
    REPETITION = "repetition"


class TrainingPhase(IntEnum):
    """Macrocycle phases of a periodized plan."""

    BUILD = auto()
    PEAK = auto()
    TAPER = auto()


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------
METERS_PER_MILE = 1609.344
MILES_PER_KM = 0.621371

RACE_DISTANCE_MILES: dict[RaceDistance, float] = {
    RaceDistance.FIVE_K: 3.1,
    RaceDistance.TEN_K: 6.2,
    RaceDistance.HALF_MARATHON: 13.1,
    RaceDistance.MARATHON: 26.2,
}

# Distances used for the equivalent-performance table (miles)
EQUIVALENT_RACE_MILES: dict[str, float] = {
    "mile": 1.0,
    "5k": 3.1,
    "10k": 6.2,
    "half_marathon": 13.1,
    "marathon": 26.2,
}

# ---------------------------------------------------------------------------
# VDOT constants: Daniels & Gilbert (1979), Oxygen Power
# ---------------------------------------------------------------------------
VDOT_MIN = 20.0
VDOT_MAX = 85.0
DEFAULT_VDOT = 35  # Cold start when no usable run history exists

# Oxygen cost of running: VO2 = a + b*v + c*v^2 (v in m/min)
VO2_COST_INTERCEPT = -4.60
VO2_COST_LINEAR = 0.182258
VO2_COST_QUADRATIC = 0.000104

# Fraction of VO2max sustainable for t minutes:
# %max = 0.8 + a*e^(-b*t) + c*e^(-d*t)
PCT_MAX_BASE = 0.8
PCT_MAX_FAST_COEFF = 0.1894393
PCT_MAX_FAST_RATE = 0.012778
PCT_MAX_SLOW_COEFF = 0.2989558
PCT_MAX_SLOW_RATE = 0.1932605

# Training intensity as fraction of VDOT, calibrated against Daniels'
# Running Formula tables (3rd ed., 2013) at VDOT 40/50/60
ZONE_PCT_VO2MAX: dict[PaceType, float] = {
    PaceType.EASY: 0.70,
    PaceType.MARATHON: 0.82,
    PaceType.THRESHOLD: 0.88,
    PaceType.INTERVAL: 0.98,
    PaceType.REPETITION: 1.075,
}

# Initial bisection bracket for race-time prediction (minutes); widened as needed
PREDICT_MIN_MINUTES = 0.5
PREDICT_MAX_MINUTES = 2000.0
PREDICT_ITERATIONS = 100

# Recent-run aggregation
MAX_RUN_DISTANCE_MILES = 26.2
RUN_RECENCY_DECAY_DAYS = 90
MIN_RECENCY_WEIGHT = 0.1
DEFAULT_EFFORT_WEIGHT = 0.8
RPE_MIN = 1
RPE_MAX = 10

# Maximum VDOT gain per week of structured training by experience level.
# Beginners adapt fastest (Daniels 2013, ch. 3).
IMPROVEMENT_RATE_PER_WEEK: dict[ExperienceLevel, float] = {
    ExperienceLevel.BEGINNER: 0.8,
    ExperienceLevel.INTERMEDIATE: 0.5,
    ExperienceLevel.ADVANCED: 0.3,
}
# Rates above are exact at this horizon; shorter/longer horizons scale by sqrt
IMPROVEMENT_REFERENCE_WEEKS = 12
MIN_IMPROVEMENT = 0.1

# Starting VDOT when no baseline run is known
DEFAULT_VDOT_BY_LEVEL: dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 35,
    ExperienceLevel.INTERMEDIATE: 45,
    ExperienceLevel.ADVANCED: 55,
}

# ---------------------------------------------------------------------------
# Plan duration and volume
# ---------------------------------------------------------------------------
MIN_PLAN_WEEKS = 4
MAX_PLAN_WEEKS = 52

# Target-date plans are clamped to this window
TARGET_DATE_MIN_WEEKS = 8
TARGET_DATE_MAX_WEEKS = 24

MIN_WEEKLY_FREQUENCY = 2
MAX_WEEKLY_FREQUENCY = 7

BASE_PLAN_WEEKS: dict[RaceDistance, dict[ExperienceLevel, int]] = {
    RaceDistance.FIVE_K: {
        ExperienceLevel.BEGINNER: 8,
        ExperienceLevel.INTERMEDIATE: 10,
        ExperienceLevel.ADVANCED: 12,
    },
    RaceDistance.TEN_K: {
        ExperienceLevel.BEGINNER: 10,
        ExperienceLevel.INTERMEDIATE: 12,
        ExperienceLevel.ADVANCED: 14,
    },
    RaceDistance.HALF_MARATHON: {
        ExperienceLevel.BEGINNER: 12,
        ExperienceLevel.INTERMEDIATE: 16,
        ExperienceLevel.ADVANCED: 18,
    },
    RaceDistance.MARATHON: {
        ExperienceLevel.BEGINNER: 16,
        ExperienceLevel.INTERMEDIATE: 20,
        ExperienceLevel.ADVANCED: 24,
    },
}

# Weekly mileage at VDOT 50
BASE_WEEKLY_MILEAGE: dict[RaceDistance, dict[ExperienceLevel, int]] = {
    RaceDistance.FIVE_K: {
        ExperienceLevel.BEGINNER: 15,
        ExperienceLevel.INTERMEDIATE: 25,
        ExperienceLevel.ADVANCED: 35,
    },
    RaceDistance.TEN_K: {
        ExperienceLevel.BEGINNER: 20,
        ExperienceLevel.INTERMEDIATE: 30,
        ExperienceLevel.ADVANCED: 40,
    },
    RaceDistance.HALF_MARATHON: {
        ExperienceLevel.BEGINNER: 25,
        ExperienceLevel.INTERMEDIATE: 40,
        ExperienceLevel.ADVANCED: 55,
    },
    RaceDistance.MARATHON: {
        ExperienceLevel.BEGINNER: 30,
        ExperienceLevel.INTERMEDIATE: 50,
        ExperienceLevel.ADVANCED: 70,
    },
}
MILEAGE_REFERENCE_VDOT = 50.0
MIN_MILEAGE_SCALE = 0.7
MAX_MILEAGE_SCALE = 1.3

# ---------------------------------------------------------------------------
# Periodization phase allocation: Bosquet et al. (2007) taper meta-analysis;
# peak/taper fractions follow Pfitzinger & Douglas (2009)
# ---------------------------------------------------------------------------
BUILD_PHASE_FRACTION = 0.7   # First 70% of weeks
PEAK_PHASE_FRACTION = 0.2    # Next 20%; taper takes the remainder

BUILD_START_FACTOR = 0.7     # Week 1 volume relative to peak
BUILD_END_FACTOR = 1.0
PEAK_START_FACTOR = 0.95
PEAK_END_FACTOR = 1.0
TAPER_START_FACTOR = 1.0
TAPER_END_FACTOR = 0.6       # 40% reduction by race week (Mujika & Padilla 2003)

# ---------------------------------------------------------------------------
# Workout selection
# ---------------------------------------------------------------------------
# Plan progress (week / total) below which quality work is tempo only
TEMPO_ONLY_PHASE_END = 0.3
# Plan progress at or above which quality work is interval-biased
INTERVAL_BIAS_PHASE_START = 0.8
# Every Nth week the 4th run becomes a recovery run
RECOVERY_RUN_WEEK_INTERVAL = 3

HARD_WORKOUT_TYPES = frozenset({
    WorkoutType.TEMPO,
    WorkoutType.INTERVALS,
    WorkoutType.LONG,
})

# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------
# Weekday numbering is Sunday = 0 ... Saturday = 6.
# Default rotation spreads runs out: Mon, Wed, Fri, Sun, Tue, Thu, Sat
DEFAULT_WEEKDAY_ROTATION: tuple[int, ...] = (1, 3, 5, 0, 2, 4, 6)
DAYS_PER_WEEK = 7
BLOCK_WEEKS = 2
