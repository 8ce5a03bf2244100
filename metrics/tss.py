"""Training Stress Score (TSS) for run and bike activities."""

import math

from metrics.activity import Activity, Discipline
from metrics.config import (
    DEFAULT_RESTING_HR,
    MIN_ACTIVITY_DURATION_SECONDS,
    MIN_HR_SAMPLES,
    TRIMP_FACTOR_DEFAULT,
    TSS_DURATION_FACTORS,
)
from metrics.registry import MetricDefinition
from metrics.values import AggregationKind, ResultSet

WORKOUT_TIME = "workout_time"
RUN_TSS = "run_tss"
BIKE_TSS = "bike_tss"


def compute_trimp(
    hr_samples: list[float],
    resting_hr: int | None,
    max_hr: int,
    duration_seconds: float,
    gender_factor: float = TRIMP_FACTOR_DEFAULT,
) -> float:
    """Compute TRIMP (Training Impulse) from HR samples.

    Uses Bannister's TRIMP formula:
    TRIMP = duration × HRr × 0.64 × e^(gender_factor × HRr)

    Where HRr = (HR - resting) / (max - resting) is the heart rate reserve fraction.

    Args:
        hr_samples: List of heart rate values
        resting_hr: Resting heart rate (defaults to 60 if not provided)
        max_hr: Maximum heart rate
        duration_seconds: Total duration in seconds
        gender_factor: Exponential weighting (1.92 male, 1.67 female)

    Returns:
        TRIMP value
    """
    if not hr_samples or max_hr <= 0:
        return 0.0

    resting = resting_hr or DEFAULT_RESTING_HR

    if max_hr <= resting:
        return 0.0

    valid_samples = [hr for hr in hr_samples if hr > resting]
    if not valid_samples:
        return 0.0

    avg_hr = sum(valid_samples) / len(valid_samples)
    hr_reserve = (avg_hr - resting) / (max_hr - resting)
    hr_reserve = max(0, min(1, hr_reserve))

    duration_minutes = duration_seconds / 60
    return duration_minutes * hr_reserve * 0.64 * math.exp(gender_factor * hr_reserve)


def compute_hr_tss(
    trimp: float,
    lthr: int,
    resting_hr: int | None,
    max_hr: int,
) -> float:
    """Convert TRIMP to a TSS-like score.

    Normalizes TRIMP relative to a 1-hour threshold effort.

    Returns:
        TSS value (100 = 1 hour at threshold)
    """
    if trimp <= 0 or max_hr <= 0:
        return 0.0

    resting = resting_hr or DEFAULT_RESTING_HR

    if max_hr <= resting:
        return 0.0

    lthr_reserve = (lthr - resting) / (max_hr - resting)
    lthr_reserve = max(0.1, min(1, lthr_reserve))  # Clamp with minimum

    threshold_trimp = 60 * lthr_reserve * 0.64 * math.exp(TRIMP_FACTOR_DEFAULT * lthr_reserve)

    if threshold_trimp <= 0:
        return 0.0

    return (trimp / threshold_trimp) * 100


def compute_duration_tss(discipline: Discipline, duration_seconds: float) -> float:
    """Estimate run or bike TSS from duration when HR data is unavailable."""
    if duration_seconds < MIN_ACTIVITY_DURATION_SECONDS:
        return 0.0

    factor = TSS_DURATION_FACTORS[discipline.value]

    hours = duration_seconds / 3600
    return factor * hours


def compute_stress(activity: Activity, duration: float, hr_values: dict | None) -> float:
    """TSS for one activity, HR-based when possible, else from duration."""
    if duration < MIN_ACTIVITY_DURATION_SECONDS:
        return 0.0

    hr_values = hr_values or {}
    max_hr = hr_values.get("max_hr")
    lthr = hr_values.get("lthr")
    resting_hr = hr_values.get("resting_hr")

    hr_samples = [s.heart_rate for s in activity.samples if s.heart_rate]
    if max_hr and lthr and len(hr_samples) >= MIN_HR_SAMPLES:
        trimp = compute_trimp(
            hr_samples=hr_samples,
            resting_hr=resting_hr,
            max_hr=max_hr,
            duration_seconds=duration,
        )
        if trimp > 0:
            return compute_hr_tss(trimp=trimp, lthr=lthr, resting_hr=resting_hr, max_hr=max_hr)

    return compute_duration_tss(activity.discipline, duration)


def compute_workout_time(activity: Activity, results: ResultSet, config) -> float:
    return activity.duration


def _compute_tss(symbol: str):
    def compute(activity: Activity, results: ResultSet, config) -> float:
        duration = results.value_of(WORKOUT_TIME, needed_by=symbol)
        hr_values = config.heart_rate_values() if config is not None else None
        return compute_stress(activity, duration, hr_values)

    return compute


WORKOUT_TIME_METRIC = MetricDefinition(
    symbol=WORKOUT_TIME,
    name="Duration",
    compute=compute_workout_time,
    aggregation=AggregationKind.TOTAL,
    metric_units="seconds",
    imperial_units="seconds",
)

RUN_TSS_METRIC = MetricDefinition(
    symbol=RUN_TSS,
    name="Run TSS",
    compute=_compute_tss(RUN_TSS),
    applicable=lambda activity: activity.is_run,
    dependencies=(WORKOUT_TIME,),
    aggregation=AggregationKind.TOTAL,
)

BIKE_TSS_METRIC = MetricDefinition(
    symbol=BIKE_TSS,
    name="Bike TSS",
    compute=_compute_tss(BIKE_TSS),
    applicable=lambda activity: activity.is_bike,
    dependencies=(WORKOUT_TIME,),
    aggregation=AggregationKind.TOTAL,
)


def register_tss(registry) -> None:
    """Add the run and bike stress metrics to a registry."""
    registry.register(WORKOUT_TIME_METRIC)
    registry.register(RUN_TSS_METRIC)
    registry.register(BIKE_TSS_METRIC)
