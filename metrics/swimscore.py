"""SwimScore family of metrics.

xPower Swim feeds xPace Swim, the relative intensity against swimming
threshold power (STP), and finally SwimScore, calibrated so that one hour
at threshold scores 100.
"""

import logging
import math

from metrics.activity import Activity, Discipline
from metrics.config import CV_TAG, METERS_PER_YARD, PACE_DISTANCE_M
from metrics.registry import MetricDefinition
from metrics.values import AggregationKind, Reading, ResultSet
from metrics.xpower import estimate_xpower, swimming_power, swimming_speed

logger = logging.getLogger(__name__)

XPOWER = "swimscore_xpower"
XPACE = "swimscore_xpace"
THRESHOLD_POWER = "swimscore_tp"
RELATIVE_INTENSITY = "swimscore_ri"
SWIMSCORE = "swimscore"


def is_swim(activity: Activity) -> bool:
    return activity.is_swim


def pace_from_power(weight: float, watts: float) -> float:
    """Pace in minutes per 100 m that needs the given power.

    Returns 0 when the power maps to no forward speed.
    """
    speed = swimming_speed(weight, watts)
    if speed <= 0:
        return 0.0
    return (PACE_DISTANCE_M / 60.0) / speed


def parse_cv_tag(value: str | None) -> float:
    """Critical velocity override (kph) from a tag; 0 if unset or unusable."""
    if not value:
        return 0.0
    try:
        cv = float(value.strip())
    except ValueError:
        return 0.0
    return cv if math.isfinite(cv) and cv > 0 else 0.0


def threshold_speed_kph(activity: Activity, config) -> float:
    """Critical velocity for an activity: tag override, then configuration.

    Returns 0 when neither is set.
    """
    cv = parse_cv_tag(activity.get_tag(CV_TAG))
    if cv:
        return cv

    if config is None or activity.start_date is None:
        return 0.0

    configured = config.threshold_speed(Discipline.SWIM, activity.start_date)
    if not configured or configured <= 0:
        logger.debug("No swim critical velocity configured for %s", activity.start_date)
        return 0.0
    return configured


def compute_xpower(activity: Activity, results: ResultSet, config) -> Reading:
    xpower, secs = estimate_xpower(activity.samples, activity.interval, activity.weight)
    return Reading(xpower, secs)


def compute_xpace(activity: Activity, results: ResultSet, config) -> float:
    watts = results.value_of(XPOWER, needed_by=XPACE)
    return pace_from_power(activity.weight, watts)


def compute_threshold_power(activity: Activity, results: ResultSet, config) -> float:
    cv = threshold_speed_kph(activity, config)
    return swimming_power(activity.weight, cv / 3.6)


def compute_relative_intensity(activity: Activity, results: ResultSet, config) -> Reading:
    xpower = results.require(XPOWER, timed=True, needed_by=RELATIVE_INTENSITY)
    stp = results.value_of(THRESHOLD_POWER, needed_by=RELATIVE_INTENSITY)
    reli = xpower.value / stp if stp else 0.0
    return Reading(reli, xpower.count)


def compute_swimscore(activity: Activity, results: ResultSet, config) -> float:
    xpower = results.require(XPOWER, timed=True, needed_by=SWIMSCORE)
    sri = results.value_of(RELATIVE_INTENSITY, needed_by=SWIMSCORE)
    stp = results.value_of(THRESHOLD_POWER, needed_by=SWIMSCORE)

    norm_work = xpower.value * xpower.count
    raw_score = norm_work * sri
    work_in_an_hour_at_stp = stp * 3600
    if not work_in_an_hour_at_stp:
        return 0.0
    return raw_score / work_in_an_hour_at_stp * 100.0


XPOWER_SWIM = MetricDefinition(
    symbol=XPOWER,
    name="xPower Swim",
    compute=compute_xpower,
    applicable=is_swim,
    metric_units="watts",
    imperial_units="watts",
)

XPACE_SWIM = MetricDefinition(
    symbol=XPACE,
    name="xPace Swim",
    compute=compute_xpace,
    applicable=is_swim,
    dependencies=(XPOWER,),
    metric_units="min/100m",
    imperial_units="min/100yd",
    conversion=METERS_PER_YARD,
    precision=1,
)

STP = MetricDefinition(
    symbol=THRESHOLD_POWER,
    name="STP",
    compute=compute_threshold_power,
    applicable=is_swim,
    metric_units="watts",
    imperial_units="watts",
)

SRI = MetricDefinition(
    symbol=RELATIVE_INTENSITY,
    name="SRI",
    compute=compute_relative_intensity,
    applicable=is_swim,
    dependencies=(XPOWER, THRESHOLD_POWER),
    precision=2,
)

SWIM_SCORE = MetricDefinition(
    symbol=SWIMSCORE,
    name="SwimScore",
    compute=compute_swimscore,
    applicable=is_swim,
    dependencies=(XPOWER, THRESHOLD_POWER, RELATIVE_INTENSITY),
    aggregation=AggregationKind.TOTAL,
)


def register_swimscore(registry) -> None:
    """Add the SwimScore metrics to a registry."""
    registry.register(XPOWER_SWIM)
    registry.register(STP)
    registry.register(XPACE_SWIM, [XPOWER])
    registry.register(SRI, [XPOWER, THRESHOLD_POWER])
    registry.register(SWIM_SCORE, [XPOWER, THRESHOLD_POWER, RELATIVE_INTENSITY])
