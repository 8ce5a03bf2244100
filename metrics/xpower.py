"""Time-decayed swimming power (xPower Swim).

Follows "Calculating Power Output and Training Stress in Swimmers: The
Development of the SwimScore Algorithm" by Dr. Phil Skiba.
"""

import math
from typing import Iterable, NamedTuple

from metrics.activity import Sample
from metrics.config import (
    DRAG_OFFSET,
    DRAG_PER_KG,
    GAP_EPSILON,
    NEGLIGIBLE_POWER,
    PROPELLING_EFFICIENCY,
    XPOWER_WINDOW_SECONDS,
)


class XPowerResult(NamedTuple):
    value: float  # watts
    duration: float  # seconds


def drag_factor(weight: float) -> float:
    return DRAG_PER_KG * weight + DRAG_OFFSET


def swimming_power(weight: float, speed: float) -> float:
    """Swimming power (watts) from speed (m/s)."""
    return (drag_factor(weight) / PROPELLING_EFFICIENCY) * speed ** 3


def swimming_speed(weight: float, power: float) -> float:
    """Swimming speed (m/s) from power (watts); 0 for non-positive power."""
    k = drag_factor(weight)
    if k <= 0 or power <= 0:
        return 0.0
    return ((PROPELLING_EFFICIENCY / k) * power) ** (1 / 3.0)


def estimate_xpower(
    samples: Iterable[Sample],
    interval: float | None,
    weight: float,
) -> XPowerResult:
    """Compute the exponentially weighted cubic-mean power of a swim.

    Each sample's speed is converted to power and folded into a running
    exponentially weighted average with a 25 s window. When consecutive
    samples are further apart than the recording interval, decay-only steps
    are inserted at that interval until the gap closes or the weighted power
    becomes negligible. The result is the cube root of the mean of the
    cubed weighted power over all real and synthetic steps.

    Args:
        samples: Samples in time order
        interval: Nominal recording interval in seconds
        weight: Swimmer weight in kg

    Returns:
        XPowerResult with value in watts and effective duration in seconds;
        (0, 0) for a missing or non-positive interval or no samples
    """
    if interval is None or not math.isfinite(interval) or interval <= 0:
        return XPowerResult(0.0, 0.0)

    samps_per_window = XPOWER_WINDOW_SECONDS / interval
    attenuation = samps_per_window / (samps_per_window + interval)
    sample_weight = interval / (samps_per_window + interval)

    last_secs = 0.0
    weighted = 0.0
    total = 0.0
    count = 0

    for sample in samples:
        # Let effort decay toward zero across a pause
        while weighted > NEGLIGIBLE_POWER and sample.secs > last_secs + interval + GAP_EPSILON:
            weighted *= attenuation
            last_secs += interval
            total += weighted ** 3
            count += 1

        weighted *= attenuation
        # Backward speed produces no propulsive power
        weighted += sample_weight * max(0.0, swimming_power(weight, sample.speed))
        last_secs = sample.secs
        total += weighted ** 3
        count += 1

    if count == 0:
        return XPowerResult(0.0, 0.0)

    xpower = (total / count) ** (1 / 3.0)
    if not math.isfinite(xpower):
        return XPowerResult(0.0, 0.0)

    return XPowerResult(xpower, count * interval)
