"""Activity and sample types the metrics are computed from."""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence

from metrics.config import DEFAULT_WEIGHT_KG


class Discipline(str, Enum):
    """Activity type governing which metrics apply."""

    SWIM = "swim"
    RUN = "run"
    BIKE = "bike"
    OTHER = "other"


# Strava activity types grouped by discipline
ACTIVITY_TYPE_DISCIPLINES = {
    "Swim": Discipline.SWIM,
    "OpenWaterSwim": Discipline.SWIM,
    "Run": Discipline.RUN,
    "TrailRun": Discipline.RUN,
    "VirtualRun": Discipline.RUN,
    "Ride": Discipline.BIKE,
    "VirtualRide": Discipline.BIKE,
    "GravelRide": Discipline.BIKE,
    "MountainBikeRide": Discipline.BIKE,
    "EBikeRide": Discipline.BIKE,
}


def discipline_for(activity_type: str | None) -> Discipline:
    """Classify an activity type string.

    Examples:
        'Swim' -> Discipline.SWIM
        'VirtualRide' -> Discipline.BIKE
        'Yoga' -> Discipline.OTHER
    """
    if not activity_type:
        return Discipline.OTHER
    return ACTIVITY_TYPE_DISCIPLINES.get(activity_type.strip(), Discipline.OTHER)


@dataclass(frozen=True)
class Sample:
    """One recorded point of an activity."""

    secs: float  # offset from start, seconds
    speed: float = 0.0  # m/s
    heart_rate: float | None = None  # bpm


@dataclass(frozen=True)
class Activity:
    """An activity ready for metric evaluation.

    Samples are fixed once loaded. To change them build a new Activity with
    with_samples() and evaluate it again.
    """

    samples: tuple[Sample, ...]
    discipline: Discipline
    interval: float  # nominal recording interval, seconds
    weight: float = DEFAULT_WEIGHT_KG  # kg
    start_date: date | None = None
    tags: Mapping[str, str] = field(default_factory=dict)
    activity_id: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "samples", tuple(self.samples))
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    @property
    def is_swim(self) -> bool:
        return self.discipline == Discipline.SWIM

    @property
    def is_run(self) -> bool:
        return self.discipline == Discipline.RUN

    @property
    def is_bike(self) -> bool:
        return self.discipline == Discipline.BIKE

    @property
    def duration(self) -> float:
        """Seconds spanned by the samples (0 with fewer than two)."""
        if len(self.samples) < 2:
            return 0.0
        return max(0.0, self.samples[-1].secs - self.samples[0].secs)

    def get_tag(self, name: str, default: str | None = None) -> str | None:
        return self.tags.get(name, default)

    def with_samples(self, samples: Sequence[Sample]) -> "Activity":
        return replace(self, samples=tuple(samples))
