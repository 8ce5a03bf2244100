"""Athlete configuration: threshold speeds and heart rate values."""

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from sqlalchemy.orm import Session

from db.models import AthleteProfile, PaceZone
from metrics.activity import Discipline


class ThresholdConfig(Protocol):
    """What metrics may ask of the athlete configuration."""

    def threshold_speed(self, discipline: Discipline, on_date: date) -> float | None:
        ...

    def heart_rate_values(self) -> dict:
        ...


@dataclass(frozen=True)
class ZoneRange:
    """Critical velocity in force from start (inclusive) to end (exclusive)."""

    start: date
    cv: float  # kph
    end: date | None = None

    def contains(self, on_date: date) -> bool:
        if on_date < self.start:
            return False
        return self.end is None or on_date < self.end


@dataclass
class AthleteConfig:
    """Date-ranged pace zones plus heart rate profile values."""

    pace_zones: dict[Discipline, list[ZoneRange]] = field(default_factory=dict)
    max_hr: int | None = None
    lthr: int | None = None
    resting_hr: int | None = None
    weight_kg: float | None = None

    def which_range(self, discipline: Discipline, on_date: date) -> int:
        """Index of the range covering a date, or -1 if none does.

        Later ranges win when ranges overlap.
        """
        ranges = self.pace_zones.get(discipline, [])
        for i in range(len(ranges) - 1, -1, -1):
            if ranges[i].contains(on_date):
                return i
        return -1

    def threshold_speed(self, discipline: Discipline, on_date: date) -> float | None:
        index = self.which_range(discipline, on_date)
        if index < 0:
            return None
        return self.pace_zones[discipline][index].cv

    def heart_rate_values(self) -> dict:
        return {
            "max_hr": self.max_hr,
            "lthr": self.lthr,
            "resting_hr": self.resting_hr,
        }


def get_or_create_profile(session: Session) -> AthleteProfile:
    """Get existing profile or create a new one.

    Returns the singleton athlete profile, creating it if it doesn't exist.
    """
    profile = session.query(AthleteProfile).first()

    if profile is None:
        profile = AthleteProfile()
        session.add(profile)
        session.commit()

    return profile


def load_athlete_config(session: Session) -> AthleteConfig:
    """Build an AthleteConfig from the stored profile and pace zones.

    Zones are ordered by start date; a zone without an end date runs until
    the next zone of the same discipline starts.
    """
    profile = get_or_create_profile(session)

    pace_zones: dict[Discipline, list[ZoneRange]] = {}
    zones = session.query(PaceZone).order_by(PaceZone.start_date, PaceZone.id).all()

    for zone in zones:
        if zone.cv is None or zone.start_date is None:
            continue
        try:
            discipline = Discipline(zone.discipline)
        except ValueError:
            continue
        pace_zones.setdefault(discipline, []).append(
            ZoneRange(start=zone.start_date, cv=zone.cv, end=zone.end_date)
        )

    for ranges in pace_zones.values():
        for i, zone_range in enumerate(ranges[:-1]):
            if zone_range.end is None:
                ranges[i] = ZoneRange(start=zone_range.start, cv=zone_range.cv, end=ranges[i + 1].start)

    return AthleteConfig(
        pace_zones=pace_zones,
        max_hr=profile.max_hr,
        lthr=profile.lthr,
        resting_hr=profile.resting_hr,
        weight_kg=profile.weight_kg,
    )
