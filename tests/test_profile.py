"""Tests for athlete configuration."""

from datetime import date

from db.models import AthleteProfile, PaceZone
from metrics.activity import Discipline
from metrics.profile import AthleteConfig, ZoneRange, get_or_create_profile, load_athlete_config


class TestAthleteConfig:
    def test_which_range(self):
        config = AthleteConfig(pace_zones={
            Discipline.SWIM: [
                ZoneRange(start=date(2024, 1, 1), cv=3.8, end=date(2024, 6, 1)),
                ZoneRange(start=date(2024, 6, 1), cv=4.1),
            ]
        })
        assert config.which_range(Discipline.SWIM, date(2023, 12, 31)) == -1
        assert config.which_range(Discipline.SWIM, date(2024, 3, 1)) == 0
        assert config.which_range(Discipline.SWIM, date(2024, 6, 1)) == 1
        assert config.threshold_speed(Discipline.SWIM, date(2025, 1, 1)) == 4.1

    def test_unconfigured_discipline(self):
        assert AthleteConfig().threshold_speed(Discipline.RUN, date(2024, 1, 1)) is None

    def test_heart_rate_values(self):
        config = AthleteConfig(max_hr=190, lthr=170)
        assert config.heart_rate_values() == {"max_hr": 190, "lthr": 170, "resting_hr": None}


class TestLoadFromDatabase:
    def test_creates_profile_once(self, session):
        first = get_or_create_profile(session)
        second = get_or_create_profile(session)
        assert first.id == second.id
        assert session.query(AthleteProfile).count() == 1

    def test_open_ended_zones_close_at_next_start(self, session):
        session.add_all([
            PaceZone(discipline="swim", start_date=date(2024, 6, 1), cv=4.1),
            PaceZone(discipline="swim", start_date=date(2024, 1, 1), cv=3.8),
            PaceZone(discipline="run", start_date=date(2024, 1, 1), cv=14.0),
        ])
        session.commit()

        config = load_athlete_config(session)
        swim = config.pace_zones[Discipline.SWIM]
        assert [z.cv for z in swim] == [3.8, 4.1]
        assert swim[0].end == date(2024, 6, 1)
        assert swim[1].end is None
        assert config.threshold_speed(Discipline.SWIM, date(2024, 5, 31)) == 3.8
        assert config.threshold_speed(Discipline.RUN, date(2024, 5, 31)) == 14.0

    def test_unknown_discipline_ignored(self, session):
        session.add(PaceZone(discipline="rowing", start_date=date(2024, 1, 1), cv=10.0))
        session.commit()
        assert load_athlete_config(session).pace_zones == {}

    def test_profile_values(self, session):
        session.add(AthleteProfile(max_hr=188, lthr=168, resting_hr=48, weight_kg=64.0))
        session.commit()
        config = load_athlete_config(session)
        assert config.heart_rate_values() == {"max_hr": 188, "lthr": 168, "resting_hr": 48}
        assert config.weight_kg == 64.0
