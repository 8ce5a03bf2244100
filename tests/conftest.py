"""Shared test fixtures for the metrics engine."""

from datetime import date

import pytest
from sqlalchemy import create_engine

from db.models import get_session, init_db
from metrics.activity import Activity, Discipline, Sample
from metrics.catalog import build_registry
from metrics.profile import AthleteConfig, ZoneRange


def make_activity(
    discipline=Discipline.SWIM,
    speed=1.2,
    n=600,
    interval=1.0,
    weight=70.0,
    heart_rate=None,
    **kwargs,
):
    samples = [Sample(secs=i * interval, speed=speed, heart_rate=heart_rate) for i in range(n)]
    kwargs.setdefault("start_date", date(2024, 6, 1))
    return Activity(samples=samples, discipline=discipline, interval=interval, weight=weight, **kwargs)


@pytest.fixture(name="make_activity")
def make_activity_fixture():
    return make_activity


@pytest.fixture
def swim():
    return make_activity()


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def config():
    return AthleteConfig(
        pace_zones={Discipline.SWIM: [ZoneRange(start=date(2024, 1, 1), cv=4.0)]},
        max_hr=190,
        lthr=170,
        resting_hr=50,
    )


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    init_db(engine)
    db = get_session(engine)
    yield db
    db.close()
