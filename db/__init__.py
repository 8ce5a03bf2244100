"""Database package for the metrics engine."""
from .models import (
    Activity,
    AthleteProfile,
    MetricResult,
    PaceZone,
    Stream,
    get_engine,
    get_session,
    init_db,
)

__all__ = [
    "Activity",
    "AthleteProfile",
    "MetricResult",
    "PaceZone",
    "Stream",
    "get_engine",
    "get_session",
    "init_db",
]
