"""SQLAlchemy models for the metrics database."""
from datetime import datetime
from pathlib import Path

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import DeclarativeBase, Session, relationship, sessionmaker


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Activity(Base):
    """Activity table - one row per recorded activity."""

    __tablename__ = "activities"

    activity_id = Column(String, primary_key=True)

    name = Column(String, nullable=True)
    activity_type = Column(String, nullable=True)  # 'Swim', 'Run', 'Ride', ...
    start_time = Column(DateTime, nullable=True)

    athlete_weight = Column(Float, nullable=True)  # kg
    sample_interval = Column(Float, nullable=True)  # seconds between samples

    # Per-activity overrides, e.g. {"CV": "4.2"}
    tags = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    stream = relationship("Stream", back_populates="activity", uselist=False)
    results = relationship("MetricResult", back_populates="activity", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Activity {self.activity_id}: {self.name}>"


class Stream(Base):
    """Time-series samples of an activity, stored as parallel JSON arrays."""

    __tablename__ = "streams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    activity_id = Column(String, ForeignKey("activities.activity_id"), unique=True, nullable=False)

    offsets = Column(JSON, nullable=True)  # seconds from start
    speed = Column(JSON, nullable=True)  # m/s
    heart_rate = Column(JSON, nullable=True)  # bpm

    created_at = Column(DateTime, default=datetime.utcnow)

    activity = relationship("Activity", back_populates="stream")

    def __repr__(self) -> str:
        points = len(self.offsets or [])
        return f"<Stream {self.activity_id} ({points} points)>"


class AthleteProfile(Base):
    """Athlete profile used to personalize metrics."""

    __tablename__ = "athlete_profile"

    id = Column(Integer, primary_key=True, autoincrement=True)

    max_hr = Column(Integer, nullable=True)
    resting_hr = Column(Integer, nullable=True)
    lthr = Column(Integer, nullable=True)  # Lactate threshold heart rate
    weight_kg = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<AthleteProfile weight={self.weight_kg} lthr={self.lthr}>"


class PaceZone(Base):
    """Critical velocity for a discipline over a range of dates."""

    __tablename__ = "pace_zones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    discipline = Column(String, nullable=False)  # 'swim', 'run'
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # exclusive; open-ended when null
    cv = Column(Float, nullable=False)  # kph

    def __repr__(self) -> str:
        return f"<PaceZone {self.discipline} from {self.start_date} CV={self.cv}>"


class MetricResult(Base):
    """One computed metric value for one activity."""

    __tablename__ = "metric_results"
    __table_args__ = (UniqueConstraint("activity_id", "symbol"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    activity_id = Column(String, ForeignKey("activities.activity_id"), nullable=False)

    symbol = Column(String, nullable=False)
    value = Column(Float, nullable=False)
    count = Column(Float, nullable=True)  # effective duration, seconds

    computed_at = Column(DateTime, default=datetime.utcnow)

    activity = relationship("Activity", back_populates="results")

    def __repr__(self) -> str:
        return f"<MetricResult {self.activity_id} {self.symbol}={self.value}>"


# Database path
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "metrics.db"


def get_engine(db_path: Path | None = None, echo: bool = False):
    """Create and return a SQLAlchemy engine."""
    if db_path is None:
        db_path = DEFAULT_DB_PATH

    # Ensure the data directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    return create_engine(f"sqlite:///{db_path}", echo=echo)


def get_session(engine=None) -> Session:
    """Create and return a new database session."""
    if engine is None:
        engine = get_engine()

    SessionLocal = sessionmaker(bind=engine)
    return SessionLocal()


def init_db(engine=None) -> None:
    """Initialize the database schema."""
    if engine is None:
        engine = get_engine()

    Base.metadata.create_all(engine)
