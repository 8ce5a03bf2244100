"""Main metrics computation orchestration."""

import logging
from collections import defaultdict
from datetime import datetime

from sqlalchemy.orm import Session

from db.models import Activity as ActivityRecord
from db.models import MetricResult, Stream
from metrics.activity import Activity, Sample, discipline_for
from metrics.catalog import build_registry
from metrics.config import DEFAULT_WEIGHT_KG
from metrics.errors import MetricError
from metrics.evaluator import Evaluator
from metrics.profile import AthleteConfig, load_athlete_config
from metrics.values import MetricValue, ResultSet, aggregate_values

logger = logging.getLogger(__name__)


def load_samples(stream: Stream | None) -> list[Sample]:
    """Zip a stream's parallel arrays into samples.

    Missing speed or heart rate entries become 0 and None respectively;
    points without an offset are dropped.
    """
    if stream is None or not stream.offsets:
        return []

    speeds = stream.speed or []
    heart_rates = stream.heart_rate or []

    samples = []
    for i, secs in enumerate(stream.offsets):
        if secs is None:
            continue
        speed = speeds[i] if i < len(speeds) and speeds[i] is not None else 0.0
        hr = heart_rates[i] if i < len(heart_rates) else None
        samples.append(Sample(secs=float(secs), speed=float(speed), heart_rate=hr))
    return samples


def load_activity(session: Session, record: ActivityRecord, config: AthleteConfig) -> Activity:
    """Build an Activity for evaluation from its database rows.

    Weight falls back from the activity to the profile to a default. Tags
    that are not stored as a JSON object are ignored.
    """
    stream = session.query(Stream).filter_by(activity_id=record.activity_id).first()

    weight = record.athlete_weight or config.weight_kg or DEFAULT_WEIGHT_KG
    raw_tags = record.tags if isinstance(record.tags, dict) else {}
    tags = {str(k): str(v) for k, v in raw_tags.items()}

    return Activity(
        samples=tuple(load_samples(stream)),
        discipline=discipline_for(record.activity_type),
        interval=record.sample_interval or 0.0,
        weight=weight,
        start_date=record.start_time.date() if record.start_time else None,
        tags=tags,
        activity_id=record.activity_id,
    )


def compute_activity_metrics(
    session: Session,
    evaluator: Evaluator,
    record: ActivityRecord,
    config: AthleteConfig,
    force: bool = False,
) -> ResultSet | None:
    """Compute and store all metrics for a single activity.

    Stored results are replaced as a whole, never patched.

    Args:
        session: Database session
        evaluator: Evaluator built from the metric registry
        record: Activity to process
        config: Athlete configuration from load_athlete_config()
        force: If True, recompute even if results exist

    Returns:
        ResultSet, or None if results already existed and force is False
    """
    existing = session.query(MetricResult).filter_by(activity_id=record.activity_id)
    if existing.first() is not None and not force:
        return None

    activity = load_activity(session, record, config)
    results = evaluator.compute(activity)

    existing.delete()
    now = datetime.utcnow()
    for symbol, metric_value in results.items():
        session.add(MetricResult(
            activity_id=record.activity_id,
            symbol=symbol,
            value=metric_value.value,
            count=metric_value.count,
            computed_at=now,
        ))

    return results


def summarize(registry, results: list[ResultSet]) -> dict[str, float]:
    """Aggregate each metric across activities by its aggregation kind."""
    by_symbol: dict[str, list[MetricValue]] = defaultdict(list)
    for result in results:
        for symbol, metric_value in result.items():
            by_symbol[symbol].append(metric_value)

    summary = {}
    for symbol in registry.symbols():
        if symbol in by_symbol:
            definition = registry.get(symbol)
            summary[symbol] = aggregate_values(by_symbol[symbol], definition.aggregation)
    return summary


def run_full_computation(
    session: Session,
    force: bool = False,
    quiet: bool = False,
) -> dict:
    """Run the metrics pipeline over every stored activity.

    Steps:
    1. Load the athlete configuration
    2. Build the metric registry and evaluator
    3. Compute and store per-activity metrics
    4. Aggregate the newly computed metrics

    Args:
        session: Database session
        force: If True, recompute everything
        quiet: If True, suppress output

    Returns:
        Dict with computation statistics
    """
    stats = {
        "activities_processed": 0,
        "activities_skipped": 0,
        "errors": [],
        "summary": {},
    }

    if not quiet:
        print("Loading athlete configuration...")
    config = load_athlete_config(session)

    registry = build_registry()
    evaluator = Evaluator(registry, config)

    if not quiet:
        print(f"  {len(registry)} metrics registered")
        print("Computing activity metrics...")

    computed: list[ResultSet] = []
    activities = session.query(ActivityRecord).order_by(ActivityRecord.start_time).all()
    for i, record in enumerate(activities):
        try:
            results = compute_activity_metrics(session, evaluator, record, config, force=force)
        except MetricError as e:
            logger.error("Metric computation failed for %s: %s", record.activity_id, e)
            stats["errors"].append(f"Activity {record.activity_id}: {e}")
            continue
        except Exception as e:
            logger.exception("Unexpected failure computing metrics for %s", record.activity_id)
            stats["errors"].append(f"Activity {record.activity_id}: {e}")
            continue

        if results is None:
            stats["activities_skipped"] += 1
        else:
            stats["activities_processed"] += 1
            computed.append(results)

        if not quiet and (i + 1) % 100 == 0:
            print(f"  Processed {i + 1}/{len(activities)} activities...")

    session.commit()

    if not quiet:
        print(f"  Processed {stats['activities_processed']} activities")

    stats["summary"] = summarize(registry, computed)

    if not quiet:
        print("Done!")
        if stats["errors"]:
            print(f"  {len(stats['errors'])} errors occurred")

    return stats
