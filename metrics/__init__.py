"""Dependency-ordered activity metrics."""

from metrics.activity import Activity, Discipline, Sample, discipline_for
from metrics.catalog import build_registry
from metrics.errors import (
    CyclicDependency,
    DependencyMissing,
    DuplicateSymbol,
    MetricError,
    MetricTypeMismatch,
)
from metrics.evaluator import Evaluator
from metrics.registry import MetricDefinition, MetricRegistry
from metrics.values import AggregationKind, MetricValue, Reading, ResultSet
from metrics.xpower import estimate_xpower, swimming_power, swimming_speed

__all__ = [
    "Activity",
    "Discipline",
    "Sample",
    "discipline_for",
    "build_registry",
    "CyclicDependency",
    "DependencyMissing",
    "DuplicateSymbol",
    "MetricError",
    "MetricTypeMismatch",
    "Evaluator",
    "MetricDefinition",
    "MetricRegistry",
    "AggregationKind",
    "MetricValue",
    "Reading",
    "ResultSet",
    "estimate_xpower",
    "swimming_power",
    "swimming_speed",
]
