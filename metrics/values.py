"""Computed metric values and the per-activity result set."""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, NamedTuple

from metrics.errors import DependencyMissing, MetricTypeMismatch


class AggregationKind(str, Enum):
    """How a metric combines across several activities."""

    AVERAGE = "average"
    TOTAL = "total"
    PEAK = "peak"
    LOW = "low"


class Reading(NamedTuple):
    """A compute result that carries an effective duration."""

    value: float
    count: float


@dataclass(frozen=True)
class MetricValue:
    """The value of one metric for one activity."""

    symbol: str
    value: float
    count: float | None = None  # effective duration, seconds
    precision: int = 0
    metric_units: str = ""
    imperial_units: str = ""
    conversion: float = 1.0

    def value_in(self, metric: bool = True) -> float:
        return self.value if metric else self.value * self.conversion

    def units(self, metric: bool = True) -> str:
        return self.metric_units if metric else self.imperial_units

    def formatted(self, metric: bool = True) -> str:
        text = f"{self.value_in(metric):.{self.precision}f}"
        units = self.units(metric)
        return f"{text} {units}" if units else text


class LookupStatus(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    TYPE_MISMATCH = "type_mismatch"


class Lookup(NamedTuple):
    """Outcome of a typed result set lookup."""

    status: LookupStatus
    value: MetricValue | None = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND


class ResultSet(Mapping[str, MetricValue]):
    """Read-only mapping of symbol to MetricValue for one activity."""

    def __init__(self, values: Mapping[str, MetricValue] | None = None, activity_id: str | None = None):
        self._values = MappingProxyType(dict(values or {}))
        self.activity_id = activity_id

    @classmethod
    def view(cls, values: dict[str, MetricValue], activity_id: str | None = None) -> "ResultSet":
        """Read-only view over a dict that is still being filled in."""
        result = cls(activity_id=activity_id)
        result._values = MappingProxyType(values)
        return result

    def __getitem__(self, symbol: str) -> MetricValue:
        return self._values[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"<ResultSet {self.activity_id}: {len(self)} metrics>"

    def lookup(self, symbol: str, timed: bool = False) -> Lookup:
        """Find a value, tagging the outcome instead of raising.

        Args:
            symbol: Metric symbol
            timed: If True, the value must carry an effective duration

        Returns:
            Lookup with status FOUND, ABSENT or TYPE_MISMATCH
        """
        value = self._values.get(symbol)
        if value is None:
            return Lookup(LookupStatus.ABSENT)
        if timed and value.count is None:
            return Lookup(LookupStatus.TYPE_MISMATCH, value)
        return Lookup(LookupStatus.FOUND, value)

    def require(self, symbol: str, timed: bool = False, needed_by: str | None = None) -> MetricValue:
        """Return a value that must exist, raising if it does not."""
        found = self.lookup(symbol, timed=timed)
        if found.status == LookupStatus.ABSENT:
            raise DependencyMissing(symbol, needed_by)
        if found.status == LookupStatus.TYPE_MISMATCH:
            raise MetricTypeMismatch(symbol, "timed")
        return found.value

    def value_of(self, symbol: str, needed_by: str | None = None) -> float:
        return self.require(symbol, needed_by=needed_by).value

    def as_dict(self) -> dict[str, float]:
        return {symbol: mv.value for symbol, mv in self._values.items()}


def aggregate_values(values: Iterable[MetricValue], kind: AggregationKind) -> float:
    """Combine one metric's values across several activities.

    Averages are weighted by each value's count when present, so a long
    activity weighs more than a short one.

    Args:
        values: MetricValues for the same symbol
        kind: Aggregation kind of the metric

    Returns:
        Aggregated value (0 for no values)
    """
    values = list(values)
    if not values:
        return 0.0

    if kind == AggregationKind.TOTAL:
        return sum(v.value for v in values)
    if kind == AggregationKind.PEAK:
        return max(v.value for v in values)
    if kind == AggregationKind.LOW:
        return min(v.value for v in values)

    weights = [v.count if v.count is not None else 1.0 for v in values]
    total_weight = sum(weights)
    if total_weight <= 0:
        return 0.0

    avg = sum(v.value * w for v, w in zip(values, weights)) / total_weight
    return avg if math.isfinite(avg) else 0.0
