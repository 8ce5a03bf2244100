"""Per-activity metric evaluation."""

import logging
import math
from typing import Any, Callable

from metrics.activity import Activity
from metrics.errors import DependencyMissing
from metrics.registry import MetricDefinition, MetricRegistry
from metrics.values import MetricValue, Reading, ResultSet

logger = logging.getLogger(__name__)


class Evaluator:
    """Runs a registry's metrics over one activity at a time.

    The evaluator holds nothing but the resolved plan and the configuration
    provider, so one instance can evaluate different activities from several
    threads.
    """

    def __init__(
        self,
        registry: MetricRegistry,
        config: Any = None,
        observer: Callable[[str], None] | None = None,
    ):
        self.registry = registry
        self.config = config
        self.observer = observer
        self.plan = registry.resolve()

    def compute(self, activity: Activity) -> ResultSet:
        """Compute every applicable metric for an activity.

        Args:
            activity: Activity to evaluate

        Returns:
            Immutable ResultSet; inapplicable metrics are absent

        Raises:
            DependencyMissing: a definition needed a value that was never
                produced (a registry inconsistency)
        """
        values: dict[str, MetricValue] = {}
        skipped: set[str] = set()
        view = ResultSet.view(values, activity.activity_id)

        for definition in self.plan:
            if not definition.applicable(activity):
                skipped.add(definition.symbol)
                continue

            inapplicable_dep = self._check_dependencies(definition, values, skipped)
            if inapplicable_dep:
                logger.debug(
                    "Skipping %s: dependency %s not applicable to %s",
                    definition.symbol, inapplicable_dep, activity.activity_id,
                )
                skipped.add(definition.symbol)
                continue

            if self.observer:
                self.observer(definition.symbol)

            output = definition.compute(activity, view, self.config)
            values[definition.symbol] = self._to_value(definition, output)

        return ResultSet(values, activity.activity_id)

    @staticmethod
    def _check_dependencies(
        definition: MetricDefinition,
        values: dict[str, MetricValue],
        skipped: set[str],
    ) -> str | None:
        """Return the first skipped dependency, raising on any other gap."""
        for dep in definition.dependencies:
            if dep in values:
                continue
            if dep in skipped:
                return dep
            raise DependencyMissing(dep, definition.symbol)
        return None

    @staticmethod
    def _to_value(definition: MetricDefinition, output: "float | Reading") -> MetricValue:
        if isinstance(output, Reading):
            value, count = output
        else:
            value, count = output, None

        value = _finite(value)
        if count is not None:
            count = _finite(count)

        return MetricValue(
            symbol=definition.symbol,
            value=value,
            count=count,
            precision=definition.precision,
            metric_units=definition.metric_units,
            imperial_units=definition.imperial_units,
            conversion=definition.conversion,
        )


def _finite(number: float | None) -> float:
    if number is None:
        return 0.0
    number = float(number)
    return number if math.isfinite(number) else 0.0
