"""Metric definitions and the dependency-ordered registry."""

from dataclasses import dataclass, replace
from typing import Any, Callable

from metrics.activity import Activity
from metrics.errors import CyclicDependency, DependencyMissing, DuplicateSymbol
from metrics.values import AggregationKind, Reading, ResultSet

ComputeFn = Callable[[Activity, ResultSet, Any], "float | Reading"]


def always(activity: Activity) -> bool:
    return True


@dataclass(frozen=True)
class MetricDefinition:
    """Everything needed to compute and display one metric."""

    symbol: str
    name: str
    compute: ComputeFn
    applicable: Callable[[Activity], bool] = always
    dependencies: tuple[str, ...] = ()
    optional_dependencies: tuple[str, ...] = ()
    aggregation: AggregationKind = AggregationKind.AVERAGE
    metric_units: str = ""
    imperial_units: str = ""
    conversion: float = 1.0
    precision: int = 0

    def __post_init__(self):
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(self, "optional_dependencies", tuple(self.optional_dependencies))

    @property
    def all_dependencies(self) -> tuple[str, ...]:
        return self.dependencies + self.optional_dependencies


class MetricRegistry:
    """Catalog of metric definitions.

    Populated once at startup and read-only afterwards. resolve() returns
    the definitions in an order where every metric follows the metrics it
    depends on; metrics with no ordering constraint between them keep their
    registration order.
    """

    def __init__(self):
        self._definitions: dict[str, MetricDefinition] = {}
        self._plan: list[MetricDefinition] | None = None

    def register(
        self,
        definition: MetricDefinition,
        dependencies: list[str] | tuple[str, ...] | None = None,
    ) -> MetricDefinition:
        """Add a metric to the catalog.

        Args:
            definition: Metric to add
            dependencies: If given, replaces the definition's dependency list

        Returns:
            The registered definition

        Raises:
            DuplicateSymbol: symbol is already registered
        """
        if definition.symbol in self._definitions:
            raise DuplicateSymbol(definition.symbol)

        if dependencies is not None:
            definition = replace(definition, dependencies=tuple(dependencies))

        self._definitions[definition.symbol] = definition
        self._plan = None
        return definition

    def get(self, symbol: str) -> MetricDefinition | None:
        return self._definitions.get(symbol)

    def symbols(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def resolve(self) -> list[MetricDefinition]:
        """Compute the evaluation order.

        Raises:
            DependencyMissing: a metric depends on an unregistered symbol
            CyclicDependency: the dependency graph has a cycle
        """
        if self._plan is not None:
            return list(self._plan)

        for definition in self._definitions.values():
            for dep in definition.all_dependencies:
                if dep not in self._definitions:
                    raise DependencyMissing(dep, definition.symbol)

        placed: set[str] = set()
        plan: list[MetricDefinition] = []
        pending = list(self._definitions.values())

        # Repeatedly take the earliest registered metric whose dependencies
        # are all placed
        while pending:
            for i, definition in enumerate(pending):
                if all(dep in placed for dep in definition.all_dependencies):
                    plan.append(definition)
                    placed.add(definition.symbol)
                    del pending[i]
                    break
            else:
                raise CyclicDependency(self._find_cycle({d.symbol for d in pending}))

        self._plan = plan
        return list(plan)

    def _find_cycle(self, unresolved: set[str]) -> list[str]:
        """Walk dependencies among unresolved metrics until one repeats."""
        start = next(s for s in self._definitions if s in unresolved)
        path = [start]
        seen = {start: 0}
        node = start
        while True:
            definition = self._definitions[node]
            node = next(d for d in definition.all_dependencies if d in unresolved)
            if node in seen:
                return path[seen[node]:] + [node]
            seen[node] = len(path)
            path.append(node)
