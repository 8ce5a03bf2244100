"""Tests for the metric registry."""

import pytest

from metrics.errors import CyclicDependency, DependencyMissing, DuplicateSymbol
from metrics.registry import MetricDefinition, MetricRegistry


def _metric(symbol, deps=(), optional=()):
    return MetricDefinition(
        symbol=symbol,
        name=symbol.upper(),
        compute=lambda activity, results, config: 0.0,
        dependencies=deps,
        optional_dependencies=optional,
    )


def _order(registry):
    return [d.symbol for d in registry.resolve()]


class TestRegister:
    def test_duplicate_symbol(self):
        registry = MetricRegistry()
        registry.register(_metric("a"))
        with pytest.raises(DuplicateSymbol) as exc:
            registry.register(_metric("a"))
        assert exc.value.symbol == "a"

    def test_dependencies_argument_replaces_list(self):
        registry = MetricRegistry()
        registry.register(_metric("a"))
        definition = registry.register(_metric("b", deps=("x",)), ["a"])
        assert definition.dependencies == ("a",)
        assert registry.get("b").dependencies == ("a",)

    def test_lookup_helpers(self):
        registry = MetricRegistry()
        registry.register(_metric("a"))
        assert "a" in registry
        assert "b" not in registry
        assert len(registry) == 1
        assert registry.get("b") is None


class TestResolve:
    def test_dependencies_come_first(self):
        registry = MetricRegistry()
        registry.register(_metric("score", deps=("ri", "power")))
        registry.register(_metric("ri", deps=("power",)))
        registry.register(_metric("power"))
        assert _order(registry) == ["power", "ri", "score"]

    def test_independent_metrics_keep_registration_order(self):
        registry = MetricRegistry()
        for symbol in ["c", "a", "b"]:
            registry.register(_metric(symbol))
        assert _order(registry) == ["c", "a", "b"]

    def test_mixed_order_is_stable(self):
        registry = MetricRegistry()
        registry.register(_metric("d", deps=("a",)))
        registry.register(_metric("b"))
        registry.register(_metric("a"))
        registry.register(_metric("c"))
        assert _order(registry) == ["b", "a", "d", "c"]

    def test_optional_dependencies_are_ordered(self):
        registry = MetricRegistry()
        registry.register(_metric("selector", optional=("x", "y")))
        registry.register(_metric("x"))
        registry.register(_metric("y"))
        assert _order(registry) == ["x", "y", "selector"]

    def test_cycle(self):
        registry = MetricRegistry()
        registry.register(_metric("a", deps=("c",)))
        registry.register(_metric("b", deps=("a",)))
        registry.register(_metric("c", deps=("b",)))
        registry.register(_metric("free"))
        with pytest.raises(CyclicDependency) as exc:
            registry.resolve()
        members = exc.value.members
        assert members[0] == members[-1]
        assert set(members) == {"a", "b", "c"}

    def test_self_dependency_is_a_cycle(self):
        registry = MetricRegistry()
        registry.register(_metric("a", deps=("a",)))
        with pytest.raises(CyclicDependency):
            registry.resolve()

    def test_unknown_dependency(self):
        registry = MetricRegistry()
        registry.register(_metric("a", deps=("ghost",)))
        with pytest.raises(DependencyMissing) as exc:
            registry.resolve()
        assert exc.value.symbol == "ghost"
        assert exc.value.needed_by == "a"

    def test_register_invalidates_plan(self):
        registry = MetricRegistry()
        registry.register(_metric("a"))
        assert _order(registry) == ["a"]
        registry.register(_metric("b"))
        assert _order(registry) == ["a", "b"]


class TestDefaultCatalog:
    def test_contains_all_metrics(self, registry):
        assert registry.symbols() == [
            "swimscore_xpower",
            "swimscore_tp",
            "swimscore_xpace",
            "swimscore_ri",
            "swimscore",
            "workout_time",
            "run_tss",
            "bike_tss",
            "triscore",
        ]

    def test_triscore_resolved_last(self, registry):
        assert _order(registry)[-1] == "triscore"
