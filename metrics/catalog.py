"""Default metric catalog."""

from metrics.registry import MetricRegistry
from metrics.swimscore import register_swimscore
from metrics.triscore import register_triscore
from metrics.tss import register_tss


def build_registry() -> MetricRegistry:
    """Create and populate the registry used at startup."""
    registry = MetricRegistry()
    register_swimscore(registry)
    register_tss(registry)
    register_triscore(registry)
    registry.resolve()
    return registry
