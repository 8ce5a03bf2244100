"""Exceptions raised by the metric registry and evaluator."""


class MetricError(Exception):
    """Base class for metric registry and evaluation errors."""


class DuplicateSymbol(MetricError):
    """A metric with the same symbol is already registered."""

    def __init__(self, symbol: str):
        super().__init__(f"Metric already registered: {symbol}")
        self.symbol = symbol


class CyclicDependency(MetricError):
    """The dependency graph contains a cycle."""

    def __init__(self, members: list[str]):
        super().__init__(f"Cyclic metric dependency: {' -> '.join(members)}")
        self.members = members


class DependencyMissing(MetricError):
    """A metric needed a value that is not in the result set.

    Always a definition or registry bug, never bad activity data.
    """

    def __init__(self, symbol: str, needed_by: str | None = None):
        if needed_by:
            message = f"{needed_by} requires {symbol}, which has no value"
        else:
            message = f"No value for {symbol}"
        super().__init__(message)
        self.symbol = symbol
        self.needed_by = needed_by


class MetricTypeMismatch(MetricError):
    """A value was found but lacks the shape the caller asked for."""

    def __init__(self, symbol: str, expected: str):
        super().__init__(f"{symbol} is not a {expected} value")
        self.symbol = symbol
        self.expected = expected
