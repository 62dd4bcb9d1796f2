"""Exception taxonomy for rank computation."""

from __future__ import annotations


class RankingError(Exception):
    """Base class for every error raised by the ranking engine."""


class EmptyGraphError(RankingError):
    """Raised when the graph view reports zero nodes."""

    def __init__(self, message: str = "Cannot rank an empty graph") -> None:
        super().__init__(message)


class InvalidParameterError(RankingError, ValueError):
    """Raised when a configuration value is outside its accepted range."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")


class GraphViewError(RankingError):
    """Raised when a graph view breaks its read-only contract."""


class RankingCancelledError(RankingError):
    """Raised when a run is cancelled at an iteration boundary."""

    def __init__(self, iterations_completed: int) -> None:
        self.iterations_completed = iterations_completed
        super().__init__(f"Ranking cancelled after {iterations_completed} iteration(s)")
