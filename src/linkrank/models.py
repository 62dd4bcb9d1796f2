"""Shared typed models used by the graph views and the ranking engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Hashable, Mapping

NodeId = Hashable

DEFAULT_DAMPING_FACTOR = 0.85
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_CONVERGENCE_THRESHOLD = 1e-4
DEFAULT_TOTAL_MASS = 1.0


@dataclass(frozen=True)
class RankConfig:
    damping_factor: float = DEFAULT_DAMPING_FACTOR
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    convergence_threshold: float = DEFAULT_CONVERGENCE_THRESHOLD
    total_mass: float = DEFAULT_TOTAL_MASS
    early_stop: bool = True
    renormalize: bool = False
    ignore_self_loops: bool = False
    personalization: Mapping[NodeId, float] | None = field(default=None, hash=False)
    workers: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.personalization, Mapping):
            object.__setattr__(self, "personalization", MappingProxyType(dict(self.personalization)))

    @classmethod
    def fixed_rounds(cls, rounds: int, **overrides: Any) -> "RankConfig":
        """Config that runs exactly ``rounds`` iterations, ignoring convergence."""
        return cls(max_iterations=rounds, early_stop=False, **overrides)

    def with_overrides(self, **overrides: Any) -> "RankConfig":
        return replace(self, **overrides)


@dataclass(frozen=True)
class IterationStats:
    iteration: int
    max_change: float
    total_mass: float


@dataclass(frozen=True)
class RankResult:
    ranks: Mapping[NodeId, float]
    iterations_run: int
    converged: bool
    history: tuple[IterationStats, ...] = field(default_factory=tuple)

    def total(self) -> float:
        return sum(self.ranks.values())

    def ranked(self) -> list[tuple[NodeId, float]]:
        return sorted(self.ranks.items(), key=lambda item: (-item[1], repr(item[0])))

    def as_payload(self) -> dict[str, Any]:
        return {
            "ranks": dict(self.ranks),
            "iterations_run": self.iterations_run,
            "converged": self.converged,
            "history": [
                {
                    "iteration": stats.iteration,
                    "max_change": stats.max_change,
                    "total_mass": stats.total_mass,
                }
                for stats in self.history
            ],
        }
