"""Index-addressed rank buffers owned by the ranking engine."""

from __future__ import annotations

from typing import Sequence


class RankStore:
    """Two live rank buffers, ``current`` and ``next``, indexed by node slot."""

    def __init__(self, size: int, initial: float) -> None:
        self.size = size
        self.current: list[float] = [initial] * size
        self.next: list[float] = [0.0] * size

    def reset_next(self, baseline: Sequence[float]) -> None:
        if len(baseline) != self.size:
            raise ValueError(f"Baseline length {len(baseline)} does not match store size {self.size}")
        self.next = list(baseline)

    def max_change(self) -> float:
        return max(abs(new - old) for new, old in zip(self.next, self.current))

    def next_total(self) -> float:
        return sum(self.next)

    def current_total(self) -> float:
        return sum(self.current)

    def rescale_next(self, target_total: float) -> None:
        total = self.next_total()
        if total <= 0.0:
            return
        factor = target_total / total
        self.next = [value * factor for value in self.next]

    def swap(self) -> None:
        """Promote ``next`` to ``current`` and start a zeroed ``next`` buffer."""
        self.current = self.next
        self.next = [0.0] * self.size

    def snapshot(self) -> tuple[float, ...]:
        return tuple(self.current)
