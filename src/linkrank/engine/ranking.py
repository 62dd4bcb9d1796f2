"""Iterated damped rank propagation over a directed graph view."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from types import MappingProxyType

from linkrank.engine.guards import normalize_personalization, validate_config
from linkrank.engine.propagation import (
    CompiledGraph,
    compile_graph,
    partition_slots,
    propagate,
    propagate_partitioned,
)
from linkrank.engine.store import RankStore
from linkrank.errors import RankingCancelledError
from linkrank.graph.view import GraphView
from linkrank.models import IterationStats, NodeId, RankConfig, RankResult


class RankingEngine:
    """Computes a stable authority score per node of a fixed directed graph."""

    def __init__(self, graph: GraphView, config: RankConfig | None = None) -> None:
        self._graph = graph
        self._config = config or RankConfig()
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> RankConfig:
        return self._config

    def run(self, cancel_event: threading.Event | None = None) -> RankResult:
        config = validate_config(self._config)
        compiled = compile_graph(self._graph, ignore_self_loops=config.ignore_self_loops)
        baseline = self._baseline(compiled, config)
        if compiled.size == 1 and not compiled.targets[0]:
            self._logger.warning(
                "Single-node graph with a sink: node %r keeps its own rank mass.",
                compiled.nodes[0],
            )

        started = time.perf_counter()
        workers = min(config.workers, compiled.size)
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="linkrank") as executor:
                result = self._iterate(compiled, config, baseline, cancel_event, executor, workers)
        else:
            result = self._iterate(compiled, config, baseline, cancel_event, None, 1)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        self._logger.info(
            "Ranked %d nodes in %d iteration(s) (converged=%s, workers=%d, elapsed_ms=%d)",
            compiled.size,
            result.iterations_run,
            result.converged,
            workers,
            elapsed_ms,
        )
        if config.early_stop and not result.converged:
            self._logger.warning(
                "Ranking stopped at max_iterations=%d without reaching convergence_threshold=%g",
                config.max_iterations,
                config.convergence_threshold,
            )
        return result

    def _baseline(self, compiled: CompiledGraph, config: RankConfig) -> list[float]:
        jump_mass = (1.0 - config.damping_factor) * config.total_mass
        if config.personalization is None:
            return [jump_mass / compiled.size] * compiled.size
        weights = normalize_personalization(config.personalization, compiled.nodes)
        return [jump_mass * weights[node] for node in compiled.nodes]

    def _iterate(
        self,
        compiled: CompiledGraph,
        config: RankConfig,
        baseline: list[float],
        cancel_event: threading.Event | None,
        executor: Executor | None,
        workers: int,
    ) -> RankResult:
        store = RankStore(compiled.size, config.total_mass / compiled.size)
        chunks = partition_slots(compiled.size, workers)
        history: list[IterationStats] = []
        converged = False

        for iteration in range(1, config.max_iterations + 1):
            if cancel_event is not None and cancel_event.is_set():
                raise RankingCancelledError(iteration - 1)

            store.reset_next(baseline)
            if executor is None:
                propagate(compiled, store.current, config.damping_factor, store.next)
            else:
                propagate_partitioned(
                    compiled,
                    store.current,
                    config.damping_factor,
                    store.next,
                    executor,
                    chunks,
                )
            if config.renormalize:
                store.rescale_next(config.total_mass)

            max_change = store.max_change()
            stats = IterationStats(
                iteration=iteration,
                max_change=max_change,
                total_mass=store.next_total(),
            )
            store.swap()
            history.append(stats)
            self._logger.debug(
                "Iteration %d: max_change=%.3e total_mass=%.12f",
                stats.iteration,
                stats.max_change,
                stats.total_mass,
            )
            if config.early_stop and max_change < config.convergence_threshold:
                converged = True
                break

        ranks = dict(zip(compiled.nodes, store.snapshot()))
        return RankResult(
            ranks=MappingProxyType(ranks),
            iterations_run=len(history),
            converged=converged,
            history=tuple(history),
        )


def run(
    graph: GraphView,
    config: RankConfig | None = None,
    *,
    cancel_event: threading.Event | None = None,
) -> RankResult:
    return RankingEngine(graph, config).run(cancel_event=cancel_event)


def top_nodes(result: RankResult, limit: int = 10) -> list[tuple[NodeId, float]]:
    if limit <= 0:
        return []
    return result.ranked()[:limit]
