"""Damped rank propagation for a single iteration, serial or partitioned."""

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Sequence

from linkrank.errors import EmptyGraphError, GraphViewError
from linkrank.graph.view import GraphView
from linkrank.models import NodeId


@dataclass(frozen=True)
class CompiledGraph:
    """Snapshot of a graph view with nodes mapped to dense integer slots."""

    nodes: tuple[NodeId, ...]
    index: dict[NodeId, int]
    targets: tuple[tuple[int, ...], ...]

    @property
    def size(self) -> int:
        return len(self.nodes)

    def sink_slots(self) -> list[int]:
        return [slot for slot, targets in enumerate(self.targets) if not targets]

    def self_loop_count(self) -> int:
        return sum(targets.count(slot) for slot, targets in enumerate(self.targets))


def compile_graph(view: GraphView, ignore_self_loops: bool = False) -> CompiledGraph:
    declared = int(view.node_count())
    if declared <= 0:
        raise EmptyGraphError()
    nodes = tuple(view.nodes())
    if len(nodes) != declared:
        raise GraphViewError(f"node_count() reported {declared} nodes but nodes() yielded {len(nodes)}")
    index: dict[NodeId, int] = {}
    for slot, node in enumerate(nodes):
        if node in index:
            raise GraphViewError(f"Duplicate node id in graph view: {node!r}")
        index[node] = slot

    targets: list[tuple[int, ...]] = []
    for slot, node in enumerate(nodes):
        resolved: list[int] = []
        for neighbor in view.out_neighbors(node):
            target = index.get(neighbor)
            if target is None:
                raise GraphViewError(f"Edge {node!r} -> {neighbor!r} points outside the graph")
            if ignore_self_loops and target == slot:
                continue
            resolved.append(target)
        targets.append(tuple(resolved))
    return CompiledGraph(nodes=nodes, index=index, targets=tuple(targets))


def partition_slots(size: int, parts: int) -> list[range]:
    """Split ``range(size)`` into at most ``parts`` contiguous, non-empty chunks."""
    parts = max(1, min(parts, size))
    chunk, remainder = divmod(size, parts)
    chunks: list[range] = []
    start = 0
    for part in range(parts):
        stop = start + chunk + (1 if part < remainder else 0)
        chunks.append(range(start, stop))
        start = stop
    return chunks


def accumulate_contributions(
    graph: CompiledGraph,
    current: Sequence[float],
    damping: float,
    slots: Sequence[int],
    out: list[float],
) -> None:
    """Add the link and sink contributions of ``slots`` into ``out``.

    Reads only ``current``. A sink spreads ``damping * rank / (N - 1)`` to
    every other node; in a one-node graph the lone sink keeps its damped mass.
    """
    size = graph.size
    sink_pool = 0.0
    own_shares: dict[int, float] = {}
    for slot in slots:
        targets = graph.targets[slot]
        rank = current[slot]
        if targets:
            share = damping * rank / len(targets)
            for target in targets:
                out[target] += share
        elif size > 1:
            share = damping * rank / (size - 1)
            sink_pool += share
            own_shares[slot] = share
        else:
            out[slot] += damping * rank
    if sink_pool:
        for slot in range(size):
            out[slot] += sink_pool - own_shares.get(slot, 0.0)


def propagate(
    graph: CompiledGraph,
    current: Sequence[float],
    damping: float,
    out: list[float],
) -> None:
    accumulate_contributions(graph, current, damping, range(graph.size), out)


def _partial_contributions(
    graph: CompiledGraph,
    current: Sequence[float],
    damping: float,
    slots: range,
) -> list[float]:
    partial = [0.0] * graph.size
    accumulate_contributions(graph, current, damping, slots, partial)
    return partial


def propagate_partitioned(
    graph: CompiledGraph,
    current: Sequence[float],
    damping: float,
    out: list[float],
    executor: Executor,
    chunks: Sequence[range],
) -> None:
    """Same result as :func:`propagate`, computed as one partial buffer per chunk.

    Partials are summed in chunk order so a fixed chunking is deterministic.
    """
    futures = [
        executor.submit(_partial_contributions, graph, current, damping, chunk)
        for chunk in chunks
    ]
    for future in futures:
        partial = future.result()
        for slot, value in enumerate(partial):
            out[slot] += value
