"""Read-only graph contract consumed by the ranking engine, plus an in-memory graph."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Protocol, Sequence

from linkrank.models import NodeId


class GraphView(Protocol):
    def node_count(self) -> int:
        ...

    def nodes(self) -> Iterable[NodeId]:
        ...

    def out_neighbors(self, node: NodeId) -> Iterable[NodeId]:
        ...


def out_degree(view: GraphView, node: NodeId) -> int:
    return sum(1 for _ in view.out_neighbors(node))


class AdjacencyGraph:
    """Directed graph stored as index-addressed adjacency lists.

    Nodes are any hashable handles; each is assigned a dense integer slot in
    insertion order. Repeated edges between the same pair collapse into one.
    """

    def __init__(self) -> None:
        self._nodes: list[NodeId] = []
        self._index: dict[NodeId, int] = {}
        self._adjacency: list[list[int]] = []
        self._edge_sets: list[set[int]] = []

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[NodeId, NodeId]],
        nodes: Iterable[NodeId] = (),
    ) -> "AdjacencyGraph":
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for source, target in edges:
            graph.add_edge(source, target)
        return graph

    @classmethod
    def from_mapping(cls, adjacency: Mapping[NodeId, Iterable[NodeId]]) -> "AdjacencyGraph":
        graph = cls()
        for node in adjacency:
            graph.add_node(node)
        for source, targets in adjacency.items():
            for target in targets:
                graph.add_edge(source, target)
        return graph

    def add_node(self, node: NodeId) -> int:
        slot = self._index.get(node)
        if slot is not None:
            return slot
        slot = len(self._nodes)
        self._index[node] = slot
        self._nodes.append(node)
        self._adjacency.append([])
        self._edge_sets.append(set())
        return slot

    def add_edge(self, source: NodeId, target: NodeId) -> bool:
        source_slot = self.add_node(source)
        target_slot = self.add_node(target)
        if target_slot in self._edge_sets[source_slot]:
            return False
        self._edge_sets[source_slot].add(target_slot)
        self._adjacency[source_slot].append(target_slot)
        return True

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency)

    def nodes(self) -> Sequence[NodeId]:
        return tuple(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._index

    def __iter__(self) -> Iterator[NodeId]:
        return iter(tuple(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def index_of(self, node: NodeId) -> int:
        return self._index[node]

    def out_neighbors(self, node: NodeId) -> Sequence[NodeId]:
        return tuple(self._nodes[slot] for slot in self._adjacency[self._index[node]])

    def out_degree(self, node: NodeId) -> int:
        return len(self._adjacency[self._index[node]])

    def has_edge(self, source: NodeId, target: NodeId) -> bool:
        source_slot = self._index.get(source)
        target_slot = self._index.get(target)
        if source_slot is None or target_slot is None:
            return False
        return target_slot in self._edge_sets[source_slot]

    def sinks(self) -> list[NodeId]:
        return [node for slot, node in enumerate(self._nodes) if not self._adjacency[slot]]
