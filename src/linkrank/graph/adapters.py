"""
Graph view adapters

Expose existing graph containers through the read-only GraphView contract
without copying them:

1. MappingGraphView: plain ``{node: [neighbors]}`` mappings
2. NetworkXGraphView: ``networkx.DiGraph`` instances (networkx is optional)
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from linkrank.models import NodeId


class MappingGraphView:
    """
    Read-only view over an adjacency mapping.

    Neighbor iterables are read once, at construction. Nodes that only appear
    as neighbors are included after the mapping keys, in first-seen order.
    """

    def __init__(self, adjacency: Mapping[NodeId, Iterable[NodeId]]):
        """
        Initialize the view.

        Args:
            adjacency: Mapping of node to its outgoing neighbors
        """
        self._adjacency: dict[NodeId, tuple[NodeId, ...]] = {
            node: tuple(dict.fromkeys(targets)) for node, targets in adjacency.items()
        }
        ordered: dict[NodeId, None] = dict.fromkeys(self._adjacency)
        for targets in self._adjacency.values():
            for target in targets:
                ordered.setdefault(target, None)
        self._nodes = tuple(ordered)

    def node_count(self) -> int:
        return len(self._nodes)

    def nodes(self) -> Sequence[NodeId]:
        return self._nodes

    def out_neighbors(self, node: NodeId) -> Sequence[NodeId]:
        return self._adjacency.get(node, ())


class NetworkXGraphView:
    """
    Read-only view over a NetworkX directed graph.

    Edge attributes (weights included) are ignored: every outgoing edge
    carries an equal share.
    """

    def __init__(self, graph: Any):
        """
        Initialize the view.

        Args:
            graph: ``networkx.DiGraph`` (or MultiDiGraph)

        Raises:
            TypeError: If the graph is undirected
        """
        if not graph.is_directed():
            raise TypeError("NetworkXGraphView requires a directed graph")
        self._graph = graph

    def node_count(self) -> int:
        return int(self._graph.number_of_nodes())

    def nodes(self) -> Sequence[NodeId]:
        return tuple(self._graph.nodes())

    def out_neighbors(self, node: NodeId) -> Sequence[NodeId]:
        # MultiDiGraph yields parallel edges once through successors()
        return tuple(self._graph.successors(node))
