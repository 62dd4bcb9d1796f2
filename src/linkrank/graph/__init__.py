"""Graph views consumed by the ranking engine."""

from linkrank.graph.adapters import MappingGraphView, NetworkXGraphView
from linkrank.graph.view import AdjacencyGraph, GraphView, out_degree

__all__ = [
    "AdjacencyGraph",
    "GraphView",
    "out_degree",
    "MappingGraphView",
    "NetworkXGraphView",
]
