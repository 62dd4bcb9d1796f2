"""Rank propagation engine over read-only graph views."""

from linkrank.engine.propagation import CompiledGraph, compile_graph, partition_slots
from linkrank.engine.ranking import RankingEngine, run, top_nodes
from linkrank.engine.store import RankStore

__all__ = [
    "CompiledGraph",
    "compile_graph",
    "partition_slots",
    "RankingEngine",
    "run",
    "top_nodes",
    "RankStore",
]
