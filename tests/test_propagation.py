from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from linkrank.engine import compile_graph, partition_slots
from linkrank.engine.propagation import accumulate_contributions, propagate, propagate_partitioned
from linkrank.errors import EmptyGraphError, GraphViewError
from linkrank.graph import AdjacencyGraph


class _StaticView:
    def __init__(self, nodes: Sequence[str], adjacency: dict[str, list[str]], count: int | None = None) -> None:
        self._nodes = list(nodes)
        self._adjacency = adjacency
        self._count = len(self._nodes) if count is None else count

    def node_count(self) -> int:
        return self._count

    def nodes(self) -> list[str]:
        return list(self._nodes)

    def out_neighbors(self, node: str) -> list[str]:
        return list(self._adjacency.get(node, []))


class CompileGraphTests(unittest.TestCase):
    def test_compile_maps_neighbors_to_slots(self) -> None:
        compiled = compile_graph(AdjacencyGraph.from_edges([("a", "b"), ("b", "a"), ("b", "b")]))
        self.assertEqual(compiled.nodes, ("a", "b"))
        self.assertEqual(compiled.targets, ((1,), (0, 1)))
        self.assertEqual(compiled.self_loop_count(), 1)
        dropped = compile_graph(AdjacencyGraph.from_edges([("a", "a")]), ignore_self_loops=True)
        self.assertEqual(dropped.sink_slots(), [0])

    def test_compile_rejects_broken_views(self) -> None:
        with self.assertRaises(EmptyGraphError):
            compile_graph(_StaticView([], {}))
        with self.assertRaises(GraphViewError):
            compile_graph(_StaticView(["a"], {"a": ["ghost"]}))
        with self.assertRaises(GraphViewError):
            compile_graph(_StaticView(["a", "a"], {}))
        with self.assertRaises(GraphViewError):
            compile_graph(_StaticView(["a", "b"], {}, count=3))


class PropagationTests(unittest.TestCase):
    def test_partition_slots_covers_range(self) -> None:
        chunks = partition_slots(10, 3)
        self.assertEqual([list(chunk) for chunk in chunks], [[0, 1, 2, 3], [4, 5, 6], [7, 8, 9]])
        self.assertEqual(len(partition_slots(2, 8)), 2)

    def test_isolated_sink_contribution(self) -> None:
        compiled = compile_graph(
            AdjacencyGraph.from_edges([("a", "b"), ("b", "a"), ("c", "a")], nodes=["a", "b", "c", "v"])
        )
        sink = compiled.index["v"]
        current = [0.0] * compiled.size
        current[sink] = 0.6
        out = [0.0] * compiled.size
        accumulate_contributions(compiled, current, 0.85, range(compiled.size), out)
        share = 0.85 * 0.6 / 3
        for node, slot in compiled.index.items():
            expected = 0.0 if node == "v" else share
            self.assertEqual(out[slot], expected)

    def test_lone_sink_keeps_damped_mass(self) -> None:
        compiled = compile_graph(AdjacencyGraph.from_edges([], nodes=["solo"]))
        out = [0.15]
        propagate(compiled, [1.0], 0.85, out)
        self.assertAlmostEqual(out[0], 1.0, places=12)

    def test_partitioned_matches_serial(self) -> None:
        compiled = compile_graph(
            AdjacencyGraph.from_edges([(i, (i * 3 + 1) % 11) for i in range(11) if i != 4])
        )
        current = [1.0 / compiled.size] * compiled.size
        serial = [0.0] * compiled.size
        propagate(compiled, current, 0.85, serial)
        parallel = [0.0] * compiled.size
        with ThreadPoolExecutor(max_workers=3) as executor:
            propagate_partitioned(compiled, current, 0.85, parallel, executor, partition_slots(compiled.size, 3))
        for left, right in zip(serial, parallel):
            self.assertAlmostEqual(left, right, places=14)
        self.assertAlmostEqual(sum(serial), 0.85, places=12)


if __name__ == "__main__":
    unittest.main()
