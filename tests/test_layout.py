import itertools
import math
import unittest

# Adjust the path to import from the parent directory's 'relgraph' package
import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from relgraph.config import LayoutConfig
from relgraph.layout import compute_layout, initial_radius
from relgraph.models import Edge, Node, RelationshipCategory

def make_nodes(count):
    return [Node(id=f"n{i}", name=f"Node {i}") for i in range(count)]

def chain_edges(nodes):
    return [
        Edge(source=a.id, target=b.id, category=RelationshipCategory.FRIENDS_ALLIES)
        for a, b in zip(nodes, nodes[1:])
    ]

class TestForceDirectedLayout(unittest.TestCase):

    def test_empty_input_returns_default_viewport(self):
        nodes, viewport = compute_layout([], [])

        self.assertEqual(nodes, [])
        self.assertEqual((viewport.min_x, viewport.min_y, viewport.width, viewport.height), (0, 0, 800, 600))
        self.assertEqual(viewport.as_view_box(), "0 0 800 600")

    def test_single_node_sits_at_canvas_center(self):
        nodes, viewport = compute_layout(make_nodes(1), [])

        self.assertAlmostEqual(nodes[0].x, 400.0)
        self.assertAlmostEqual(nodes[0].y, 300.0)
        self.assertAlmostEqual(viewport.min_x, 280.0)
        self.assertAlmostEqual(viewport.min_y, 180.0)
        self.assertAlmostEqual(viewport.width, 240.0)
        self.assertAlmostEqual(viewport.height, 240.0)

    def test_zero_iterations_keeps_initial_circle(self):
        """
        Without simulation steps nodes stay evenly spaced on the initial
        circle, the first one at the top.
        """
        config = LayoutConfig(iterations=0)

        nodes, _ = compute_layout(make_nodes(4), [], config)

        expected = [(400.0, 220.0), (480.0, 300.0), (400.0, 380.0), (320.0, 300.0)]
        for node, (x, y) in zip(nodes, expected):
            self.assertAlmostEqual(node.x, x, places=6)
            self.assertAlmostEqual(node.y, y, places=6)

    def test_initial_radius_is_bounded(self):
        config = LayoutConfig()
        self.assertEqual(initial_radius(2, config), 80)
        self.assertEqual(initial_radius(8, config), 120)
        self.assertEqual(initial_radius(40, config), 150)

    def test_layout_is_deterministic(self):
        nodes = make_nodes(7)
        edges = chain_edges(nodes)

        first, first_viewport = compute_layout(nodes, edges)
        second, second_viewport = compute_layout(nodes, edges)

        self.assertEqual([node.model_dump() for node in first], [node.model_dump() for node in second])
        self.assertEqual(first_viewport, second_viewport)

    def test_nodes_do_not_overlap(self):
        nodes = make_nodes(8)
        edges = chain_edges(nodes) + [
            Edge(source="n0", target="n4", category=RelationshipCategory.FAMILY),
            Edge(source="n2", target="n6", category=RelationshipCategory.ROMANTIC),
        ]

        placed, _ = compute_layout(nodes, edges)

        min_distance = min(
            math.hypot(a.x - b.x, a.y - b.y)
            for a, b in itertools.combinations(placed, 2)
        )
        self.assertGreater(min_distance, 1.0)

    def test_layout_is_centered_and_framed_by_viewport(self):
        config = LayoutConfig()
        nodes = make_nodes(6)

        placed, viewport = compute_layout(nodes, chain_edges(nodes), config)

        xs = [node.x for node in placed]
        ys = [node.y for node in placed]
        self.assertAlmostEqual(sum(xs) / len(xs), 400.0, places=6)
        self.assertAlmostEqual(sum(ys) / len(ys), 300.0, places=6)
        self.assertAlmostEqual(viewport.min_x, min(xs) - config.padding)
        self.assertAlmostEqual(viewport.min_y, min(ys) - config.padding)
        self.assertAlmostEqual(viewport.min_x + viewport.width, max(xs) + config.padding)
        self.assertAlmostEqual(viewport.min_y + viewport.height, max(ys) + config.padding)

    def test_input_order_and_identity_are_preserved(self):
        nodes = make_nodes(3)

        placed, _ = compute_layout(nodes, [])

        self.assertEqual([node.id for node in placed], ["n0", "n1", "n2"])
        self.assertTrue(all(node.x is not None and node.y is not None for node in placed))
        # Input nodes are never mutated.
        self.assertTrue(all(node.x is None for node in nodes))

    def test_edges_to_unknown_nodes_are_ignored(self):
        nodes = make_nodes(2)
        edges = [Edge(source="n0", target="ghost", category=RelationshipCategory.OTHER)]

        with_ghost, _ = compute_layout(nodes, edges)
        without, _ = compute_layout(nodes, [])

        self.assertEqual([(n.x, n.y) for n in with_ghost], [(n.x, n.y) for n in without])

    def test_connected_nodes_end_closer_than_unconnected(self):
        nodes = make_nodes(4)
        edges = [Edge(source="n0", target="n1", category=RelationshipCategory.FAMILY)]

        placed, _ = compute_layout(nodes, edges)

        by_id = {node.id: node for node in placed}
        linked = math.hypot(by_id["n0"].x - by_id["n1"].x, by_id["n0"].y - by_id["n1"].y)
        unlinked = math.hypot(by_id["n2"].x - by_id["n3"].x, by_id["n2"].y - by_id["n3"].y)
        self.assertLess(linked, unlinked)


if __name__ == '__main__':
    unittest.main()
