import unittest

from labelgraph.core.errors import GraphError, NoSuchEdge, NoSuchVertex
from labelgraph.core.graph import Graph


class TestVertices(unittest.TestCase):
    def setUp(self):
        self.G = Graph()

    def test_empty_graph(self):
        self.assertEqual(self.G.number_of_vertices(), 0)
        self.assertEqual(self.G.number_of_edges(), 0)
        self.assertEqual(self.G.vertices(), [])
        self.assertEqual(self.G.edges(), [])

    def test_add_vertex_reports_prior_presence(self):
        self.assertFalse(self.G.add_vertex(1))
        self.assertTrue(self.G.is_vertex_in_graph(1))
        self.assertEqual(self.G.number_of_vertices(), 1)

        self.assertTrue(self.G.add_vertex(1))
        self.assertEqual(self.G.number_of_vertices(), 1)

    def test_readd_keeps_label_and_edges(self):
        self.G.add_vertex_with_label("a", "A")
        self.G.add_vertex("b")
        self.G.add_edge("a", "b")

        self.assertTrue(self.G.add_vertex("a"))
        self.assertEqual(self.G.get_label("a"), "A")
        self.assertTrue(self.G.is_edge_in_graph("a", "b"))

    def test_add_vertex_with_label_overwrites(self):
        self.assertFalse(self.G.add_vertex_with_label(1, "first"))
        self.assertTrue(self.G.add_vertex_with_label(1, "second"))
        self.assertEqual(self.G.get_label(1), "second")
        self.assertEqual(self.G.number_of_vertices(), 1)

    def test_add_vertex_with_label_on_existing_unlabelled(self):
        self.G.add_vertex(1)
        self.assertTrue(self.G.add_vertex_with_label(1, "x"))
        self.assertEqual(self.G.get_label(1), "x")

    def test_unhashable_key_rejected(self):
        with self.assertRaises(TypeError):
            self.G.add_vertex([1, 2])
        with self.assertRaises(TypeError):
            self.G.add_vertex(([1], 2))
        self.assertEqual(self.G.number_of_vertices(), 0)

    def test_membership_of_unhashable_is_false(self):
        self.assertFalse(self.G.is_vertex_in_graph({"a": 1}))
        self.assertFalse(self.G.is_edge_in_graph([1], 2))

    def test_tuple_keys(self):
        # e.g. (board, player) game states
        s0, s1 = ("....", "x"), ("x...", "o")
        self.G.add_vertices([s0, s1])
        self.G.add_edge(s0, s1)
        self.assertEqual(list(self.G.out_neighbours(s0)), [s1])

    def test_add_vertices_returns_flags(self):
        self.assertEqual(self.G.add_vertices([1, 2, 1]), [False, False, True])
        self.assertEqual(self.G.vertices(), [1, 2])

    def test_remove_absent_vertex(self):
        with self.assertRaises(NoSuchVertex) as ctx:
            self.G.remove_vertex(7)
        self.assertEqual(ctx.exception.key, 7)
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIsInstance(ctx.exception, GraphError)

    def test_protocols(self):
        self.G.add_vertices(["x", "y"])
        self.assertEqual(len(self.G), 2)
        self.assertIn("x", self.G)
        self.assertNotIn("z", self.G)
        self.assertEqual(list(self.G), ["x", "y"])
        self.assertEqual(repr(self.G), "Graph(vertices=2, edges=0)")

    def test_aliases(self):
        self.G.add_vertices([1, 2])
        self.G.add_edge(1, 2)
        self.assertEqual(self.G.vertex_count(), 2)
        self.assertEqual(self.G.edge_count(), 1)
        self.assertEqual(self.G.num_vertices, 2)
        self.assertEqual(self.G.num_edges, 1)
        self.assertTrue(self.G.has_vertex(1))
        self.assertTrue(self.G.has_edge(1, 2))
        self.assertEqual(self.G.V, (1, 2))
        self.assertEqual(self.G.E, ((1, 2),))


class TestEdges(unittest.TestCase):
    def setUp(self):
        self.G = Graph()
        self.G.add_vertices([1, 2, 3])

    def test_add_edge_visible_everywhere(self):
        self.assertFalse(self.G.add_edge(1, 2))
        self.assertTrue(self.G.is_edge_in_graph(1, 2))
        self.assertFalse(self.G.is_edge_in_graph(2, 1))
        self.assertIn(2, self.G.out_neighbours(1))
        self.assertIn(1, self.G.in_neighbours(2))

    def test_add_edge_missing_endpoints(self):
        for u, v, missing in [(1, 9, 9), (9, 1, 9), (8, 9, 8)]:
            with self.subTest(edge=(u, v)):
                with self.assertRaises(NoSuchVertex) as ctx:
                    self.G.add_edge(u, v)
                self.assertEqual(ctx.exception.key, missing)
        self.assertEqual(self.G.number_of_edges(), 0)
        self.assertEqual(self.G.number_of_vertices(), 3)

    def test_duplicate_edge_is_noop(self):
        self.G.add_edge(1, 2)
        version = self.G.version
        self.assertTrue(self.G.add_edge(1, 2))
        self.assertEqual(self.G.number_of_edges(), 1)
        self.assertEqual(list(self.G.out_neighbours(1)), [2])
        self.assertEqual(list(self.G.in_neighbours(2)), [1])
        self.assertEqual(self.G.version, version)

    def test_self_loop(self):
        self.G.add_edge(3, 3)
        self.assertTrue(self.G.is_edge_in_graph(3, 3))
        self.assertEqual(list(self.G.out_neighbours(3)), [3])
        self.assertEqual(list(self.G.in_neighbours(3)), [3])
        self.assertEqual(self.G.degree(3), 2)

    def test_remove_edge_prunes_indices(self):
        self.G.add_edge(1, 2)
        self.G.add_edge(1, 3)
        self.G.remove_edge(1, 2)

        self.assertFalse(self.G.is_edge_in_graph(1, 2))
        self.assertEqual(list(self.G.out_neighbours(1)), [3])
        self.assertEqual(list(self.G.in_neighbours(2)), [])
        self.assertEqual(self.G.number_of_edges(), 1)
        # endpoints survive
        self.assertTrue(self.G.is_vertex_in_graph(2))

    def test_remove_then_readd_edge(self):
        self.G.add_edge(1, 2)
        self.G.add_edge(1, 3)
        self.G.remove_edge(1, 2)
        self.assertFalse(self.G.add_edge(1, 2))
        self.assertEqual(list(self.G.out_neighbours(1)), [3, 2])

    def test_remove_absent_edge(self):
        self.G.add_edge(1, 2)
        with self.assertRaises(NoSuchEdge) as ctx:
            self.G.remove_edge(2, 1)
        self.assertEqual((ctx.exception.source, ctx.exception.destination), (2, 1))
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertTrue(self.G.is_edge_in_graph(1, 2))

    def test_remove_edge_between_unknown_vertices(self):
        with self.assertRaises(NoSuchEdge):
            self.G.remove_edge(8, 9)

    def test_add_edges_is_all_or_nothing(self):
        with self.assertRaises(NoSuchVertex):
            self.G.add_edges([(1, 2), (2, 42)])
        self.assertEqual(self.G.number_of_edges(), 0)

    def test_add_edges_rejects_non_pairs(self):
        with self.assertRaises(ValueError):
            self.G.add_edges([(1, 2, 3)])

    def test_add_edges_flags(self):
        self.assertEqual(self.G.add_edges([(1, 2), (2, 3), (1, 2)]), [False, False, True])
        self.assertEqual(self.G.edges(), [(1, 2), (2, 3)])

    def test_degrees(self):
        self.G.add_edges([(1, 2), (1, 3), (2, 3)])
        self.assertEqual(self.G.out_degree(1), 2)
        self.assertEqual(self.G.in_degree(3), 2)
        self.assertEqual(self.G.degree(2), 2)
        self.assertEqual(self.G.degree("unknown"), 0)


class TestRemoveVertex(unittest.TestCase):
    def test_cascade_both_directions(self):
        G = Graph()
        G.add_vertices(["a", "b", "c", "d"])
        G.add_edges([("a", "b"), ("c", "a"), ("b", "c"), ("a", "d"), ("d", "a")])
        G.set_label("a", "hub")

        G.remove_vertex("a")

        self.assertFalse(G.is_vertex_in_graph("a"))
        self.assertIsNone(G.get_label("a"))
        self.assertEqual(G.edges(), [("b", "c")])
        for v in ("b", "c", "d"):
            self.assertNotIn("a", G.out_neighbours(v))
            self.assertNotIn("a", G.in_neighbours(v))
        self.assertEqual(list(G.out_neighbours("a")), [])
        self.assertEqual(list(G.in_neighbours("a")), [])

    def test_removed_vertex_can_come_back_clean(self):
        G = Graph()
        G.add_vertex_with_label(1, "one")
        G.add_vertex(2)
        G.add_edge(1, 2)
        G.remove_vertex(1)

        self.assertFalse(G.add_vertex(1))
        self.assertIsNone(G.get_label(1))
        self.assertEqual(G.degree(1), 0)

    def test_indices_match_edges_after_removals(self):
        G = Graph()
        G.add_vertices(range(6))
        G.add_edges([(i, j) for i in range(6) for j in range(6) if (i + j) % 2])
        G.add_edge(4, 4)
        G.remove_vertex(3)
        G.remove_edge(0, 1)
        G.remove_vertex(4)

        from_out = {(u, v) for u in G.vertices() for v in G.out_neighbours(u)}
        from_in = {(u, v) for v in G.vertices() for u in G.in_neighbours(v)}
        self.assertEqual(from_out, set(G.edges()))
        self.assertEqual(from_in, set(G.edges()))
        self.assertEqual(G._outbound.keys() & {3, 4}, set())
        self.assertEqual(G._inbound.keys() & {3, 4}, set())


class TestLabels(unittest.TestCase):
    def setUp(self):
        self.G = Graph()

    def test_get_label_never_raises(self):
        self.assertIsNone(self.G.get_label("ghost"))
        self.assertIsNone(self.G.get_label(["unhashable"]))
        self.G.add_vertex("plain")
        self.assertIsNone(self.G.get_label("plain"))

    def test_empty_string_is_a_label(self):
        self.G.add_vertex_with_label(1, "")
        self.assertEqual(self.G.get_label(1), "")
        self.assertEqual(self.G.labels(), {1: ""})

    def test_set_label(self):
        self.G.add_vertex(1)
        self.G.set_label(1, "a")
        self.G.set_label(1, "b")
        self.assertEqual(self.G.get_label(1), "b")

    def test_set_label_absent_vertex(self):
        with self.assertRaises(NoSuchVertex):
            self.G.set_label(1, "a")
        self.assertFalse(self.G.is_vertex_in_graph(1))
        self.assertIsNone(self.G.get_label(1))

    def test_labels_must_be_strings(self):
        self.G.add_vertex(1)
        with self.assertRaises(TypeError):
            self.G.set_label(1, 5)
        with self.assertRaises(TypeError):
            self.G.add_vertex_with_label(2, None)
        self.assertFalse(self.G.is_vertex_in_graph(2))

    def test_labels_is_a_copy(self):
        self.G.add_vertex_with_label(1, "a")
        self.G.labels()[1] = "tampered"
        self.assertEqual(self.G.get_label(1), "a")


class TestScenarios(unittest.TestCase):
    def test_fan_out_then_remove_source(self):
        G = Graph()
        for v in (1, 2, 3):
            G.add_vertex(v)
        self.assertEqual(G.number_of_vertices(), 3)

        G.add_edge(1, 2)
        G.add_edge(1, 3)
        self.assertEqual(list(G.out_neighbours(1)), [2, 3])
        self.assertEqual(G.number_of_edges(), 2)

        G.remove_vertex(1)
        self.assertEqual(G.number_of_edges(), 0)
        self.assertFalse(G.is_vertex_in_graph(1))

    def test_labels_and_removal(self):
        G = Graph()
        G.add_vertex_with_label(1, "A")
        G.add_vertex_with_label(2, "B")
        G.add_vertex(3)
        self.assertEqual(G.get_label(1), "A")
        self.assertIsNone(G.get_label(3))

        G.remove_vertex(2)
        self.assertIsNone(G.get_label(2))

    def test_self_loop_removed_with_vertex(self):
        G = Graph()
        G.add_vertex(2)
        G.add_vertex(3)
        G.add_edge(3, 3)
        G.add_edge(2, 3)

        G.remove_vertex(3)
        self.assertFalse(G.is_edge_in_graph(3, 3))
        self.assertFalse(G.is_edge_in_graph(2, 3))
        self.assertEqual(G.number_of_edges(), 0)
        self.assertEqual(list(G.out_neighbours(2)), [])


class TestDerivedGraphs(unittest.TestCase):
    def setUp(self):
        G = Graph()
        G.add_vertex_with_label("a", "A")
        G.add_vertices(["b", "c"])
        G.add_edges([("a", "b"), ("b", "c"), ("c", "a"), ("c", "c")])
        self.G = G

    def test_copy_is_independent(self):
        H = self.G.copy()
        self.assertEqual(H.history(), [])
        H.remove_vertex("a")
        H.set_label("b", "B")
        self.assertTrue(self.G.is_vertex_in_graph("a"))
        self.assertIsNone(self.G.get_label("b"))
        self.assertEqual(self.G.edges(), [("a", "b"), ("b", "c"), ("c", "a"), ("c", "c")])

    def test_reverse(self):
        R = self.G.reverse()
        self.assertEqual(R.edges(), [("b", "a"), ("c", "b"), ("a", "c"), ("c", "c")])
        self.assertEqual(list(R.out_neighbours("b")), ["a"])
        self.assertEqual(R.get_label("a"), "A")

    def test_subgraph(self):
        S = self.G.subgraph(["c", "a", "c"])
        self.assertEqual(S.vertices(), ["c", "a"])
        self.assertEqual(S.edges(), [("c", "a"), ("c", "c")])
        self.assertEqual(S.labels(), {"a": "A"})

    def test_subgraph_unknown_vertex(self):
        with self.assertRaises(NoSuchVertex):
            self.G.subgraph(["a", "zzz"])

    def test_subgraph_unhashable_key(self):
        with self.assertRaises(NoSuchVertex):
            self.G.subgraph([["a"]])


if __name__ == "__main__":
    unittest.main()
