import pytest

from labelgraph.core.graph import Graph


@pytest.fixture
def simple_graph():
    """Integer vertices 1..3 with edges 1->2, 1->3, 2->3."""
    G = Graph()
    G.add_vertices([1, 2, 3])
    G.add_edges([(1, 2), (1, 3), (2, 3)])
    return G


@pytest.fixture
def labelled_graph():
    """Game-state style graph: string keys, some labelled, with a self-loop."""
    G = Graph()
    G.add_vertex_with_label("start", "Start")
    G.add_vertex_with_label("mid", "")
    G.add_vertex("end")
    G.add_edge("start", "mid")
    G.add_edge("mid", "end")
    G.add_edge("end", "end")
    G.add_edge("mid", "start")
    return G
