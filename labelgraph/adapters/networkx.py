try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install labelgraph[networkx]"
    ) from e

import warnings

from ._base import GraphAdapter


def to_nx(graph: "Graph", label_attr: str = "label") -> "nx.DiGraph":
    """
    Export Graph -> networkx.DiGraph.

    Parameters
    ----------
    graph : Graph
        Source graph instance.
    label_attr : str, default "label"
        Node attribute that receives vertex labels. Unlabeled vertices get no
        attribute at all, so "no label" and "" stay distinguishable.

    Returns
    -------
    networkx.DiGraph
        One node per vertex and one edge per directed pair, both in the
        graph's insertion order.
    """
    nxG = nx.DiGraph()
    labels = graph.labels()
    for v in graph.vertices():
        if v in labels:
            nxG.add_node(v, **{label_attr: labels[v]})
        else:
            nxG.add_node(v)
    nxG.add_edges_from(graph.edges())
    return nxG


def from_nx(nxG, label_attr: str = "label") -> "Graph":
    """
    Build a Graph from any NetworkX graph.

    Parameters
    ----------
    nxG : networkx.Graph | networkx.DiGraph | networkx.MultiGraph | networkx.MultiDiGraph
    label_attr : str, default "label"
        Node attribute read as the vertex label. Other node and edge
        attributes are dropped.

    Returns
    -------
    Graph

    Notes
    -----
    - Undirected edges become a pair of opposite directed edges.
    - Parallel edges of multigraphs collapse into one edge (warns).
    - Non-string labels are skipped (warns).
    """
    from ..core.graph import Graph

    if nxG.is_multigraph():
        simple = nx.DiGraph(nxG) if nxG.is_directed() else nx.Graph(nxG)
        if simple.number_of_edges() < nxG.number_of_edges():
            warnings.warn(
                "Parallel edges collapsed: labelgraph keeps at most one edge per "
                "(source, destination) pair.",
                UserWarning,
                stacklevel=2,
            )

    H = Graph()
    skipped = []
    for v, data in nxG.nodes(data=True):
        label = data.get(label_attr)
        if label is None:
            H.add_vertex(v)
        elif isinstance(label, str):
            H.add_vertex_with_label(v, label)
        else:
            H.add_vertex(v)
            skipped.append(v)
    if skipped:
        warnings.warn(
            f"Ignored non-string '{label_attr}' attribute on {len(skipped)} node(s): "
            f"{skipped[:5]!r}",
            UserWarning,
            stacklevel=2,
        )

    undirected = not nxG.is_directed()
    for u, v in nxG.edges():
        H.add_edge(u, v)
        if undirected:
            H.add_edge(v, u)
    return H


def to_backend(graph, **kwargs):
    """
    Backend hook used by :mod:`labelgraph.adapters.manager`.

    Parameters
    ----------
    graph : Graph
    **kwargs
        Forwarded to :func:`to_nx` (``label_attr``).

    Returns
    -------
    networkx.DiGraph
    """
    return to_nx(graph, **kwargs)


class NetworkXAdapter(GraphAdapter):
    name = "networkx"

    def export(self, graph, **kwargs):
        return to_nx(graph, **kwargs)

    def load(self, obj, **kwargs):
        return from_nx(obj, **kwargs)
