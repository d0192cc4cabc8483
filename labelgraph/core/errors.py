class GraphError(Exception):
    """Base class for errors raised by :class:`labelgraph.Graph`."""


class NoSuchVertex(GraphError, KeyError):
    """
    An operation required a vertex that is not in the graph.

    Attributes
    ----------
    key : Hashable
        The missing vertex key.
    """

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Vertex {self.key!r} not found"


class NoSuchEdge(GraphError, KeyError):
    """
    An operation required an edge that is not in the graph.

    Attributes
    ----------
    source : Hashable
    destination : Hashable
    """

    def __init__(self, source, destination):
        super().__init__((source, destination))
        self.source = source
        self.destination = destination

    def __str__(self):
        return f"Edge ({self.source!r}, {self.destination!r}) not found"
