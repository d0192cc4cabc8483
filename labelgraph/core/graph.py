from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, Optional, TypeVar

from ..utils.validation import check_key, check_label, is_hashable, unique_iter
from ._history import HistoryMixin, log_mutation
from ._state import _State
from .errors import NoSuchEdge, NoSuchVertex
from .views import NeighbourView

K = TypeVar("K", bound=Hashable)


class Graph(HistoryMixin, Generic[K]):
    """
    Directed graph with optional string labels on vertices.

    Vertices are arbitrary hashable keys; edges are ordered ``(source,
    destination)`` pairs, at most one per pair, self-loops allowed. The edge
    set is authoritative; inbound and outbound adjacency indices are derived
    from it and kept in step by every mutating method.

    Parameters
    ----------
    history : bool, optional
        Record successful mutations in the in-memory history (see
        :meth:`history`). Defaults to True.

    Notes
    -----
    - Vertex, edge and neighbour orders are insertion orders.
    - Failed operations raise :class:`NoSuchVertex` / :class:`NoSuchEdge` and
      leave the graph untouched.
    - Not thread-safe; callers sharing a graph across threads must lock around it.

    See Also
    --------
    add_vertex, add_edge, remove_vertex, out_neighbours, in_neighbours
    """

    # Construction

    def __init__(self, history=True):
        self._vertices: dict[K, None] = {}
        self._edges: dict[tuple[K, K], None] = {}
        self._labels: dict[K, str] = {}

        # Adjacency indices: vertex -> ordered set of neighbours.
        # Entries exist only for vertices with at least one edge in that direction.
        self._outbound: dict[K, dict[K, None]] = {}
        self._inbound: dict[K, dict[K, None]] = {}

        self._state = _State()
        self._init_history(history)

    @property
    def version(self) -> int:
        """Counter bumped by every change to vertices, edges or labels."""
        return self._state.version

    def __repr__(self):
        return f"Graph(vertices={len(self._vertices)}, edges={len(self._edges)})"

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, key):
        return self.is_vertex_in_graph(key)

    def __iter__(self) -> Iterator[K]:
        return iter(self._vertices)

    # Vertices

    @log_mutation
    def add_vertex(self, key: K) -> bool:
        """
        Add a vertex.

        Parameters
        ----------
        key : Hashable
            Vertex key.

        Returns
        -------
        bool
            True if the vertex was already present. Re-adding does not touch
            its label or edges.

        Raises
        ------
        TypeError
            If *key* is not hashable.
        """
        check_key(key)
        if key in self._vertices:
            return True
        self._vertices[key] = None
        self._state.bump()
        return False

    @log_mutation
    def add_vertex_with_label(self, key: K, label: str) -> bool:
        """
        Add a vertex (if absent) and set its label, overwriting any previous one.

        Returns
        -------
        bool
            True if the vertex was already present.

        Raises
        ------
        TypeError
            If *key* is not hashable or *label* is not a string.
        """
        check_key(key)
        check_label(label)
        existed = key in self._vertices
        if not existed:
            self._vertices[key] = None
        self._labels[key] = label
        self._state.bump()
        return existed

    def add_vertices(self, keys: Iterable[K]) -> list[bool]:
        """
        Add several vertices.

        Returns
        -------
        list[bool]
            Prior presence of each key, in input order.
        """
        return [self.add_vertex(key) for key in keys]

    @log_mutation
    def remove_vertex(self, key: K) -> None:
        """
        Remove a vertex, its label and every edge touching it.

        Parameters
        ----------
        key : Hashable

        Raises
        ------
        NoSuchVertex
            If the vertex is not in the graph.

        Notes
        -----
        Both of the vertex's own index entries are discarded, and it is pruned
        from the entries of each neighbour. A self-loop is removed once.
        """
        if not self.is_vertex_in_graph(key):
            raise NoSuchVertex(key)

        for w in self._outbound.pop(key, {}):
            del self._edges[(key, w)]
            if w != key:
                self._discard(self._inbound, w, key)

        for w in self._inbound.pop(key, {}):
            if w == key:
                continue  # self-loop, dropped above
            del self._edges[(w, key)]
            self._discard(self._outbound, w, key)

        self._labels.pop(key, None)
        del self._vertices[key]
        self._state.bump()

    def number_of_vertices(self) -> int:
        """Number of vertices. O(1)."""
        return len(self._vertices)

    vertex_count = number_of_vertices

    def is_vertex_in_graph(self, key) -> bool:
        """True if *key* is a vertex. Unhashable keys are never vertices."""
        return is_hashable(key) and key in self._vertices

    has_vertex = is_vertex_in_graph

    def vertices(self) -> list[K]:
        """Vertex keys in insertion order."""
        return list(self._vertices)

    @property
    def V(self) -> tuple:
        """All vertices as a tuple."""
        return tuple(self._vertices)

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    # Edges

    @log_mutation
    def add_edge(self, source: K, destination: K) -> bool:
        """
        Add the directed edge ``source -> destination``.

        Parameters
        ----------
        source : Hashable
        destination : Hashable
            May equal *source* (self-loop).

        Returns
        -------
        bool
            True if the edge was already present, in which case nothing changes.

        Raises
        ------
        NoSuchVertex
            If either endpoint is missing (*source* is checked first).
        """
        if not self.is_vertex_in_graph(source):
            raise NoSuchVertex(source)
        if not self.is_vertex_in_graph(destination):
            raise NoSuchVertex(destination)

        pair = (source, destination)
        if pair in self._edges:
            return True
        self._edges[pair] = None
        self._outbound.setdefault(source, {})[destination] = None
        self._inbound.setdefault(destination, {})[source] = None
        self._state.bump()
        return False

    def add_edges(self, pairs: Iterable[tuple[K, K]]) -> list[bool]:
        """
        Add several edges.

        All endpoints are checked before the first edge is added, so a missing
        vertex leaves the graph unchanged.

        Returns
        -------
        list[bool]
            Prior presence of each edge, in input order.

        Raises
        ------
        NoSuchVertex
            If any endpoint is missing.
        """
        pairs = [tuple(p) for p in pairs]
        for pair in pairs:
            if len(pair) != 2:
                raise ValueError(f"Edges must be (source, destination) pairs, got {pair!r}")
            for endpoint in pair:
                if not self.is_vertex_in_graph(endpoint):
                    raise NoSuchVertex(endpoint)
        return [self.add_edge(u, v) for u, v in pairs]

    @log_mutation
    def remove_edge(self, source: K, destination: K) -> None:
        """
        Remove the directed edge ``source -> destination``.

        Raises
        ------
        NoSuchEdge
            If the edge is not in the graph.
        """
        if not self.is_edge_in_graph(source, destination):
            raise NoSuchEdge(source, destination)
        del self._edges[(source, destination)]
        self._discard(self._outbound, source, destination)
        self._discard(self._inbound, destination, source)
        self._state.bump()

    @staticmethod
    def _discard(index, owner, member):
        entry = index[owner]
        del entry[member]
        if not entry:
            del index[owner]

    def number_of_edges(self) -> int:
        """Number of edges. O(1)."""
        return len(self._edges)

    edge_count = number_of_edges

    def is_edge_in_graph(self, source, destination) -> bool:
        """True if the directed edge ``source -> destination`` exists."""
        pair = (source, destination)
        return is_hashable(pair) and pair in self._edges

    has_edge = is_edge_in_graph

    def edges(self) -> list[tuple[K, K]]:
        """Edges as ``(source, destination)`` pairs in insertion order."""
        return list(self._edges)

    @property
    def E(self) -> tuple:
        """All edges as a tuple of pairs."""
        return tuple(self._edges)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    # Labels

    def get_label(self, key) -> Optional[str]:
        """
        Label of a vertex.

        Returns
        -------
        str or None
            None when the vertex is unlabeled or not in the graph. The empty
            string is a real label.
        """
        if not is_hashable(key):
            return None
        return self._labels.get(key)

    @log_mutation
    def set_label(self, key: K, label: str) -> None:
        """
        Set or overwrite the label of an existing vertex.

        Raises
        ------
        NoSuchVertex
            If the vertex is not in the graph.
        TypeError
            If *label* is not a string.
        """
        if not self.is_vertex_in_graph(key):
            raise NoSuchVertex(key)
        check_label(label)
        self._labels[key] = label
        self._state.bump()

    def labels(self) -> dict[K, str]:
        """Copy of the ``{vertex: label}`` mapping for labelled vertices."""
        return dict(self._labels)

    # Adjacency

    def out_neighbours(self, key) -> NeighbourView[K]:
        """
        Vertices reachable from *key* through one outgoing edge.

        Returns
        -------
        NeighbourView
            Live, restartable view in edge insertion order; empty for unknown
            vertices or vertices without outgoing edges.
        """
        return NeighbourView(self._outbound, key, "out")

    def in_neighbours(self, key) -> NeighbourView[K]:
        """
        Vertices with an edge into *key*.

        Returns
        -------
        NeighbourView
            Live, restartable view in edge insertion order; empty for unknown
            vertices or vertices without incoming edges.
        """
        return NeighbourView(self._inbound, key, "in")

    successors = out_neighbors = out_neighbours
    predecessors = in_neighbors = in_neighbours

    def neighbours(self, key) -> Iterator[K]:
        """Out-neighbours followed by in-neighbours, each vertex reported once."""
        return unique_iter(
            [*self.out_neighbours(key), *self.in_neighbours(key)]
        )

    neighbors = neighbours

    def out_degree(self, key) -> int:
        return len(self.out_neighbours(key))

    def in_degree(self, key) -> int:
        return len(self.in_neighbours(key))

    def degree(self, key) -> int:
        """In-degree plus out-degree; a self-loop counts twice."""
        return self.in_degree(key) + self.out_degree(key)

    # Derived graphs

    def _empty_like(self) -> "Graph[K]":
        return type(self)(history=self._history_enabled)

    def _load(self, vertices, edges, labels):
        # Bulk fill bypassing the history hooks; callers guarantee consistency.
        for v in vertices:
            self._vertices[v] = None
        for v, label in labels.items():
            self._labels[v] = label
        for u, v in edges:
            self._edges[(u, v)] = None
            self._outbound.setdefault(u, {})[v] = None
            self._inbound.setdefault(v, {})[u] = None
        self._state.bump()
        return self

    def copy(self) -> "Graph[K]":
        """
        Independent copy with the same vertices, edges and labels.

        The copy starts with an empty history.
        """
        return self._empty_like()._load(self._vertices, self._edges, self._labels)

    def reverse(self) -> "Graph[K]":
        """New graph with every edge flipped. Labels are kept."""
        return self._empty_like()._load(
            self._vertices, ((v, u) for u, v in self._edges), self._labels
        )

    def subgraph(self, keys: Iterable[K]) -> "Graph[K]":
        """
        Induced subgraph on *keys*.

        Parameters
        ----------
        keys : Iterable
            Vertices to keep; duplicates are ignored.

        Returns
        -------
        Graph
            Vertices in the order given, the edges between them in the
            original order, and their labels.

        Raises
        ------
        NoSuchVertex
            If any key is not in the graph.
        """
        keys = list(keys)
        for key in keys:
            if not self.is_vertex_in_graph(key):
                raise NoSuchVertex(key)
        keep = list(unique_iter(keys))
        kept = set(keep)
        return self._empty_like()._load(
            keep,
            ((u, v) for u, v in self._edges if u in kept and v in kept),
            {v: label for v, label in self._labels.items() if v in kept},
        )

    # Tabular views

    def vertices_view(self):
        """
        Vertex table.

        Returns
        -------
        polars.DataFrame
            Columns ``vertex_id`` and ``label`` (null when unlabeled).
        """
        from ..adapters.dataframe_adapter import vertices_frame

        return vertices_frame(self)

    def edges_view(self):
        """
        Edge table.

        Returns
        -------
        polars.DataFrame
            Columns ``source`` and ``target``.
        """
        from ..adapters.dataframe_adapter import edges_frame

        return edges_frame(self)
