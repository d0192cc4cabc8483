from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from typing import Generic, TypeVar

from ..utils.validation import is_hashable

K = TypeVar("K", bound=Hashable)

_EMPTY: dict = {}


class NeighbourView(Generic[K]):
    """
    Live, read-only view of one vertex's neighbours in one direction.

    The view does not copy anything: it reads the graph's adjacency index
    every time it is iterated, so it always reflects the current graph and can
    be iterated any number of times. Neighbours are reported in the order the
    corresponding edges were added.

    Parameters
    ----------
    index : dict[K, dict[K, None]]
        The adjacency index (inbound or outbound) owned by the graph.
    key : K
        The vertex whose neighbours are viewed. Unknown keys give an empty view.
    direction : {"in", "out"}
        Only used for ``repr``.

    Notes
    -----
    As with ``dict`` views, mutating the graph while iterating raises
    ``RuntimeError``.
    """

    __slots__ = ("_index", "_key", "_direction")

    def __init__(self, index, key, direction):
        self._index = index
        self._key = key
        self._direction = direction

    def _entry(self):
        if not is_hashable(self._key):
            return _EMPTY
        return self._index.get(self._key, _EMPTY)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entry())

    def __len__(self) -> int:
        return len(self._entry())

    def __contains__(self, vertex) -> bool:
        return is_hashable(vertex) and vertex in self._entry()

    def __bool__(self) -> bool:
        return bool(self._entry())

    def __eq__(self, other):
        if isinstance(other, NeighbourView):
            return list(self) == list(other)
        if isinstance(other, Sequence) and not isinstance(other, str):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"NeighbourView({self._direction}, {self._key!r}: {list(self)!r})"
