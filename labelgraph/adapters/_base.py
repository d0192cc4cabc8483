from abc import ABC, abstractmethod
from typing import Any


class GraphAdapter(ABC):
    """Converts a :class:`labelgraph.Graph` to and from a backend object."""

    name: str = ""

    @abstractmethod
    def export(self, graph, **kwargs) -> Any:
        pass

    @abstractmethod
    def load(self, obj, **kwargs):
        pass
