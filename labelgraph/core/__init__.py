from .errors import GraphError, NoSuchEdge, NoSuchVertex
from .graph import Graph
from .views import NeighbourView

__all__ = ["Graph", "GraphError", "NoSuchEdge", "NoSuchVertex", "NeighbourView"]
