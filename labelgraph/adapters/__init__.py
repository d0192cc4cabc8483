from ._base import GraphAdapter
from .manager import available_backends, ensure_materialized, get_adapter

__all__ = ["GraphAdapter", "available_backends", "ensure_materialized", "get_adapter"]
