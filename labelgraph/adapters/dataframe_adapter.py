from __future__ import annotations

from typing import Dict, Optional

import polars as pl

from ..core.graph import Graph

_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def _key_dtype(keys) -> pl.DataType:
    # Utf8/Int64 when the keys allow it, otherwise keep the Python objects.
    if all(isinstance(k, str) for k in keys):
        return pl.Utf8
    if all(isinstance(k, int) and not isinstance(k, bool) and _INT64_MIN <= k <= _INT64_MAX
           for k in keys):
        return pl.Int64
    return pl.Object


def vertices_frame(graph: "Graph") -> pl.DataFrame:
    """Vertex table: ``vertex_id`` and nullable ``label``, in insertion order."""
    keys = graph.vertices()
    labels = graph.labels()
    return pl.DataFrame([
        pl.Series("vertex_id", keys, dtype=_key_dtype(keys)),
        pl.Series("label", [labels.get(k) for k in keys], dtype=pl.Utf8),
    ])


def edges_frame(graph: "Graph") -> pl.DataFrame:
    """Edge table: ``source`` and ``target``, in insertion order."""
    # dtype follows all vertices so both tables agree on key columns
    dtype = _key_dtype(graph.vertices())
    edges = graph.edges()
    return pl.DataFrame([
        pl.Series("source", [u for u, _ in edges], dtype=dtype),
        pl.Series("target", [v for _, v in edges], dtype=dtype),
    ])


def to_dataframes(graph: "Graph") -> Dict[str, pl.DataFrame]:
    """
    Export graph to Polars DataFrames.

    Returns a dictionary with two tables:
    - 'vertices': ``vertex_id`` plus ``label`` (null for unlabeled vertices)
    - 'edges': ``source`` and ``target``

    Key columns are Utf8 when every key is a string, Int64 when every key is
    an integer, and Polars ``Object`` otherwise.

    Args:
        graph: Graph instance to export

    Returns:
        Dictionary mapping table names to Polars DataFrames
    """
    return {
        "vertices": vertices_frame(graph),
        "edges": edges_frame(graph),
    }


def from_dataframes(
    vertices: Optional[pl.DataFrame] = None,
    edges: Optional[pl.DataFrame] = None,
    *,
    add_missing_vertices: bool = False,
) -> "Graph":
    """
    Import graph from Polars DataFrames.

    Accepts DataFrames in the format produced by to_dataframes():

    Vertices DataFrame (optional):
        - Required: vertex_id
        - Optional: label (null = unlabeled)

    Edges DataFrame (optional):
        - Required: source, target

    Args:
        vertices: DataFrame with vertex_id and optional label
        edges: DataFrame with directed edges
        add_missing_vertices: Create unlabeled vertices for edge endpoints
            missing from the vertices table instead of failing

    Returns:
        Graph instance

    Raises:
        ValueError: a required column is missing
        NoSuchVertex: an edge endpoint is unknown and add_missing_vertices is False
    """
    G = Graph()

    if vertices is not None and vertices.height > 0:
        if "vertex_id" not in vertices.columns:
            raise ValueError("vertices DataFrame must have 'vertex_id' column")
        keys = vertices["vertex_id"].to_list()
        if "label" in vertices.columns:
            labels = vertices["label"].to_list()
        else:
            labels = [None] * len(keys)
        for key, label in zip(keys, labels):
            if label is None:
                G.add_vertex(key)
            else:
                G.add_vertex_with_label(key, label)

    if edges is not None and edges.height > 0:
        missing = [c for c in ("source", "target") if c not in edges.columns]
        if missing:
            raise ValueError(f"edges DataFrame must have {missing} column(s)")
        pairs = list(zip(edges["source"].to_list(), edges["target"].to_list()))
        if add_missing_vertices:
            for u, v in pairs:
                G.add_vertex(u)
                G.add_vertex(v)
        G.add_edges(pairs)

    return G
