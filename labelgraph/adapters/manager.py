from __future__ import annotations

from importlib import import_module, util
from typing import TYPE_CHECKING

from ..utils.validation import is_hashable
from ._base import GraphAdapter

if TYPE_CHECKING:
    from ..core.graph import Graph

__all__ = [
    'available_backends',
    'ensure_materialized',
    'get_adapter',
]

# ---------------------------------------------------------------------------
# 1. Central registry --------------------------------------------------------
# ---------------------------------------------------------------------------
# name -> (import name of the backend library, adapter submodule, adapter class)
_BACKENDS = {
    "networkx": ("networkx", ".networkx", "NetworkXAdapter"),
}


def _is_installed(modname: str) -> bool:
    return util.find_spec(modname) is not None


def _adapter_module(name: str):
    if name not in _BACKENDS:
        raise ValueError(f"No adapter registered for '{name}'")
    modname, submod, _ = _BACKENDS[name]
    if not _is_installed(modname):
        raise ModuleNotFoundError(
            f"Optional backend '{name}' is not installed. "
            f"Install with `pip install labelgraph[{name}]`."
        )
    return import_module(submod, package=__package__)

# ---------------------------------------------------------------------------
# 2. Public helpers ----------------------------------------------------------
# ---------------------------------------------------------------------------
def available_backends() -> dict:
    """Map each registered backend name to whether its library is importable."""
    return {name: _is_installed(mod) for name, (mod, _, _) in _BACKENDS.items()}


def get_adapter(name: str) -> GraphAdapter:
    """Return a *new* adapter instance of the requested backend."""
    name = name.lower()
    mod = _adapter_module(name)
    return getattr(mod, _BACKENDS[name][2])()


def _options_key(kwargs: dict) -> tuple:
    # Conversion options become part of the cache key; unhashable values are keyed by repr.
    return tuple(sorted(
        (k, v if is_hashable(v) else repr(v)) for k, v in kwargs.items()
    ))


def ensure_materialized(backend_name: str, graph: "Graph", **kwargs) -> dict:
    """
    Convert (or re-convert) *graph* into the requested backend object and
    cache the result on the graph's private state object. Returns the cache
    entry: {"module": nx, "graph": nx.DiGraph, "version": int}

    Entries are cached per backend and per set of conversion options
    (*kwargs*, forwarded to the adapter's ``export``). The cached object is a
    snapshot: it is rebuilt only after the graph changed, and edits made to it
    never flow back into the graph.
    """
    backend_name = backend_name.lower()
    adapter = get_adapter(backend_name)
    cache = graph._state._backend_cache               # per-instance cache
    key = (backend_name, _options_key(kwargs))
    entry = cache.get(key)

    if entry is None or graph._state.dirty_since(entry["version"]):
        entry = cache[key] = {
            "module":  import_module(_BACKENDS[backend_name][0]),
            "graph":   adapter.export(graph, **kwargs),
            "version": graph._state.version,
        }

    return entry
